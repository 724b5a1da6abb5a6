import logging

from .profile import CountyProfile, LAST_FIRST, FIRST_LAST
from .default import DEFAULT
from .levy import LEVY
from .charlotte import CHARLOTTE
from .lee import LEE

logger = logging.getLogger(__name__)

PROFILES = {profile.name: profile for profile in (DEFAULT, LEVY, CHARLOTTE, LEE)}


def _name_variations(county_name):
    name = county_name.strip()
    variations = [
        name.lower(),
        name.lower().replace(" ", ""),
        name.lower().replace(" ", "_"),
    ]
    if name.lower().endswith(" county"):
        variations.append(name.lower()[: -len(" county")].strip())
    return variations


def get_profile(county_name=None) -> CountyProfile:
    """Find the profile for a county name, falling back to the default profile"""
    if not county_name:
        return DEFAULT
    for variation in _name_variations(county_name):
        if variation in PROFILES:
            return PROFILES[variation]
        for profile in PROFILES.values():
            if variation in profile.aliases:
                return profile
    logger.warning(f"No county profile for '{county_name}', using default profile")
    return DEFAULT


__all__ = ["CountyProfile", "LAST_FIRST", "FIRST_LAST", "DEFAULT", "PROFILES", "get_profile"]
