"""Locating and reading the per-run input files in a working directory."""
import os
import re
import logging

from .counties import get_profile
from .errors import ExtractionError
from .utils import clean_text, read_json_optional

logger = logging.getLogger(__name__)

INPUT_HTML = "input.html"
ADDRESS_FILES = ["unnormalized_address.json", "address.json"]
SEED_FILES = ["property_seed.json", "parcel.json"]

OWNER_DATA_FILE = "owner_data.json"
UTILITIES_DATA_FILE = "utilities_data.json"
LAYOUT_DATA_FILE = "layout_data.json"
STRUCTURE_DATA_FILE = "structure_data.json"


def property_key(parcel_id):
    return f"property_{parcel_id}"


def read_input_html(workdir="."):
    path = os.path.join(workdir, INPUT_HTML)
    if not os.path.exists(path):
        raise ExtractionError(f"Input page not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _first_existing(workdir, filenames):
    for filename in filenames:
        data = read_json_optional(os.path.join(workdir, filename))
        if data is not None:
            return data
    return None


def read_unnormalized_address(workdir="."):
    return _first_existing(workdir, ADDRESS_FILES)


def read_seed(workdir="."):
    return _first_existing(workdir, SEED_FILES)


def seed_parcel_id(seed):
    if not isinstance(seed, dict):
        return None
    for key in ("parcel_id", "parcel_identifier", "request_identifier"):
        value = clean_text(str(seed.get(key) or ""))
        if value:
            return value
    return None


def normalize_parcel_id(value):
    return re.sub(r"[^A-Za-z0-9]", "", value or "").upper()


def resolve_parcel_id(seed, address, page_parcel_id=None):
    """Pick the run's parcel id: seed file, then address file, then the page itself.

    A seed id that disagrees with the id printed on the page means the page
    belongs to another parcel, which is fatal.
    """
    parcel_id = seed_parcel_id(seed)
    if parcel_id and page_parcel_id and normalize_parcel_id(parcel_id) != normalize_parcel_id(page_parcel_id):
        raise ExtractionError(
            f"Parcel ID mismatch: seed has {parcel_id}, page shows {page_parcel_id}",
            path="property.request_identifier",
        )
    if not parcel_id and isinstance(address, dict):
        parcel_id = clean_text(str(address.get("request_identifier") or "")) or None
    parcel_id = parcel_id or clean_text(page_parcel_id)
    if not parcel_id:
        raise ExtractionError("Could not determine the parcel id", path="property.request_identifier")
    return parcel_id


def county_from_address(address):
    if not isinstance(address, dict):
        return None
    return address.get("county_jurisdiction") or address.get("county_name")


def resolve_profile(workdir=".", county=None, settings=None):
    """County override, then PARCEL_COUNTY, then the address file's jurisdiction"""
    name = county or (settings.county if settings else None)
    if not name:
        name = county_from_address(read_unnormalized_address(workdir))
    profile = get_profile(name)
    logger.info(f"Using county profile '{profile.name}' for '{name}'")
    return profile


def read_sidecar(owners_dir, filename, parcel_id):
    """The entry for one parcel from an owners/*.json sidecar, or None"""
    data = read_json_optional(os.path.join(owners_dir, filename))
    if not isinstance(data, dict):
        return None
    return data.get(property_key(parcel_id))
