"""Owner name handling shared by every county.

Free text owner listings are tokenized, classified as company or person and
turned into structured person names. County drift (extra company keywords,
name order, how far a surname carries across ``&``) comes from the
:class:`~parcel_extractor.counties.CountyProfile` passed in.
"""
import re
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

from .counties import DEFAULT, CountyProfile, LAST_FIRST
from .models import (
    AMBIGUOUS_PERSON_NAME,
    COMPANY,
    PERSON,
    InvalidOwner,
    NameWarning,
    OwnerMention,
)
from .utils import clean_text, title_case

logger = logging.getLogger(__name__)

# Entity roles used by the keyword table
BUSINESS = "business"
TRUST = "trust"
ESTATE = "estate"
FINANCIAL = "financial"
ASSOCIATION = "association"
NONPROFIT = "nonprofit"
GOVERNMENT = "government"

BASE_COMPANY_KEYWORDS: Dict[str, str] = {
    "LLC": BUSINESS,
    "L.L.C.": BUSINESS,
    "L.L.C": BUSINESS,
    "INC": BUSINESS,
    "INCORPORATED": BUSINESS,
    "CORP": BUSINESS,
    "CORPORATION": BUSINESS,
    "LTD": BUSINESS,
    "LIMITED": BUSINESS,
    "COMPANY": BUSINESS,
    "LLP": BUSINESS,
    "PLLC": BUSINESS,
    "PARTNERSHIP": BUSINESS,
    "TRUST": TRUST,
    "TRUSTS": TRUST,
    "TRUSTEE": TRUST,
    "TRUSTEES": TRUST,
    "ESTATE": ESTATE,
    "ESTATE OF": ESTATE,
    "BANK": FINANCIAL,
    "N.A.": FINANCIAL,
    "MORTGAGE": FINANCIAL,
    "CREDIT UNION": FINANCIAL,
    "ASSOCIATION": ASSOCIATION,
    "ASSN": ASSOCIATION,
    "CONDOMINIUM": ASSOCIATION,
    "CHURCH": NONPROFIT,
    "MINISTRIES": NONPROFIT,
    "STATE OF": GOVERNMENT,
    "CITY OF": GOVERNMENT,
    "COUNTY OF": GOVERNMENT,
    "BOARD OF": GOVERNMENT,
}

BASE_SUFFIX_TOKENS = frozenset(
    ["JR", "SR", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X", "MD", "PHD", "ESQ", "ESQUIRE"]
)

PREFIX_NAMES = (
    "Mr.", "Mrs.", "Ms.", "Miss", "Mx.", "Dr.", "Prof.", "Rev.", "Fr.", "Sr.", "Br.",
    "Capt.", "Col.", "Maj.", "Lt.", "Sgt.", "Hon.", "Judge", "Rabbi", "Imam", "Sheikh",
    "Sir", "Dame",
)

SUFFIX_NAMES = (
    "Jr.", "Sr.", "II", "III", "IV", "PhD", "MD", "Esq.", "JD", "LLM", "MBA", "RN",
    "DDS", "DVM", "CFA", "CPA", "PE", "PMP", "Emeritus", "Ret.",
)


class KeywordTable:
    """Keyword -> entity role lookup matched on letter boundaries"""

    def __init__(self, roles: Dict[str, str]):
        self.roles = {self._normalize(k): v for k, v in roles.items()}
        alternation = "|".join(
            re.escape(keyword) for keyword in sorted(self.roles, key=len, reverse=True)
        )
        self.pattern = re.compile(rf"(?<![A-Za-z])(?:{alternation})(?![A-Za-z])", re.IGNORECASE)

    @staticmethod
    def _normalize(keyword):
        return re.sub(r"\s+", " ", keyword).strip().upper()

    def match(self, text) -> Optional[str]:
        found = self.pattern.search(clean_text(text))
        if not found:
            return None
        return self.roles.get(self._normalize(found.group(0)))


@lru_cache(maxsize=None)
def keyword_table(profile: CountyProfile) -> KeywordTable:
    roles = dict(BASE_COMPANY_KEYWORDS)
    roles.update({k.upper(): v for k, v in profile.company_keywords.items()})
    return KeywordTable(roles)


@lru_cache(maxsize=None)
def suffix_tokens(profile: CountyProfile) -> frozenset:
    return BASE_SUFFIX_TOKENS | frozenset(t.upper().rstrip(".") for t in profile.suffix_tokens)


def tokenize_name(raw) -> List[str]:
    """Split a raw name fragment into cleaned tokens"""
    if not raw:
        return []
    text = re.sub(r"^\s*\*+", "", str(raw))
    text = re.sub(r"[^A-Za-z&'\-\s.]", " ", text)
    text = re.sub(r"\s+", " ", text).strip()
    return text.split(" ") if text else []


def company_role(text, profile: CountyProfile = DEFAULT) -> Optional[str]:
    if not text:
        return None
    return keyword_table(profile).match(text)


def classify_name(text, profile: CountyProfile = DEFAULT) -> str:
    return COMPANY if company_role(text, profile) else PERSON


def is_suffix_token(token, profile: CountyProfile = DEFAULT) -> bool:
    return token.upper().rstrip(".") in suffix_tokens(profile)


def _join_title(tokens) -> Optional[str]:
    value = " ".join(title_case(t) for t in tokens if t)
    return value or None


def build_person(
    tokens: Sequence[str],
    profile: CountyProfile = DEFAULT,
    fallback_last_name: Optional[str] = None,
) -> Optional[OwnerMention]:
    """Build a person from ordered name tokens.

    With ``fallback_last_name`` every token is a given name (FIRST [MIDDLE])
    and the surname is inherited. Otherwise positions follow the profile's
    name order: LAST FIRST [MIDDLE...] or FIRST [MIDDLE...] LAST.
    Returns None when the tokens cannot make a person.
    """
    tokens = [t for t in (tokens or []) if t]
    if not tokens:
        return None

    if fallback_last_name:
        first, middle, last = tokens[0], tokens[1:], fallback_last_name
    else:
        # A suffix is never the first or last name
        while tokens and is_suffix_token(tokens[-1], profile):
            tokens = tokens[:-1]
        if len(tokens) < 2:
            return None
        if profile.name_order == LAST_FIRST:
            last, first, middle = tokens[0], tokens[1], tokens[2:]
        else:
            first, middle, last = tokens[0], tokens[1:-1], tokens[-1]

    middle = [t for t in middle if not is_suffix_token(t, profile)]
    return OwnerMention(
        type=PERSON,
        first_name=title_case(first),
        middle_name=_join_title(middle),
        last_name=title_case(last),
    )


def split_shared_surname(tokens: Sequence[str], profile: CountyProfile = DEFAULT) -> List[OwnerMention]:
    """LAST FIRST1 [MIDDLE1] FIRST2 [MIDDLE2] ... -> one person per given-name pair"""
    if len(tokens) < 4:
        return []
    surname = tokens[0]
    rest = [t for t in tokens[1:] if not is_suffix_token(t, profile)]
    if len(rest) < 3:
        return []
    people = []
    for i in range(0, len(rest), 2):
        person = build_person([surname] + rest[i:i + 2], profile)
        if person:
            people.append(person)
    return people


def _normalize_enum(value, allowed, field_name, code) -> Tuple[Optional[str], Optional[NameWarning]]:
    if value is None or not str(value).strip():
        return None, None
    candidate = str(value).strip().lower()
    for option in allowed:
        option_lower = option.lower()
        if candidate == option_lower or candidate.rstrip(".") == option_lower.rstrip("."):
            return option, None
    warning = NameWarning(
        code=code,
        field=field_name,
        value=value,
        message=f"{field_name} '{value}' is not a recognised value, using null",
    )
    logger.warning(warning.message)
    return None, warning


def normalize_prefix(value):
    """Validate a structured prefix against the closed title list"""
    return _normalize_enum(value, PREFIX_NAMES, "prefix_name", "invalid_prefix")


def normalize_suffix(value):
    """Validate a structured suffix against the closed suffix list"""
    return _normalize_enum(value, SUFFIX_NAMES, "suffix_name", "invalid_suffix")


@dataclass
class ParsedOwners:
    owners: List[OwnerMention] = field(default_factory=list)
    invalid: List[InvalidOwner] = field(default_factory=list)


def _company(text, profile):
    name = clean_text(text)
    if profile.company_name_case == "title":
        name = title_case(name)
    return OwnerMention(type=COMPANY, name=name)


def parse_owner_text(text, profile: CountyProfile = DEFAULT) -> ParsedOwners:
    """Parse a free text owner listing such as 'SMITH JOHN & MARY, ACME LLC'"""
    result = ParsedOwners()
    text = clean_text(text)
    if not text:
        return result

    found = []
    for segment in re.split(r"\s*,\s*", text):
        segment = re.sub(r"^\*+", "", segment).strip()
        if not segment:
            continue
        if classify_name(segment, profile) == COMPANY:
            found.append(_company(segment, profile))
            continue

        parts = [p.strip() for p in re.split(r"\s*&\s*|\s+and\s+", segment, flags=re.IGNORECASE) if p.strip()]
        segment_surname = None
        for idx, part in enumerate(parts):
            if classify_name(part, profile) == COMPANY:
                found.append(_company(part, profile))
                continue
            tokens = tokenize_name(part)
            if not tokens:
                continue

            if (
                len(parts) == 1
                and len(tokens) >= 4
                and profile.split_shared_surname
                and profile.name_order == LAST_FIRST
            ):
                people = split_shared_surname(tokens, profile)
                if len(people) >= 2:
                    found.extend(people)
                    segment_surname = people[0].last_name
                    continue

            if idx > 0 and segment_surname and len(tokens) <= profile.inherit_surname_max_tokens:
                person = build_person(tokens, profile, fallback_last_name=segment_surname)
            else:
                person = build_person(tokens, profile)

            if person:
                found.append(person)
                segment_surname = person.last_name
            else:
                logger.info(f"Could not build a person from '{part}'")
                result.invalid.append(InvalidOwner(raw=part, reason=AMBIGUOUS_PERSON_NAME))

    seen = set()
    for owner in found:
        key = owner.text_key()
        if key in seen:
            continue
        seen.add(key)
        result.owners.append(owner)
    return result
