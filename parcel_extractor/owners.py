import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .counties import DEFAULT, CountyProfile
from .models import (
    COMPANY,
    PERSON,
    CanonicalCompany,
    CanonicalPerson,
    NameWarning,
    OwnerMention,
)
from .names import normalize_prefix, normalize_suffix
from .utils import clean_text, is_iso_date, title_case
from .validation import check_person_name

logger = logging.getLogger(__name__)

CURRENT = "current"

Mention = Union[OwnerMention, Dict[str, Any]]


def ordered_snapshot_keys(owners_by_date: Dict[str, Any]) -> List[str]:
    """'current' first, then historical dates ascending (source order if any key is not a date)"""
    if not owners_by_date:
        return []
    keys = [CURRENT] if CURRENT in owners_by_date else []
    historical = [k for k in owners_by_date if k != CURRENT]
    if all(is_iso_date(k) for k in historical):
        historical = sorted(historical)
    return keys + historical


class OwnerRegistry:
    """Canonical persons and companies for a single extraction run.

    Persons are the same when first and last name match case-insensitively.
    Companies are the same when their trimmed names match case-insensitively.
    Records keep first-seen order, which fixes their person_<n> and
    company_<n> file numbers.
    """

    def __init__(self, profile: CountyProfile = DEFAULT):
        self.profile = profile
        self.persons: List[CanonicalPerson] = []
        self.companies: List[CanonicalCompany] = []
        self.warnings: List[NameWarning] = []
        self._person_index: Dict[Tuple[str, str], int] = {}
        self._company_index: Dict[str, int] = {}

    @staticmethod
    def person_ref(number):
        return f"./person_{number}.json"

    @staticmethod
    def company_ref(number):
        return f"./company_{number}.json"

    def register(self, mention: Mention) -> Optional[str]:
        """Add a mention (or merge it into an existing record) and return its file ref"""
        if isinstance(mention, dict):
            mention = OwnerMention.from_dict(mention)
        if mention is None:
            return None
        if mention.type == COMPANY:
            return self._register_company(mention)
        if mention.type == PERSON:
            return self._register_person(mention)
        return None

    def register_all(self, mentions: Iterable[Mention]) -> List[str]:
        refs = []
        for mention in mentions or []:
            ref = self.register(mention)
            if ref:
                refs.append(ref)
        return refs

    def register_snapshots(self, owners_by_date: Dict[str, List[Mention]]):
        for key in ordered_snapshot_keys(owners_by_date):
            self.register_all(owners_by_date.get(key) or [])

    def _register_person(self, mention: OwnerMention) -> Optional[str]:
        first = title_case(clean_text(mention.first_name))
        last = title_case(clean_text(mention.last_name))
        middle = title_case(clean_text(mention.middle_name)) or None
        if not first or not last:
            warning = NameWarning(
                code="incomplete_person_record",
                message=f"Skipping person without first and last name: {mention.to_dict()}",
                value=mention.to_dict(),
            )
            logger.warning(warning.message)
            self.warnings.append(warning)
            return None

        key = (first.lower(), last.lower())
        if key in self._person_index:
            number = self._person_index[key]
            person = self.persons[number - 1]
            if person.middle_name is None and middle:
                person.middle_name = middle
            return self.person_ref(number)

        prefix, prefix_warning = normalize_prefix(mention.prefix_name)
        suffix, suffix_warning = normalize_suffix(mention.suffix_name)
        self.warnings.extend(w for w in (prefix_warning, suffix_warning) if w)

        person = CanonicalPerson(
            first_name=first,
            last_name=last,
            middle_name=middle,
            prefix_name=prefix,
            suffix_name=suffix,
        )
        self.warnings.extend(check_person_name(person.to_record()))
        self.persons.append(person)
        self._person_index[key] = len(self.persons)
        return self.person_ref(len(self.persons))

    def _register_company(self, mention: OwnerMention) -> Optional[str]:
        name = clean_text(mention.name)
        if not name:
            return None
        key = name.lower()
        if key not in self._company_index:
            self.companies.append(CanonicalCompany(name=name))
            self._company_index[key] = len(self.companies)
        return self.company_ref(self._company_index[key])

    def records(self):
        """(filename, record) pairs for every canonical owner"""
        for number, person in enumerate(self.persons, 1):
            yield f"person_{number}.json", person.to_record()
        for number, company in enumerate(self.companies, 1):
            yield f"company_{number}.json", company.to_record()
