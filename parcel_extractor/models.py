from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

PERSON = "person"
COMPANY = "company"

AMBIGUOUS_PERSON_NAME = "ambiguous_or_incomplete_person_name"


@dataclass
class OwnerMention:
    """One owner as listed on a page or under an owners_by_date key"""
    type: str
    name: Optional[str] = None
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    prefix_name: Optional[str] = None
    suffix_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["OwnerMention"]:
        if not isinstance(data, dict):
            return None
        owner_type = data.get("type")
        if owner_type == COMPANY:
            return cls(type=COMPANY, name=_str_or_none(data.get("name")))
        if owner_type == PERSON:
            return cls(
                type=PERSON,
                first_name=_str_or_none(data.get("first_name")),
                middle_name=_str_or_none(data.get("middle_name")),
                last_name=_str_or_none(data.get("last_name")),
                prefix_name=_str_or_none(data.get("prefix_name")),
                suffix_name=_str_or_none(data.get("suffix_name")),
            )
        return None

    def to_dict(self) -> Dict[str, Any]:
        if self.type == COMPANY:
            return {"type": COMPANY, "name": self.name}
        record = {
            "type": PERSON,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "middle_name": self.middle_name,
        }
        if self.prefix_name:
            record["prefix_name"] = self.prefix_name
        if self.suffix_name:
            record["suffix_name"] = self.suffix_name
        return record

    def text_key(self):
        """Full-name key used to drop repeats inside a single owner listing"""
        if self.type == COMPANY:
            return (COMPANY, (self.name or "").strip().lower())
        return (
            PERSON,
            (self.first_name or "").lower(),
            (self.middle_name or "").lower(),
            (self.last_name or "").lower(),
        )


@dataclass
class CanonicalPerson:
    first_name: str
    last_name: str
    middle_name: Optional[str] = None
    prefix_name: Optional[str] = None
    suffix_name: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        return {
            "birth_date": None,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "middle_name": self.middle_name,
            "prefix_name": self.prefix_name,
            "suffix_name": self.suffix_name,
            "us_citizenship_status": None,
            "veteran_status": None,
        }


@dataclass
class CanonicalCompany:
    name: str

    def to_record(self) -> Dict[str, Any]:
        return {"name": self.name}


@dataclass
class InvalidOwner:
    raw: str
    reason: str

    def to_dict(self):
        return asdict(self)


@dataclass
class NameWarning:
    code: str
    message: str
    field: Optional[str] = None
    value: Optional[Any] = None

    def to_dict(self):
        return asdict(self)


def _str_or_none(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None
