"""Advisory checks on person records.

Nothing here rejects a record. Failures come back as NameWarnings so the
caller can log or assert on them while the value is still written as-is.
"""
import logging
from typing import Any, Dict, List

from jsonschema import Draft7Validator

from .models import NameWarning
from .names import PREFIX_NAMES, SUFFIX_NAMES

logger = logging.getLogger(__name__)

NAME_PATTERN = r"^[A-Z][a-z]*([ \-',.][A-Za-z][a-z]*)*$"
MIDDLE_NAME_PATTERN = r"^[A-Z][A-Za-z\s\-',.]*$"

PERSON_NAME_SCHEMA = {
    "type": "object",
    "properties": {
        "first_name": {"type": "string", "minLength": 1, "pattern": NAME_PATTERN},
        "last_name": {"type": "string", "minLength": 1, "pattern": NAME_PATTERN},
        "middle_name": {"type": ["string", "null"], "pattern": MIDDLE_NAME_PATTERN},
        "prefix_name": {"enum": list(PREFIX_NAMES) + [None]},
        "suffix_name": {"enum": list(SUFFIX_NAMES) + [None]},
    },
    "required": ["first_name", "last_name"],
}

_person_validator = Draft7Validator(PERSON_NAME_SCHEMA)

_CODES = {
    "pattern": "name_pattern_mismatch",
    "minLength": "missing_name",
    "required": "missing_name",
    "type": "missing_name",
    "enum": "invalid_enum_value",
}


def check_person_name(record: Dict[str, Any]) -> List[NameWarning]:
    warnings = []
    for error in sorted(_person_validator.iter_errors(record), key=lambda e: list(e.path)):
        field = error.path[0] if error.path else None
        if error.validator == "required":
            field = error.message.split("'")[1] if "'" in error.message else None
        value = record.get(field) if field else None
        warning = NameWarning(
            code=_CODES.get(error.validator, "invalid_name"),
            field=field,
            value=value,
            message=f"{field or 'person'}: {error.message}",
        )
        logger.warning(f"Person name check failed - {warning.message}")
        warnings.append(warning)
    return warnings
