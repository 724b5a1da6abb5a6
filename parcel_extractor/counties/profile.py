import re
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

LAST_FIRST = "last_first"
FIRST_LAST = "first_last"


@dataclass(frozen=True, eq=False)
class CountyProfile:
    """Per-county data injected into the shared owner and extraction code.

    Everything that drifts between county scripts lives here: keyword
    extensions, name order, selectors and the small code tables.
    """
    name: str
    aliases: Tuple[str, ...] = ()

    # Owner name handling
    company_keywords: Mapping[str, str] = field(default_factory=dict)
    suffix_tokens: Tuple[str, ...] = ()
    name_order: str = LAST_FIRST
    inherit_surname_max_tokens: int = 1
    split_shared_surname: bool = True
    company_name_case: str = "title"

    # Page layout
    owner_section_titles: Tuple[str, ...] = ("Owner Information", "Owners", "Owner")
    owner_labels: Tuple[str, ...] = ("owner name", "owner", "name")
    mailing_section_titles: Tuple[str, ...] = ("Owner Information", "Owners", "Owner")
    mailing_labels: Tuple[str, ...] = ("mailing address", "mailing")
    sales_section_titles: Tuple[str, ...] = ("Sales History", "Sales", "Recent Sales")
    values_section_titles: Tuple[str, ...] = ("Valuation", "Values", "Certified Values", "Value History")
    summary_section_titles: Tuple[str, ...] = ("Summary", "Parcel Summary", "Property Information")
    parcel_labels: Tuple[str, ...] = ("Parcel ID", "Parcel Number", "Account")
    legal_description_labels: Tuple[str, ...] = ("Legal Description", "Brief Tax Description")
    use_code_labels: Tuple[str, ...] = ("Property Use Code", "Property Use", "Property Class", "Land Use")
    acreage_labels: Tuple[str, ...] = ("Acres", "Acreage", "Gross Acres")
    zoning_labels: Tuple[str, ...] = ("Zoning",)

    # Code tables
    property_use_codes: Mapping[str, str] = field(default_factory=dict)
    deed_types: Mapping[str, str] = field(default_factory=dict)

    # Run policy
    use_code_required: bool = False
    address_required: bool = True
    clear_output_dir: bool = False
    source_url: str = ""

    def source_http_request(self, parcel_id):
        if not self.source_url:
            return None
        return {"method": "GET", "url": self.source_url.format(parcel_id=parcel_id or "")}

    def lookup_use_code(self, raw_value) -> Optional[str]:
        """Map a page's use-code text such as 'SINGLE FAMILY (0100)' to a property type"""
        if not raw_value:
            return None
        text = raw_value.strip().upper()
        if text in self.property_use_codes:
            return self.property_use_codes[text]
        match = re.search(r"\b(\d{2,4})\b", text)
        if match:
            code = match.group(1)
            for candidate in (code, code.zfill(4), code.lstrip("0")):
                if candidate in self.property_use_codes:
                    return self.property_use_codes[candidate]
        for label, property_type in self.property_use_codes.items():
            if not label.isdigit() and label in text:
                return property_type
        return None

    def lookup_deed_type(self, instrument) -> str:
        if not instrument:
            return "Miscellaneous"
        key = re.sub(r"\s+", " ", instrument).strip().upper()
        return self.deed_types.get(key, "Miscellaneous")
