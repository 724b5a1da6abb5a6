from .default import COMMON_DEED_TYPES, COMMON_USE_CODES
from .profile import CountyProfile, FIRST_LAST

# Lee lists owners in natural order ("JOHN A SMITH & MARY SMITH")
LEE = CountyProfile(
    name="lee",
    aliases=("lee county",),
    company_keywords={
        "FOUNDATION": "nonprofit",
        "ALLIANCE": "nonprofit",
        "RESCUE": "nonprofit",
        "MISSION": "nonprofit",
        "SOLUTIONS": "business",
        "SERVICES": "business",
        "SYSTEMS": "business",
        "COUNCIL": "association",
        "GROUP": "business",
        "PARTNERS": "business",
        "PROPERTIES": "business",
        "HOLDINGS": "business",
        "ENTERPRISES": "business",
        "INVESTMENTS": "business",
        "FUND": "financial",
        "REALTY": "business",
        "CO": "business",
        "TR": "trust",
    },
    name_order=FIRST_LAST,
    split_shared_surname=False,
    owner_section_titles=("Owner Of Record", "Owner"),
    owner_labels=("owner",),
    mailing_section_titles=("Owner Of Record", "Owner"),
    sales_section_titles=("Sales / Transactions", "Sales"),
    values_section_titles=("Property Values", "Values"),
    summary_section_titles=("Property Data", "Parcel Information"),
    parcel_labels=("STRAP", "Folio ID", "Parcel ID"),
    use_code_labels=("Use Code", "Land Use"),
    deed_types=COMMON_DEED_TYPES,
    property_use_codes=COMMON_USE_CODES,
    address_required=True,
    clear_output_dir=True,
    source_url="https://www.leepa.org/Display/DisplayParcel.aspx?FolioID={parcel_id}",
)
