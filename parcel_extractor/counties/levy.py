from .default import COMMON_DEED_TYPES, COMMON_USE_CODES
from .profile import CountyProfile

# qPublic layout; owner lines are LAST FIRST MIDDLE and wrap onto several rows
LEVY = CountyProfile(
    name="levy",
    aliases=("levy county",),
    company_keywords={
        "FOUNDATION": "nonprofit",
        "ALLIANCE": "nonprofit",
        "SOLUTIONS": "business",
        "SERVICES": "business",
        "ASSOCIATES": "business",
        "INVESTMENT": "business",
        "INVESTMENTS": "business",
        "ENTERPRISES": "business",
        "PROPERTIES": "business",
        "HOLDINGS": "business",
        "CO": "business",
        "TR": "trust",
        "NA": "financial",
        "LP": "business",
    },
    inherit_surname_max_tokens=2,
    owner_section_titles=("Owner Information", "Owners", "Owner"),
    owner_labels=("owner name", "owner"),
    sales_section_titles=("Sales", "Recent Sales", "Sales History"),
    values_section_titles=("Valuation", "Working Values", "Certified Values"),
    summary_section_titles=("Summary", "Parcel Summary"),
    deed_types=dict(COMMON_DEED_TYPES, **{"CORRECTIVE DEED": "Correction Deed", "FD": "Miscellaneous"}),
    property_use_codes=COMMON_USE_CODES,
    use_code_required=True,
    address_required=True,
    clear_output_dir=False,
    source_url="https://qpublic.schneidercorp.com/Application.aspx?App=LevyCountyFL&PageType=Report&KeyValue={parcel_id}",
)
