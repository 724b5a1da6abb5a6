from .default import COMMON_DEED_TYPES, COMMON_USE_CODES
from .profile import CountyProfile

CHARLOTTE = CountyProfile(
    name="charlotte",
    aliases=("charlotte county",),
    company_keywords={
        "FOUNDATION": "nonprofit",
        "ALLIANCE": "nonprofit",
        "SOLUTIONS": "business",
        "SERVICES": "business",
        "HOLDINGS": "business",
        "ENTERPRISES": "business",
        "PROPERTIES": "business",
        "INDUSTRIES": "business",
        "MANAGEMENT": "business",
        "REALTY": "business",
        "CHURCH": "nonprofit",
        "UNIVERSITY": "nonprofit",
    },
    split_shared_surname=False,
    company_name_case="preserve",
    owner_section_titles=("Owner:", "Owner"),
    owner_labels=("owner",),
    mailing_section_titles=("Owner:", "Owner"),
    sales_section_titles=("Sales Information", "Sales"),
    values_section_titles=("Certified Tax Roll Values", "Values"),
    summary_section_titles=("General Parcel Information", "Property Location"),
    parcel_labels=("Account #", "Account", "Parcel ID"),
    legal_description_labels=("Long Legal", "Short Legal", "Legal Description"),
    use_code_labels=("Land Use", "DOR Code"),
    deed_types=dict(COMMON_DEED_TYPES, **{"Q": "Quitclaim Deed", "T": "Tax Deed", "L": "Life Estate Deed", "C": "Correction Deed"}),
    property_use_codes=COMMON_USE_CODES,
    address_required=False,
    clear_output_dir=True,
    source_url="https://www.ccappraiser.com/Show_parcel.asp?acct={parcel_id}",
)
