from .profile import CountyProfile

COMMON_DEED_TYPES = {
    "WD": "Warranty Deed",
    "W": "Warranty Deed",
    "WARRANTY DEED": "Warranty Deed",
    "SW": "Special Warranty Deed",
    "SWD": "Special Warranty Deed",
    "SPECIAL WARRANTY DEED": "Special Warranty Deed",
    "QC": "Quitclaim Deed",
    "QCD": "Quitclaim Deed",
    "QUIT CLAIM": "Quitclaim Deed",
    "QUITCLAIM DEED": "Quitclaim Deed",
    "TD": "Tax Deed",
    "TAX DEED": "Tax Deed",
    "PR": "Personal Representative Deed",
    "PRD": "Personal Representative Deed",
    "TR": "Trustee's Deed",
    "TRD": "Trustee's Deed",
    "CT": "Certificate of Title",
    "CD": "Correction Deed",
    "LE": "Life Estate Deed",
}

COMMON_USE_CODES = {
    "0000": "VacantLand",
    "0100": "SingleFamily",
    "0200": "MobileHome",
    "0300": "MultipleFamily",
    "0400": "Condominium",
    "0500": "Cooperative",
    "0800": "MultipleFamily",
    "VACANT": "VacantLand",
    "SINGLE FAMILY": "SingleFamily",
    "MOBILE HOME": "MobileHome",
    "CONDOMINIUM": "Condominium",
}

DEFAULT = CountyProfile(
    name="default",
    deed_types=COMMON_DEED_TYPES,
    property_use_codes=COMMON_USE_CODES,
)
