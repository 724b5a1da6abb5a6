"""Turn one parcel's page and sidecar files into the data/ entity and relationship files."""
import os
import re
import shutil
import logging

from .config import Settings
from .counties import DEFAULT
from .errors import ExtractionError
from .html_parsing import (
    extract_mailing_address,
    find_labeled_value,
    find_section,
    load_soup,
    parse_sales_table,
    parse_value_table,
)
from .inputs import (
    LAYOUT_DATA_FILE,
    OWNER_DATA_FILE,
    STRUCTURE_DATA_FILE,
    UTILITIES_DATA_FILE,
    property_key,
    read_input_html,
    read_seed,
    read_sidecar,
    read_unnormalized_address,
    resolve_parcel_id,
)
from .linker import RelationshipSet, SaleEvent, link_mailing_address, link_sales
from .owners import OwnerRegistry
from .utils import (
    clean_text,
    ensure_directory,
    parse_currency,
    parse_int,
    print_status,
    title_case,
    write_json,
)

logger = logging.getLogger(__name__)

SQFT_PER_ACRE = 43560
QUARTER_ACRE = 0.25
BUILDING = "Building"

LOT_FIELDS = [
    "lot_type",
    "lot_length_feet",
    "lot_width_feet",
    "lot_area_sqft",
    "landscaping_features",
    "view",
    "fencing_type",
    "fence_height",
    "fence_length",
    "driveway_material",
    "driveway_condition",
    "lot_condition_issues",
    "lot_size_acre",
]


class ExtractionContext:
    """Everything one run shares: where to write, which parcel, which county"""

    def __init__(self, data_dir, parcel_id, profile, source_http_request):
        self.data_dir = data_dir
        self.parcel_id = parcel_id
        self.profile = profile
        self.source_http_request = source_http_request
        self.relationships = RelationshipSet()

    def base(self):
        return {
            "source_http_request": self.source_http_request,
            "request_identifier": self.parcel_id,
        }

    def write(self, filename, record):
        payload = self.base()
        payload.update(record)
        write_json(os.path.join(self.data_dir, filename), payload)
        return f"./{filename}"


def prepare_output_dir(data_dir, profile):
    if profile.clear_output_dir and os.path.isdir(data_dir):
        logger.info(f"Clearing output directory {data_dir}")
        shutil.rmtree(data_dir)
    ensure_directory(data_dir)


def extract_property(ctx, soup, summary):
    profile = ctx.profile
    use_code_text = find_labeled_value(soup, profile.use_code_labels, sections=[summary])
    if not use_code_text and profile.use_code_required:
        raise ExtractionError("Property use code not found on page", path="property.property_type")

    property_type = profile.lookup_use_code(use_code_text) if use_code_text else None
    if use_code_text and not property_type:
        raise ExtractionError(f"Unknown enum value {use_code_text}.", path="property.property_type")

    legal = find_labeled_value(soup, profile.legal_description_labels, sections=[summary])
    year_built = parse_int(find_labeled_value(soup, ("Actual Year Built", "Year Built"), sections=[summary]))
    # Life estates are flagged as L/E in the legal text
    estate = "LifeEstate" if legal and re.search(r"\bL/E\b|\bL/E\d+", legal, re.IGNORECASE) else None

    return ctx.write("property.json", {
        "parcel_identifier": ctx.parcel_id,
        "property_type": property_type,
        "property_legal_description_text": legal,
        "property_structure_built_year": year_built,
        "livable_floor_area": None,
        "number_of_units_type": None,
        "ownership_estate_type": estate,
        "zoning": find_labeled_value(soup, profile.zoning_labels, sections=[summary]),
    })


def extract_address(ctx, address):
    if not isinstance(address, dict):
        if ctx.profile.address_required:
            raise ExtractionError("Address input file not found", path="address")
        logger.warning("No address input file, skipping address.json")
        return None

    county = address.get("county_jurisdiction") or address.get("county_name") or ""
    return ctx.write("address.json", {
        "county_name": title_case(clean_text(county)) or None,
        "latitude": address.get("latitude"),
        "longitude": address.get("longitude"),
        "unnormalized_address": address.get("full_address") or address.get("unnormalized_address"),
    })


def extract_lot(ctx, soup, summary):
    acres = parse_currency(find_labeled_value(soup, ctx.profile.acreage_labels, sections=[summary]))
    lot = {field: None for field in LOT_FIELDS}
    if acres:
        lot["lot_size_acre"] = acres
        lot["lot_area_sqft"] = int(round(acres * SQFT_PER_ACRE))
        lot["lot_type"] = "GreaterThanOneQuarterAcre" if acres > QUARTER_ACRE else "LessThanOrEqualToOneQuarterAcre"
    return ctx.write("lot.json", lot)


def extract_sales(ctx, soup):
    """Write sales_history, deed and file records; newest sale is sales_history_1"""
    sales = parse_sales_table(soup, ctx.profile)
    sales.sort(key=lambda s: s["date"], reverse=True)

    events = []
    for idx, sale in enumerate(sales, 1):
        sale_ref = ctx.write(f"sales_history_{idx}.json", {
            "ownership_transfer_date": sale["date"],
            "purchase_price_amount": sale["price"],
            "sale_type": None,
        })
        deed_ref = ctx.write(f"deed_{idx}.json", {
            "deed_type": ctx.profile.lookup_deed_type(sale.get("instrument")),
            "book": sale.get("book"),
            "page": sale.get("page"),
            "instrument_number": sale.get("instrument_number"),
        })
        ctx.relationships.add(sale_ref, deed_ref)

        if sale.get("url") or sale.get("instrument_number") or sale.get("book"):
            if sale.get("instrument_number"):
                name = f"Instrument {sale['instrument_number']}"
            elif sale.get("book"):
                name = f"Book {sale['book']} Page {sale.get('page') or ''}".strip()
            else:
                name = "Deed document"
            file_ref = ctx.write(f"file_{idx}.json", {
                "document_type": "ConveyanceDeed",
                "file_format": None,
                "ipfs_url": None,
                "name": name,
                "original_url": sale.get("url"),
            })
            ctx.relationships.add(deed_ref, file_ref)

        events.append(SaleEvent(ref=sale_ref, date=sale["date"]))
    return events


def extract_taxes(ctx, soup):
    written = []
    for row in parse_value_table(soup, ctx.profile):
        written.append(ctx.write(f"tax_{row['year']}.json", {
            "tax_year": row["year"],
            "property_assessed_value_amount": row["assessed"],
            "property_market_value_amount": row["market"],
            "property_building_amount": row["building"],
            "property_land_amount": row["land"],
            "property_taxable_value_amount": row["taxable"],
            "monthly_tax_amount": None,
            "period_end_date": None,
            "period_start_date": None,
        }))
    return written


def extract_owners(ctx, owners_dir, soup, events):
    """Canonical owners plus their sale and mailing address links"""
    owner_entry = read_sidecar(owners_dir, OWNER_DATA_FILE, ctx.parcel_id) or {}
    owners_by_date = owner_entry.get("owners_by_date") or {}
    if not owners_by_date:
        logger.info(f"No owners recorded for {property_key(ctx.parcel_id)}")

    registry = OwnerRegistry(ctx.profile)
    registry.register_snapshots(owners_by_date)
    link_sales(registry, owners_by_date, events, ctx.relationships)

    mailing_ref = None
    mailing_text = extract_mailing_address(soup, ctx.profile)
    if mailing_text:
        mailing_ref = ctx.write("mailing_address.json", {
            "unnormalized_address": mailing_text,
            "latitude": None,
            "longitude": None,
        })
    link_mailing_address(registry, owners_by_date, mailing_ref, ctx.relationships)

    for filename, record in registry.records():
        ctx.write(filename, record)
    return registry


def _building_records(entry):
    """Per-building records keyed by building number; a flat record belongs to building 1"""
    if not isinstance(entry, dict) or not entry:
        return {}
    if all(isinstance(value, dict) for value in entry.values()):
        return {str(key): value for key, value in entry.items()}
    return {"1": entry}


def extract_buildings(ctx, owners_dir, property_ref):
    """Pass layout, utility and structure sidecars through and link them to their building"""
    layout_entry = read_sidecar(owners_dir, LAYOUT_DATA_FILE, ctx.parcel_id) or {}
    layouts = layout_entry.get("layouts") or []
    utilities = _building_records(read_sidecar(owners_dir, UTILITIES_DATA_FILE, ctx.parcel_id))
    structures = _building_records(read_sidecar(owners_dir, STRUCTURE_DATA_FILE, ctx.parcel_id))

    building_refs = {}
    for idx, layout in enumerate(layouts, 1):
        layout_ref = ctx.write(f"layout_{idx}.json", layout)
        building_number = str(layout.get("building_number") or "")
        if layout.get("space_type") == BUILDING:
            building_refs[building_number or "1"] = layout_ref
            ctx.relationships.add(property_ref, layout_ref)
        elif building_number in building_refs:
            ctx.relationships.add(building_refs[building_number], layout_ref)
        else:
            ctx.relationships.add(property_ref, layout_ref)

    for kind, records in (("utility", utilities), ("structure", structures)):
        for n, (building_number, record) in enumerate(records.items(), 1):
            ref = ctx.write(f"{kind}_{n}.json", record)
            if building_number in building_refs:
                ctx.relationships.add(building_refs[building_number], ref)
            else:
                ctx.relationships.add(property_ref, ref)


def run(workdir=".", profile=DEFAULT, settings=None):
    """
    Extract one parcel from workdir into the data directory.

    Args:
        workdir: Directory holding input.html and the JSON sidecars
        profile: County profile
        settings: Directory settings; defaults are used when omitted

    Returns:
        Summary dict with counts of what was written
    """
    settings = settings or Settings()
    data_dir = os.path.join(workdir, settings.data_dir)
    owners_dir = os.path.join(workdir, settings.owners_dir)

    soup = load_soup(read_input_html(workdir))
    address = read_unnormalized_address(workdir)
    summary = find_section(soup, profile.summary_section_titles)
    page_parcel_id = find_labeled_value(soup, profile.parcel_labels, sections=[summary])
    parcel_id = resolve_parcel_id(read_seed(workdir), address, page_parcel_id)

    prepare_output_dir(data_dir, profile)
    request = (address or {}).get("source_http_request") or profile.source_http_request(parcel_id)
    ctx = ExtractionContext(data_dir, parcel_id, profile, request)

    property_ref = extract_property(ctx, soup, summary)
    address_ref = extract_address(ctx, address)
    ctx.relationships.add(property_ref, address_ref)
    lot_ref = extract_lot(ctx, soup, summary)
    ctx.relationships.add(property_ref, lot_ref)

    events = extract_sales(ctx, soup)
    for event in events:
        ctx.relationships.add(property_ref, event.ref)
    taxes = extract_taxes(ctx, soup)
    registry = extract_owners(ctx, owners_dir, soup, events)
    extract_buildings(ctx, owners_dir, property_ref)

    ctx.relationships.write(data_dir)

    summary_counts = {
        "parcel_id": parcel_id,
        "county": profile.name,
        "persons": len(registry.persons),
        "companies": len(registry.companies),
        "sales": len(events),
        "taxes": len(taxes),
        "relationships": len(ctx.relationships),
        "warnings": len(registry.warnings),
    }
    print_status(f"Extracted {parcel_id} ({profile.name}): {summary_counts}")
    return summary_counts
