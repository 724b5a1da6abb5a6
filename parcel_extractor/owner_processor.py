import os
import logging
from collections import OrderedDict

from .config import Settings
from .counties import DEFAULT
from .html_parsing import (
    extract_owner_text,
    find_labeled_value,
    find_section,
    load_soup,
    parse_sales_table,
)
from .inputs import (
    OWNER_DATA_FILE,
    property_key,
    read_input_html,
    read_seed,
    read_unnormalized_address,
    resolve_parcel_id,
)
from .names import parse_owner_text
from .owners import CURRENT
from .utils import print_status, write_json

logger = logging.getLogger(__name__)


def _merge(target, parsed):
    seen = {owner.text_key() for owner in target}
    for owner in parsed.owners:
        if owner.text_key() not in seen:
            seen.add(owner.text_key())
            target.append(owner)


def build_owners_by_date(soup, profile=DEFAULT):
    """
    Collect owner mentions from a county page.

    Args:
        soup: Parsed input page
        profile: County profile used for selectors and name rules

    Returns:
        Tuple of (owners_by_date, invalid_owners). Historical keys are sale
        dates in ascending order, followed by "current".
    """
    by_date = {}
    invalid = []

    for sale in parse_sales_table(soup, profile):
        if not sale.get("grantee"):
            continue
        parsed = parse_owner_text(sale["grantee"], profile)
        invalid.extend(parsed.invalid)
        if parsed.owners:
            _merge(by_date.setdefault(sale["date"], []), parsed)

    owners_by_date = OrderedDict()
    for date in sorted(by_date):
        owners_by_date[date] = [owner.to_dict() for owner in by_date[date]]

    owner_text = extract_owner_text(soup, profile)
    if owner_text:
        parsed = parse_owner_text(owner_text, profile)
        invalid.extend(parsed.invalid)
        if parsed.owners:
            owners_by_date[CURRENT] = [owner.to_dict() for owner in parsed.owners]
    else:
        logger.warning("No current owner found on page")

    return owners_by_date, [item.to_dict() for item in invalid]


def process_owners(workdir=".", profile=DEFAULT, settings=None):
    """Read input.html and write owners/owner_data.json for its parcel"""
    settings = settings or Settings()
    soup = load_soup(read_input_html(workdir))

    summary = find_section(soup, profile.summary_section_titles)
    page_parcel_id = find_labeled_value(soup, profile.parcel_labels, sections=[summary])
    parcel_id = resolve_parcel_id(read_seed(workdir), read_unnormalized_address(workdir), page_parcel_id)

    owners_by_date, invalid_owners = build_owners_by_date(soup, profile)
    entry = {"owners_by_date": owners_by_date, "invalid_owners": invalid_owners}

    output_path = os.path.join(workdir, settings.owners_dir, OWNER_DATA_FILE)
    write_json(output_path, {property_key(parcel_id): entry})

    current_count = len(owners_by_date.get(CURRENT, []))
    print_status(
        f"Owners for {parcel_id}: {current_count} current, "
        f"{len(owners_by_date) - (1 if CURRENT in owners_by_date else 0)} historical dates, "
        f"{len(invalid_owners)} invalid"
    )
    return entry
