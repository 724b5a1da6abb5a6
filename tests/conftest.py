import json
import shutil
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"

LEVY_PARCEL = "0123400000"
CHARLOTTE_PARCEL = "402222101001"


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture
def levy_workdir(tmp_path):
    """Working directory with the Levy page, a parcel seed and an address file."""
    shutil.copy(FIXTURES / "levy_parcel.html", tmp_path / "input.html")
    write_json(tmp_path / "property_seed.json", {"parcel_id": LEVY_PARCEL})
    write_json(tmp_path / "unnormalized_address.json", {
        "full_address": "123 MAIN ST, WILLISTON, FL 32696",
        "county_jurisdiction": "Levy",
        "request_identifier": LEVY_PARCEL,
        "source_http_request": {"method": "GET", "url": "https://example.com/levy"},
    })
    return tmp_path


@pytest.fixture
def charlotte_workdir(tmp_path):
    """Working directory with the Charlotte page and a parcel seed, no address file."""
    shutil.copy(FIXTURES / "charlotte_parcel.html", tmp_path / "input.html")
    write_json(tmp_path / "property_seed.json", {"parcel_id": CHARLOTTE_PARCEL})
    return tmp_path
