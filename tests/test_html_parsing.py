"""Tests for page section, label and table helpers against saved county pages."""

from pathlib import Path

import pytest

from parcel_extractor.counties import CHARLOTTE, LEVY
from parcel_extractor.html_parsing import (
    cell_lines,
    extract_mailing_address,
    extract_owner_text,
    find_labeled_value,
    find_section,
    join_owner_lines,
    load_soup,
    parse_sales_table,
    parse_value_table,
)

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def levy_soup():
    return load_soup((FIXTURES / "levy_parcel.html").read_text(encoding="utf-8"))


@pytest.fixture
def charlotte_soup():
    return load_soup((FIXTURES / "charlotte_parcel.html").read_text(encoding="utf-8"))


def test_find_qpublic_section(levy_soup):
    section = find_section(levy_soup, ["Sales"])
    assert section is not None
    assert section["id"] == "ctlBodyPane_ctl03_mSection"


def test_find_heading_section(charlotte_soup):
    section = find_section(charlotte_soup, ["Owner:"])
    assert section is not None
    assert "w3-cell" in section["class"]


def test_find_section_missing(levy_soup):
    assert find_section(levy_soup, ["Permits"]) is None


def test_cell_lines_split_on_breaks():
    soup = load_soup("<td>PO BOX 1<br/>OCALA, FL <b>34470</b></td>")
    assert cell_lines(soup.td) == ["PO BOX 1", "OCALA, FL", "34470"]


@pytest.mark.parametrize(
    "lines,expected",
    [
        (["SMITH JOHN &", "MARY ANN"], "SMITH JOHN & MARY ANN"),
        (["SMITH JOHN", "AND MARY"], "SMITH JOHN AND MARY"),
        (["SMITH JOHN & MARY", "ACME HOLDINGS LLC"], "SMITH JOHN & MARY, ACME HOLDINGS LLC"),
        (["ANDERSON PAUL", "DOE JANE"], "ANDERSON PAUL, DOE JANE"),
        ([], ""),
    ],
)
def test_join_owner_lines(lines, expected):
    assert join_owner_lines(lines) == expected


def test_sales_grantee_wrapped_on_ampersand():
    soup = load_soup(
        "<table><tr><th>Sale Date</th><th>Sale Price</th><th>Grantee</th></tr>"
        "<tr><td>06/01/2021</td><td>$100,000</td><td>DOE JANE &amp;<br>JOHN PAUL</td></tr></table>"
    )
    sales = parse_sales_table(soup, LEVY)
    assert [s["grantee"] for s in sales] == ["DOE JANE & JOHN PAUL"]


def test_labeled_values(levy_soup):
    summary = find_section(levy_soup, LEVY.summary_section_titles)
    assert find_labeled_value(levy_soup, LEVY.parcel_labels, sections=[summary]) == "01234-000-00"
    assert find_labeled_value(levy_soup, LEVY.use_code_labels, sections=[summary]) == "SINGLE FAMILY (0100)"
    assert find_labeled_value(levy_soup, ["Flood Zone"]) is None


def test_owner_text_from_label_row(levy_soup):
    assert extract_owner_text(levy_soup, LEVY) == "SMITH JOHN ROBERT & MARY, ACME HOLDINGS LLC"


def test_owner_text_from_heading_block(charlotte_soup):
    assert extract_owner_text(charlotte_soup, CHARLOTTE) == "PARKER ANNA L"


def test_mailing_address(levy_soup, charlotte_soup):
    assert extract_mailing_address(levy_soup, LEVY) == "PO BOX 123, WILLISTON, FL 32696"
    assert extract_mailing_address(charlotte_soup, CHARLOTTE) == "42 GULF BLVD, PORT CHARLOTTE, FL 33948"


def test_sales_table(levy_soup):
    sales = parse_sales_table(levy_soup, LEVY)
    assert [s["date"] for s in sales] == ["2020-01-15", "2021-06-01"]
    latest = sales[1]
    assert latest["price"] == 250000.0
    assert latest["instrument"] == "WD"
    assert (latest["book"], latest["page"]) == ("1500", "20")
    assert latest["grantee"] == "SMITH JOHN ROBERT & MARY"
    assert latest["url"] == "https://clerk.example.com/doc?book=1500&page=20"
    assert sales[0]["url"] is None


def test_sales_table_combined_book_page(charlotte_soup):
    sales = parse_sales_table(charlotte_soup, CHARLOTTE)
    assert len(sales) == 2
    first = sales[0]
    assert first["date"] == "2019-03-04"
    assert (first["book"], first["page"]) == ("4400", "1020")
    assert first["instrument_number"] == "3456789"
    assert first["instrument"] == "Q"
    assert first["grantee"] is None


def test_value_table(levy_soup):
    values = parse_value_table(levy_soup, LEVY)
    assert values[0] == {
        "year": 2024,
        "land": 30000.0,
        "building": 120000.0,
        "market": 150000.0,
        "assessed": 140000.0,
        "taxable": 90000.0,
    }
    assert [v["year"] for v in values] == [2024, 2023]


def test_no_tables(charlotte_soup):
    assert parse_value_table(charlotte_soup, CHARLOTTE) == []
    assert parse_sales_table(load_soup("<html><body><p>nothing</p></body></html>"), LEVY) == []
