"""Tests for date-keyed sale and mailing address linking."""

import json

from parcel_extractor.linker import (
    RelationshipSet,
    SaleEvent,
    link_mailing_address,
    link_sales,
    most_recent_sale,
)
from parcel_extractor.owners import CURRENT, OwnerRegistry


def person(first, last):
    return {"type": "person", "first_name": first, "last_name": last}


OWNERS_BY_DATE = {
    "2020-01-15": [person("Jane", "Doe")],
    "2021-06-01": [person("John", "Smith"), person("Mary", "Smith")],
    CURRENT: [person("John", "Smith"), person("Mary", "Smith"), {"type": "company", "name": "Acme LLC"}],
}


def new_registry(owners_by_date):
    registry = OwnerRegistry()
    registry.register_snapshots(owners_by_date)
    return registry


# ---- RelationshipSet ----


def test_relationship_filename():
    assert RelationshipSet.filename("./sales_history_1.json", "./person_2.json") == (
        "relationship_sales_history_1_has_person_2.json"
    )


def test_relationship_dedup_by_filename():
    relationships = RelationshipSet()
    assert relationships.add("./sales_history_1.json", "./person_1.json") is True
    assert relationships.add("./sales_history_1.json", "./person_1.json") is False
    assert relationships.add("./property.json", None) is False
    assert len(relationships) == 1


def test_relationship_write(tmp_path):
    relationships = RelationshipSet()
    relationships.add("./deed_1.json", "./file_1.json")
    relationships.write(tmp_path)
    data = json.loads((tmp_path / "relationship_deed_1_has_file_1.json").read_text())
    assert data == {"from": {"/": "./deed_1.json"}, "to": {"/": "./file_1.json"}}


# ---- link_sales ----


def test_most_recent_sale():
    sales = [SaleEvent("./a.json", "2019-01-01"), SaleEvent("./b.json", "2021-01-01"), SaleEvent("./c.json")]
    assert most_recent_sale(sales).ref == "./b.json"
    assert most_recent_sale([SaleEvent("./c.json")]).ref == "./c.json"
    assert most_recent_sale([]) is None


def test_sales_link_owners_on_matching_date():
    registry = new_registry(OWNERS_BY_DATE)
    relationships = RelationshipSet()
    sales = [SaleEvent("./sales_history_1.json", "2021-06-01"), SaleEvent("./sales_history_2.json", "2020-01-15")]

    linked = link_sales(registry, OWNERS_BY_DATE, sales, relationships)

    assert linked == {
        "./sales_history_1.json": ["./person_1.json", "./person_2.json"],
        "./sales_history_2.json": ["./person_3.json"],
    }
    # Current owners are not added when the latest sale already has its own
    assert "relationship_sales_history_1_has_company_1.json" not in relationships


def test_latest_sale_falls_back_to_current_owners():
    owners_by_date = {"2010-03-01": [person("Jane", "Doe")], CURRENT: OWNERS_BY_DATE[CURRENT]}
    registry = new_registry(owners_by_date)
    relationships = RelationshipSet()
    sales = [SaleEvent("./sales_history_1.json", "2021-06-01"), SaleEvent("./sales_history_2.json", "2010-03-01")]

    linked = link_sales(registry, owners_by_date, sales, relationships)

    assert linked["./sales_history_1.json"] == ["./person_1.json", "./person_2.json", "./company_1.json"]
    assert linked["./sales_history_2.json"] == ["./person_3.json"]


def test_fallback_produces_no_duplicate_edges():
    owners_by_date = {CURRENT: [person("John", "Smith"), person("JOHN", "SMITH")]}
    registry = new_registry(owners_by_date)
    relationships = RelationshipSet()
    sales = [SaleEvent("./sales_history_1.json", "2021-06-01")]

    link_sales(registry, owners_by_date, sales, relationships)
    link_sales(registry, owners_by_date, sales, relationships)

    assert [name for name, _ in relationships] == ["relationship_sales_history_1_has_person_1.json"]


def test_no_sales_no_edges():
    registry = new_registry(OWNERS_BY_DATE)
    relationships = RelationshipSet()
    assert link_sales(registry, OWNERS_BY_DATE, [], relationships) == {}
    assert len(relationships) == 0


def test_missing_owner_data_links_nothing():
    registry = OwnerRegistry()
    relationships = RelationshipSet()
    linked = link_sales(registry, {}, [SaleEvent("./sales_history_1.json", "2021-06-01")], relationships)
    assert linked == {"./sales_history_1.json": []}
    assert len(relationships) == 0


# ---- link_mailing_address ----


def test_mailing_address_links_current_owners():
    registry = new_registry(OWNERS_BY_DATE)
    relationships = RelationshipSet()
    refs = link_mailing_address(registry, OWNERS_BY_DATE, "./mailing_address.json", relationships)
    assert refs == ["./person_1.json", "./person_2.json", "./company_1.json"]
    assert "relationship_company_1_has_mailing_address.json" in relationships
    assert "relationship_person_3_has_mailing_address.json" not in relationships


def test_no_mailing_edges_without_address():
    registry = new_registry(OWNERS_BY_DATE)
    relationships = RelationshipSet()
    assert link_mailing_address(registry, OWNERS_BY_DATE, None, relationships) == []
    assert len(relationships) == 0
