"""Tests for OwnerRegistry deduplication."""

from parcel_extractor.counties import DEFAULT
from parcel_extractor.models import OwnerMention
from parcel_extractor.owners import CURRENT, OwnerRegistry, ordered_snapshot_keys


def person(first, last, middle=None, **extra):
    return dict({"type": "person", "first_name": first, "last_name": last, "middle_name": middle}, **extra)


def company(name):
    return {"type": "company", "name": name}


def test_person_identity_ignores_case_and_middle():
    registry = OwnerRegistry(DEFAULT)
    first = registry.register(person("John", "Smith", "Robert"))
    second = registry.register(person("JOHN", "smith"))
    assert first == second == "./person_1.json"
    assert len(registry.persons) == 1


def test_dedup_count_matches_distinct_pairs():
    mentions = [
        person("John", "Smith"),
        person("Mary", "Smith"),
        person("john", "SMITH", "R"),
        person("Jane", "Doe"),
        company("Acme LLC"),
        company("  ACME llc "),
    ]
    registry = OwnerRegistry()
    registry.register_all(mentions)
    assert len(registry.persons) == 3
    assert len(registry.companies) == 1


def test_registration_is_idempotent():
    mentions = [person("John", "Smith"), person("Mary", "Smith", "Ann"), company("Acme LLC")]
    registry = OwnerRegistry()
    first_refs = registry.register_all(mentions)
    snapshot = list(registry.records())
    second_refs = registry.register_all(mentions)
    assert first_refs == second_refs
    assert list(registry.records()) == snapshot


def test_middle_name_backfill():
    registry = OwnerRegistry()
    registry.register(person("John", "Smith"))
    registry.register(person("John", "Smith", "Robert"))
    assert registry.persons[0].middle_name == "Robert"


def test_middle_name_never_regresses():
    registry = OwnerRegistry()
    registry.register(person("John", "Smith", "Robert"))
    registry.register(person("John", "Smith"))
    registry.register(person("John", "Smith", "Q"))
    assert registry.persons[0].middle_name == "Robert"


def test_refs_follow_first_seen_order():
    registry = OwnerRegistry()
    refs = registry.register_all([company("Acme LLC"), person("Jane", "Doe"), company("Beta Inc"), person("Al", "Roe")])
    assert refs == ["./company_1.json", "./person_1.json", "./company_2.json", "./person_2.json"]
    assert [name for name, _ in registry.records()] == [
        "person_1.json", "person_2.json", "company_1.json", "company_2.json"
    ]


def test_incomplete_person_is_skipped_with_warning():
    registry = OwnerRegistry()
    assert registry.register(person("Cher", None)) is None
    assert registry.persons == []
    assert registry.warnings[0].code == "incomplete_person_record"


def test_accepts_owner_mentions():
    registry = OwnerRegistry()
    ref = registry.register(OwnerMention(type="person", first_name="Jane", last_name="Doe"))
    assert ref == "./person_1.json"


def test_unknown_type_is_ignored():
    registry = OwnerRegistry()
    assert registry.register({"type": "robot", "name": "R2"}) is None


def test_invalid_prefix_is_nulled():
    registry = OwnerRegistry()
    registry.register(person("John", "Smith", prefix_name="Captain", suffix_name="jr"))
    record = registry.persons[0].to_record()
    assert record["prefix_name"] is None
    assert record["suffix_name"] == "Jr."
    assert [w.code for w in registry.warnings] == ["invalid_prefix"]


def test_person_record_shape():
    registry = OwnerRegistry()
    registry.register(person("john", "smith", "robert"))
    _, record = next(registry.records())
    assert record == {
        "birth_date": None,
        "first_name": "John",
        "last_name": "Smith",
        "middle_name": "Robert",
        "prefix_name": None,
        "suffix_name": None,
        "us_citizenship_status": None,
        "veteran_status": None,
    }


# ---- snapshots ----


def test_snapshot_order_current_first_then_ascending():
    owners_by_date = {"2021-06-01": [], CURRENT: [], "2019-01-15": []}
    assert ordered_snapshot_keys(owners_by_date) == [CURRENT, "2019-01-15", "2021-06-01"]


def test_snapshot_order_keeps_source_order_for_non_dates():
    owners_by_date = {"b": [], "a": [], CURRENT: []}
    assert ordered_snapshot_keys(owners_by_date) == [CURRENT, "b", "a"]


def test_register_snapshots_numbers_current_owners_first():
    owners_by_date = {
        "2019-01-15": [person("Jane", "Doe")],
        CURRENT: [person("John", "Smith")],
    }
    registry = OwnerRegistry()
    registry.register_snapshots(owners_by_date)
    assert [p.first_name for p in registry.persons] == ["John", "Jane"]
