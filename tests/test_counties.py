import pytest

from parcel_extractor.counties import CHARLOTTE, DEFAULT, LEE, LEVY, PROFILES, get_profile


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Levy", LEVY),
        ("LEVY COUNTY", LEVY),
        ("levy county", LEVY),
        ("Charlotte", CHARLOTTE),
        ("Lee County", LEE),
        ("Atlantis", DEFAULT),
        (None, DEFAULT),
        ("", DEFAULT),
    ],
)
def test_get_profile(name, expected):
    assert get_profile(name) is expected


def test_profiles_registered_by_name():
    assert set(PROFILES) == {"default", "levy", "charlotte", "lee"}


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("SINGLE FAMILY (0100)", "SingleFamily"),
        ("0100 - SINGLE FAMILY RESIDENTIAL", "SingleFamily"),
        ("100", "SingleFamily"),
        ("CONDOMINIUM", "Condominium"),
        ("VACANT RESIDENTIAL", "VacantLand"),
        ("SPACEPORT (9999)", None),
        ("", None),
        (None, None),
    ],
)
def test_lookup_use_code(raw, expected):
    assert DEFAULT.lookup_use_code(raw) == expected


def test_lookup_deed_type():
    assert DEFAULT.lookup_deed_type("wd") == "Warranty Deed"
    assert DEFAULT.lookup_deed_type(" Quitclaim  Deed ") == "Quitclaim Deed"
    assert DEFAULT.lookup_deed_type("XYZ") == "Miscellaneous"
    assert DEFAULT.lookup_deed_type(None) == "Miscellaneous"
    assert CHARLOTTE.lookup_deed_type("Q") == "Quitclaim Deed"
    assert LEVY.lookup_deed_type("Corrective Deed") == "Correction Deed"


def test_source_http_request():
    assert LEVY.source_http_request("123")["url"].endswith("KeyValue=123")
    assert DEFAULT.source_http_request("123") is None
