from httpx import ASGITransport, AsyncClient
from fastapi import status

from src.discharge.domain.models.patient import (
    OpaqueAbhaEntry,
    PatientCandidate,
    PlainAbhaEntry,
    TaggedAbhaEntry,
)
from src.discharge.main import app
from src.discharge.services.patients.abha import (
    default_abha_address,
    normalize_abha_addresses,
    parse_abha_entry,
)


def test_primary_first_then_by_value():
    patient = PatientCandidate(
        abha_addresses=[
            {"address": "a@b", "isPrimary": False},
            "c@d",
            {"address": "e@f", "isPrimary": True},
        ]
    )

    options = normalize_abha_addresses(patient)

    assert [o.value for o in options] == ["e@f", "a@b", "c@d"]
    assert [o.label for o in options] == ["e@f (primary)", "a@b", "c@d"]
    assert [o.primary for o in options] == [True, False, False]


def test_nested_location_preferred_over_flat():
    patient = PatientCandidate(
        abha_addresses=["flat@abdm"],
        additional_attributes={"abha_addresses": ["nested@abdm"]},
    )

    assert [o.value for o in normalize_abha_addresses(patient)] == ["nested@abdm"]


def test_non_list_nested_value_falls_back_to_flat():
    patient = PatientCandidate(
        abha_addresses=["flat@abdm"],
        additional_attributes={"abha_addresses": "nested@abdm"},
    )

    assert [o.value for o in normalize_abha_addresses(patient)] == ["flat@abdm"]


def test_entries_are_classified():
    assert parse_abha_entry("x@abdm") == PlainAbhaEntry(text="x@abdm")
    assert parse_abha_entry({"address": "y@abdm", "isPrimary": 1}) == TaggedAbhaEntry(address="y@abdm", is_primary=True)
    assert parse_abha_entry({"handle": "z", "isPrimary": True}) == OpaqueAbhaEntry(
        text='{"handle":"z","isPrimary":true}', is_primary=True
    )
    for junk in ("", None, 42, True):
        assert parse_abha_entry(junk) is None


def test_duplicates_collapse_and_empty_entries_drop():
    patient = PatientCandidate(abha_addresses=["dup@abdm", "", None, {"address": "dup@abdm"}, {"address": ""}])

    options = normalize_abha_addresses(patient)

    assert [o.value for o in options] == ["dup@abdm", '{"address":""}']


def test_default_selection():
    assert default_abha_address(PatientCandidate(abha_addresses=["b@x", "a@x"])) == "a@x"
    assert default_abha_address(PatientCandidate()) is None


async def test_abha_addresses_endpoint():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.post(
            "/api/v1/patients/abha-addresses",
            json={"name": "Ravi", "abha_addresses": ["c@d", {"address": "e@f", "isPrimary": True}]},
        )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == [
        {"value": "e@f", "label": "e@f (primary)", "primary": True},
        {"value": "c@d", "label": "c@d", "primary": False},
    ]


def test_wrongly_shaped_sources_count_as_no_addresses():
    assert normalize_abha_addresses(PatientCandidate(abha_addresses="x@abdm")) == []
    assert normalize_abha_addresses(PatientCandidate(abha_addresses={"address": "x@abdm"})) == []

    patient = PatientCandidate(additional_attributes=[], abha_addresses=["a@b"])
    assert [o.value for o in normalize_abha_addresses(patient)] == ["a@b"]

    patient = PatientCandidate(additional_attributes="n/a")
    assert default_abha_address(patient) is None
