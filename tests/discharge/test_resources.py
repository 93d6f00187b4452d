import pytest

from src.discharge.domain.models.discharge_request import MedicationLine
from src.discharge.domain.models.patient import PatientCandidate
from src.discharge.domain.models.practitioner import PractitionerProfile
from src.discharge.services.documents.errors import MissingPatientError
from src.discharge.services.documents.resources import (
    build_care_plan,
    build_encounter,
    build_medication_requests,
    build_patient,
    build_practitioner,
)


def test_patient_maps_all_present_fields(patient):
    resource = build_patient(patient, patient_id="pat-1", abha_address="ravi@abdm", language="en-IN").to_fhir()

    assert resource["resourceType"] == "Patient"
    assert resource["identifier"] == [{"system": "https://healthid.ndhm.gov.in", "value": "12-3456-7890-1234"}]
    assert resource["name"] == [{"text": "Ravi Kumar"}]
    assert resource["gender"] == "male"
    assert resource["birthDate"] == "1990-03-05"
    assert resource["telecom"] == [
        {"system": "phone", "value": "+91-98765-43210"},
        {"system": "email", "value": "ravi@example.org"},
        {"system": "url", "value": "abha://ravi@abdm"},
    ]
    assert resource["address"] == [{"text": "12 MG Road, Bengaluru"}]
    assert resource["meta"] == {"profile": ["http://hl7.org/fhir/StructureDefinition/Patient"]}


def test_patient_omits_absent_optional_fields():
    sparse = PatientCandidate(name="Anon", dob="31-02-99")
    resource = build_patient(sparse, patient_id="pat-1", abha_address=None, language="en-IN").to_fhir()

    for key in ("address", "identifier", "birthDate", "gender", "telecom"):
        assert key not in resource


def test_patient_gender_letter_codes_expand():
    resource = build_patient(PatientCandidate(name="X", gender="F"), patient_id="p", abha_address=None, language="en-IN")
    assert resource.gender == "female"


def test_patient_narrative_escapes_markup():
    resource = build_patient(PatientCandidate(name="A <b> & C"), patient_id="p", abha_address=None, language="en-IN")
    assert "<p>A &lt;b&gt; &amp; C</p>" in resource.text.div


def test_missing_patient_raises():
    with pytest.raises(MissingPatientError):
        build_patient(None, patient_id="p", abha_address=None, language="en-IN")


def test_practitioner_without_registration_or_contacts():
    profile = PractitionerProfile(id="x", name="Dr. C. Iyer")
    resource = build_practitioner(profile, practitioner_id="prac-uuid", language="en-IN").to_fhir()

    assert resource["name"] == [{"text": "Dr. C. Iyer"}]
    assert "identifier" not in resource
    assert "telecom" not in resource
    assert "qualification" not in resource


def test_encounter_is_ambulatory_and_instantaneous():
    resource = build_encounter(
        encounter_id="enc", patient_id="pat", timestamp="2024-05-01T10:30:15+05:30", language="en-IN"
    ).to_fhir()

    assert resource["status"] == "finished"
    assert resource["class"] == {
        "system": "http://terminology.hl7.org/CodeSystem/v3-ActCode",
        "code": "AMB",
        "display": "ambulatory",
    }
    assert resource["subject"] == {"reference": "urn:uuid:pat"}
    assert resource["period"]["start"] == resource["period"]["end"]


def test_medication_requests_keep_order_and_fixed_dosage():
    lines = [MedicationLine(medication_text="  Paracetamol 500mg "), MedicationLine(medication_text="")]
    requests = build_medication_requests(
        lines,
        request_ids=["m1", "m2"],
        patient_id="pat",
        practitioner_id="prac",
        authored_on="2024-05-01T10:30:15+05:30",
        language="en-IN",
    )
    first, second = (r.to_fhir() for r in requests)

    assert first["id"] == "m1"
    assert first["medicationCodeableConcept"] == {"text": "Paracetamol 500mg"}
    assert second["medicationCodeableConcept"] == {"text": "Medication"}
    assert first["requester"] == {"reference": "urn:uuid:prac", "display": "Practitioner"}
    dosage = first["dosageInstruction"][0]
    assert dosage["text"] == "One tablet twice a day after meal"
    assert dosage["timing"] == {"repeat": {"frequency": 2, "period": 1, "periodUnit": "d"}}
    assert dosage["route"]["coding"][0]["code"] == "26643006"
    assert dosage["method"]["coding"][0]["code"] == "421521009"
    assert dosage["additionalInstruction"][0]["coding"][0]["code"] == "311504000"


def test_medication_requests_need_one_id_per_line():
    with pytest.raises(ValueError):
        build_medication_requests(
            [MedicationLine(medication_text="A")],
            request_ids=[],
            patient_id="pat",
            practitioner_id="prac",
            authored_on="t",
            language="en-IN",
        )


@pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
def test_care_plan_absent_for_blank_text(text):
    assert (
        build_care_plan(text, care_plan_id="cp", patient_id="pat", practitioner_id="prac", language="en-IN")
        is None
    )
