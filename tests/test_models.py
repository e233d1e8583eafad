"""Tests for the request model, the render view and the static catalog."""

import pytest
from pydantic import ValidationError

import catalog
from pydantic_models import DiagnosisRequest, DiagnosisView


class TestDiagnosisRequest:

    def test_valid_request(self):
        request = DiagnosisRequest(symptoms=["fever", "cough"], age=25, gender="male")

        assert request.symptoms == ("fever", "cough")
        assert request.symptom_names == ["Demam", "Batuk"]
        assert request.gender_label == "Laki-laki"

    def test_duplicates_collapse_keeping_order(self):
        request = DiagnosisRequest(symptoms=["cough", "fever", "cough"], age=25, gender="female")
        assert request.symptoms == ("cough", "fever")

    @pytest.mark.parametrize("age", [0, 120])
    def test_age_bounds_inclusive(self, age):
        assert DiagnosisRequest(symptoms=["fever"], age=age, gender="male").age == age

    @pytest.mark.parametrize("age", [-1, 121])
    def test_age_out_of_range(self, age):
        with pytest.raises(ValidationError):
            DiagnosisRequest(symptoms=["fever"], age=age, gender="male")

    def test_empty_symptoms_rejected(self):
        with pytest.raises(ValidationError):
            DiagnosisRequest(symptoms=[], age=30, gender="male")

    def test_unknown_symptom_rejected(self):
        with pytest.raises(ValidationError) as exc:
            DiagnosisRequest(symptoms=["fever", "hiccups"], age=30, gender="male")
        assert "hiccups" in str(exc.value)

    def test_unknown_gender_rejected(self):
        with pytest.raises(ValidationError):
            DiagnosisRequest(symptoms=["fever"], age=30, gender="other")

    def test_request_is_immutable(self):
        request = DiagnosisRequest(symptoms=["fever"], age=30, gender="male")
        with pytest.raises(ValidationError):
            request.age = 31


class TestDiagnosisView:

    def test_full_payload(self, diagnosis_payload):
        view = DiagnosisView.from_payload(diagnosis_payload)

        assert view.urgency_level == "Normal"
        assert view.possible_conditions[0].name == "Influenza"
        assert view.possible_conditions[0].probability == "Tinggi"
        assert view.recommendations.medications == ["Parasetamol"]
        assert view.seek_medical_attention == "Jika demam lebih dari 3 hari."
        assert view.preventive_measures == ["Vaksin flu tahunan"]

    def test_missing_fields_render_empty(self):
        view = DiagnosisView.from_payload({"urgencyLevel": "Darurat"})

        assert view.urgency_level == "Darurat"
        assert view.possible_conditions == []
        assert view.recommendations.immediate == []
        assert view.seek_medical_attention == ""

    def test_ill_typed_fields_are_dropped(self):
        payload = {
            "possibleConditions": [{"name": "Flu"}, "teks", None, {"probability": "Rendah"}],
            "recommendations": ["bukan objek"],
            "urgencyLevel": {"level": "Segera"},
            "preventiveMeasures": ["Cuci tangan", 3, None, {"x": 1}],
        }

        view = DiagnosisView.from_payload(payload)

        assert [c.name for c in view.possible_conditions] == ["Flu"]
        assert view.recommendations.lifestyle == []
        assert view.urgency_level == ""
        assert view.preventive_measures == ["Cuci tangan", "3"]

    @pytest.mark.parametrize("payload", [None, [], "teks", 1, {}])
    def test_any_payload_builds_a_view(self, payload):
        view = DiagnosisView.from_payload(payload)
        assert view.possible_conditions == []


class TestCatalog:

    def test_symptom_ids_are_unique(self):
        ids = [sid for sid, _ in catalog.SYMPTOMS]
        assert len(ids) == len(set(ids)) == 18

    def test_lookup_helpers(self):
        assert catalog.symptom_name("chest_pain") == "Nyeri Dada"
        assert catalog.symptom_name("unknown") is None
        assert catalog.symptom_names(["nausea", "unknown", "rash"]) == ["Mual", "Ruam"]
        assert catalog.gender_label("female") == "Perempuan"

    def test_urgency_style_defaults_to_normal(self):
        assert catalog.urgency_style("Darurat") == catalog.URGENCY_STYLES["Darurat"]
        assert catalog.urgency_style("Tidak jelas") == catalog.URGENCY_STYLES["Normal"]
        assert catalog.urgency_style(None) == catalog.URGENCY_STYLES["Normal"]

    def test_as_options(self):
        assert catalog.as_options(catalog.GENDERS) == [
            {"id": "male", "name": "Laki-laki"},
            {"id": "female", "name": "Perempuan"},
        ]
