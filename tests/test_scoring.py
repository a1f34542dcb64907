"""
Unit Tests for the CAD risk point rule
"""
import pytest

from cad_risk.scoring import (
    DEFAULT_RULES,
    NEGATIVE_LABEL,
    POSITIVE_LABEL,
    ScoringRules,
    assess,
    rules_from_config,
    score,
)
from cad_risk.validation import PatientAssessmentInput, parse_patient_input


def make_patient(**overrides) -> PatientAssessmentInput:
    """Build a zero-point patient, overriding selected fields."""
    fields = dict(
        patient_id="T-1",
        age=30,
        gender="female",
        height_cm=165.0,
        weight_kg=60.0,
        systolic_bp=110,
        diastolic_bp=70,
        cholesterol_mgdl=180,
        glucose_mgdl=90,
        smoking=False,
        alcohol_intake=False,
        physically_active=True,
        physical_activity_level=5,
    )
    fields.update(overrides)
    return PatientAssessmentInput(**fields)


class TestScenarios:
    def test_high_risk_scenario(self, high_risk_submission):
        result = assess(high_risk_submission)
        assert result.score == 14
        assert result.label == POSITIVE_LABEL
        assert result.is_positive
        assert result.factors == {
            "age": 3,
            "blood_pressure": 2,
            "cholesterol": 2,
            "glucose": 2,
            "smoking": 3,
            "inactivity": 1,
            "male_gender": 1,
        }

    def test_low_risk_scenario(self, low_risk_submission):
        result = assess(low_risk_submission)
        assert result.score == 0
        assert result.label == NEGATIVE_LABEL
        assert not result.is_positive
        assert all(points == 0 for points in result.factors.values())

    def test_exactly_threshold_is_positive(self):
        # age 3 + inactivity 1 + male 1
        result = score(make_patient(age=66, physically_active=False, gender="male"))
        assert result.score == 5
        assert result.label == POSITIVE_LABEL

    def test_one_below_threshold_is_negative(self):
        # age 3 + male 1
        result = score(make_patient(age=66, gender="male"))
        assert result.score == 4
        assert result.label == NEGATIVE_LABEL


class TestBands:
    @pytest.mark.parametrize("age,points", [
        (45, 0), (46, 1), (55, 1), (56, 2), (65, 2), (66, 3), (90, 3),
    ])
    def test_age(self, age, points):
        assert score(make_patient(age=age)).factors["age"] == points

    @pytest.mark.parametrize("systolic,diastolic,points", [
        (130, 80, 0),
        (131, 70, 1),
        (120, 81, 1),
        (140, 90, 1),
        (141, 70, 2),
        (120, 91, 2),
        (150, 95, 2),
    ])
    def test_blood_pressure(self, systolic, diastolic, points):
        patient = make_patient(systolic_bp=systolic, diastolic_bp=diastolic)
        assert score(patient).factors["blood_pressure"] == points

    @pytest.mark.parametrize("cholesterol,points", [(200, 0), (201, 1), (240, 1), (241, 2)])
    def test_cholesterol(self, cholesterol, points):
        assert score(make_patient(cholesterol_mgdl=cholesterol)).factors["cholesterol"] == points

    @pytest.mark.parametrize("glucose,points", [(100, 0), (101, 1), (126, 1), (127, 2)])
    def test_glucose(self, glucose, points):
        assert score(make_patient(glucose_mgdl=glucose)).factors["glucose"] == points

    def test_lifestyle_and_gender(self):
        result = score(make_patient(smoking=True, physically_active=False, gender="male"))
        assert result.factors["smoking"] == 3
        assert result.factors["inactivity"] == 1
        assert result.factors["male_gender"] == 1
        assert result.score == 5

    def test_unused_fields_do_not_change_score(self):
        base = score(make_patient())
        other = score(make_patient(
            patient_id="someone-else",
            height_cm=120.0,
            weight_kg=150.0,
            alcohol_intake=True,
            physical_activity_level=0,
        ))
        assert other == base


class TestPurity:
    def test_same_input_same_output(self, high_risk_submission):
        patient = parse_patient_input(high_risk_submission)
        first = score(patient)
        second = score(patient)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_to_dict(self, low_risk_submission):
        payload = assess(low_risk_submission).to_dict()
        assert set(payload) == {"label", "score", "factors"}
        assert payload["label"] == NEGATIVE_LABEL
        assert payload["score"] == 0


class TestRulesFromConfig:
    def test_empty_config_gives_defaults(self):
        assert rules_from_config({}) == DEFAULT_RULES

    def test_overrides(self):
        rules = rules_from_config({
            "scoring": {
                "threshold": 3,
                "smoking_points": 5,
                "age_bands": [[45, 1], [65, 4]],
            }
        })
        assert rules.threshold == 3
        assert rules.smoking_points == 5
        # sorted so the highest cut-off is checked first
        assert rules.age_bands == ((65, 4), (45, 1))
        assert rules.glucose_bands == DEFAULT_RULES.glucose_bands

    def test_custom_rules_change_label(self):
        patient = make_patient(smoking=True)
        assert score(patient).label == NEGATIVE_LABEL
        assert score(patient, ScoringRules(threshold=3)).label == POSITIVE_LABEL

    def test_malformed_band(self):
        with pytest.raises(ValueError, match="blood_pressure_bands"):
            rules_from_config({"scoring": {"blood_pressure_bands": [[140, 2]]}})

    @pytest.mark.parametrize("scoring_section,message", [
        ({"age_bands": 5}, "scoring.age_bands must be a list of bands"),
        ({"glucose_bands": [["high", 2]]}, "scoring.glucose_bands"),
        ({"threshold": "five"}, "scoring.threshold must be a whole number"),
        ([1, 2], "scoring must be a mapping"),
    ])
    def test_malformed_config_raises_value_error(self, scoring_section, message):
        with pytest.raises(ValueError, match=message):
            rules_from_config({"scoring": scoring_section})
