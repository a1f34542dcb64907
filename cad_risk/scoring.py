"""Additive point rule mapping a patient's risk factors to a CAD risk label.

Each factor contributes points; the label is positive when the total reaches
the threshold. All weights, cut-offs and the threshold live in a
ScoringRules record so they can be adjusted (or loaded from the YAML config)
without touching the control flow below.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from cad_risk.validation import PatientAssessmentInput, parse_patient_input

POSITIVE_LABEL = "CAD risk positive"
NEGATIVE_LABEL = "CAD risk negative"

# (cut-off, points): the first band whose cut-off the value exceeds wins
AGE_BANDS = ((65, 3), (55, 2), (45, 1))
CHOLESTEROL_BANDS = ((240, 2), (200, 1))
GLUCOSE_BANDS = ((126, 2), (100, 1))

# (systolic cut-off, diastolic cut-off, points): either reading exceeding counts
BLOOD_PRESSURE_BANDS = ((140, 90, 2), (130, 80, 1))

SMOKING_POINTS = 3
INACTIVITY_POINTS = 1
MALE_POINTS = 1

RISK_THRESHOLD = 5


@dataclass(frozen=True)
class ScoringRules:
    threshold: int = RISK_THRESHOLD
    age_bands: Tuple[Tuple[int, int], ...] = AGE_BANDS
    blood_pressure_bands: Tuple[Tuple[int, int, int], ...] = BLOOD_PRESSURE_BANDS
    cholesterol_bands: Tuple[Tuple[int, int], ...] = CHOLESTEROL_BANDS
    glucose_bands: Tuple[Tuple[int, int], ...] = GLUCOSE_BANDS
    smoking_points: int = SMOKING_POINTS
    inactivity_points: int = INACTIVITY_POINTS
    male_points: int = MALE_POINTS

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_RULES = ScoringRules()


@dataclass(frozen=True)
class RiskResult:
    """Outcome of one assessment.

    ``factors`` is the reasoning trail: points awarded per risk factor, in
    evaluation order, including factors that scored zero.
    """

    label: str
    score: int
    factors: Dict[str, int] = field(default_factory=dict)

    @property
    def is_positive(self) -> bool:
        return self.label == POSITIVE_LABEL

    def to_dict(self) -> Dict[str, Any]:
        return {'label': self.label, 'score': self.score, 'factors': dict(self.factors)}


def _band_points(value: int, bands) -> int:
    for cutoff, points in bands:
        if value > cutoff:
            return points
    return 0


def _blood_pressure_points(systolic: int, diastolic: int, bands) -> int:
    for systolic_cutoff, diastolic_cutoff, points in bands:
        if systolic > systolic_cutoff or diastolic > diastolic_cutoff:
            return points
    return 0


def score(patient: PatientAssessmentInput, rules: ScoringRules = DEFAULT_RULES) -> RiskResult:
    """Compute the CAD risk score and label for a parsed submission.

    Pure function: the same input always yields the same result.

    Args:
        patient: Parsed, complete patient record.
        rules: Weights, cut-offs and threshold to apply.

    Returns:
        RiskResult with the label, the integer score and per-factor points.
    """
    factors = {
        'age': _band_points(patient.age, rules.age_bands),
        'blood_pressure': _blood_pressure_points(
            patient.systolic_bp, patient.diastolic_bp, rules.blood_pressure_bands
        ),
        'cholesterol': _band_points(patient.cholesterol_mgdl, rules.cholesterol_bands),
        'glucose': _band_points(patient.glucose_mgdl, rules.glucose_bands),
        'smoking': rules.smoking_points if patient.smoking else 0,
        'inactivity': 0 if patient.physically_active else rules.inactivity_points,
        'male_gender': rules.male_points if patient.gender == 'male' else 0,
    }

    total = sum(factors.values())
    label = POSITIVE_LABEL if total >= rules.threshold else NEGATIVE_LABEL
    return RiskResult(label=label, score=total, factors=factors)


def assess(raw: Mapping[str, Any], rules: Optional[ScoringRules] = None) -> RiskResult:
    """Validate a raw submission and score it.

    Raises:
        AssessmentInputError: If the submission is incomplete or invalid;
            nothing is scored in that case.
    """
    patient = parse_patient_input(raw)
    return score(patient, rules or DEFAULT_RULES)


def _sorted_bands(bands) -> tuple:
    # highest cut-off first so the first exceeded band is the riskiest one
    return tuple(sorted((tuple(band) for band in bands), reverse=True))


def rules_from_config(config: dict) -> ScoringRules:
    """Build ScoringRules from the 'scoring' section of a config dictionary.

    Keys that are absent fall back to the module defaults.

    Args:
        config: Parsed YAML configuration.

    Returns:
        ScoringRules for use with score() and assess().

    Raises:
        ValueError: If the scoring section is not a mapping, a band has the
            wrong shape, or a value is not a whole number.
    """
    scoring = config.get('scoring') or {}
    if not isinstance(scoring, dict):
        raise ValueError(f"scoring must be a mapping, got {scoring!r}")

    def points(key: str, default) -> int:
        value = scoring.get(key, default)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"scoring.{key} must be a whole number, got {value!r}")
        return value

    def bands(key: str, default, width: int):
        value = scoring.get(key)
        if value is None:
            return default
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"scoring.{key} must be a list of bands, got {value!r}")
        for band in value:
            if (not isinstance(band, (list, tuple)) or len(band) != width
                    or not all(isinstance(v, int) and not isinstance(v, bool) for v in band)):
                raise ValueError(f"Each entry of scoring.{key} must have {width} whole numbers, got {band!r}")
        return _sorted_bands(value)

    return ScoringRules(
        threshold=points('threshold', RISK_THRESHOLD),
        age_bands=bands('age_bands', AGE_BANDS, 2),
        blood_pressure_bands=bands('blood_pressure_bands', BLOOD_PRESSURE_BANDS, 3),
        cholesterol_bands=bands('cholesterol_bands', CHOLESTEROL_BANDS, 2),
        glucose_bands=bands('glucose_bands', GLUCOSE_BANDS, 2),
        smoking_points=points('smoking_points', SMOKING_POINTS),
        inactivity_points=points('inactivity_points', INACTIVITY_POINTS),
        male_points=points('male_points', MALE_POINTS),
    )
