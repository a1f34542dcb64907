"""Input gate for CAD risk assessment.

Raw submissions come in as form-style values: strings from the command line,
JSON scalars from the HTTP API, or cells from a patients CSV. Every field must
be filled in before anything is scored, and a failed gate reports only a
generic message to the caller. Typing and clinical ranges are enforced by the
PatientAssessmentInput pydantic model.
"""

import math
from dataclasses import dataclass
from typing import Any, FrozenSet, Literal, Mapping

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

MISSING_INPUT_MESSAGE = "Please fill in all fields before predicting CAD risk."

GENDERS = ('male', 'female')

# pydantic error types that mean "parsed fine, but outside the allowed range"
_RANGE_ERROR_TYPES = {'greater_than', 'greater_than_equal', 'less_than', 'less_than_equal'}

_NUMERIC_FIELDS = {
    'age', 'height_cm', 'weight_kg', 'systolic_bp', 'diastolic_bp',
    'cholesterol_mgdl', 'glucose_mgdl', 'physical_activity_level',
}
_FLAG_FIELDS = {'smoking', 'alcohol_intake', 'physically_active'}


class AssessmentInputError(ValueError):
    """Base class for submissions that cannot be scored."""


class MissingInputError(AssessmentInputError):
    """One or more required fields were left empty.

    The message never names the fields; ``missing`` keeps them for logging.
    """

    def __init__(self, missing):
        super().__init__(MISSING_INPUT_MESSAGE)
        self.missing = frozenset(missing)


class InvalidInputError(AssessmentInputError):
    """A field value could not be parsed."""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(f"Invalid input for '{field}': {reason} (got {value!r})")
        self.field = field


class OutOfRangeError(AssessmentInputError):
    """A parsed value falls outside its allowed range."""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(f"Input out of range for '{field}': {value!r} ({reason})")
        self.field = field


class PatientAssessmentInput(BaseModel):
    """A complete, parsed submission. Built once per request and never mutated."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    patient_id: str = Field(..., min_length=1, description="Free-text identifier, not scored")
    age: int = Field(..., gt=0, description="Age in years")
    gender: Literal['male', 'female']
    height_cm: float = Field(..., gt=0, description="Height in cm, not scored")
    weight_kg: float = Field(..., gt=0, description="Weight in kg, not scored")
    systolic_bp: int = Field(..., gt=0, description="Systolic blood pressure in mmHg")
    diastolic_bp: int = Field(..., gt=0, description="Diastolic blood pressure in mmHg")
    cholesterol_mgdl: int = Field(..., gt=0, description="Total cholesterol in mg/dL")
    glucose_mgdl: int = Field(..., gt=0, description="Glucose in mg/dL")
    smoking: bool
    alcohol_intake: bool = Field(..., description="Not scored")
    physically_active: bool
    physical_activity_level: int = Field(..., ge=0, le=10, description="Self-rated 0-10, not scored")

    @field_validator('*', mode='before')
    @classmethod
    def _normalise_form_value(cls, value, info):
        # pandas cells arrive as numpy scalars
        if isinstance(value, np.generic):
            value = value.item()
        if isinstance(value, str):
            value = value.strip()

        name = info.field_name
        if name in _NUMERIC_FIELDS and isinstance(value, bool):
            raise ValueError("expected a number, got a yes/no value")
        if name in _FLAG_FIELDS:
            if isinstance(value, float) and value.is_integer():
                return int(value)
            if isinstance(value, str):
                return value.lower()
        if name == 'gender' and isinstance(value, str):
            return value.lower()
        if name == 'patient_id' and not isinstance(value, str):
            return str(value)
        return value


REQUIRED_FIELDS = tuple(PatientAssessmentInput.model_fields)


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    missing: FrozenSet[str]


def is_empty(value: Any) -> bool:
    """True for absent values: None, blank strings and NaN cells."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float):
        return math.isnan(value)
    return False


def validate_fields(raw: Mapping[str, Any]) -> ValidationResult:
    """Check that every required field is populated.

    Args:
        raw: Mapping of field name to submitted value.

    Returns:
        ValidationResult with the names of the empty fields, if any.
    """
    missing = frozenset(name for name in REQUIRED_FIELDS if is_empty(raw.get(name)))
    return ValidationResult(is_valid=not missing, missing=missing)


def _to_input_error(error: ValidationError) -> AssessmentInputError:
    first = error.errors()[0]
    field = str(first['loc'][0]) if first['loc'] else 'input'
    if first['type'] in _RANGE_ERROR_TYPES:
        return OutOfRangeError(field, first['input'], first['msg'])
    return InvalidInputError(field, first['input'], first['msg'])


def parse_patient_input(raw: Mapping[str, Any]) -> PatientAssessmentInput:
    """Validate and parse a raw submission into a PatientAssessmentInput.

    Args:
        raw: Mapping of field name to submitted value.

    Returns:
        The parsed, immutable input record.

    Raises:
        MissingInputError: If any required field is empty.
        InvalidInputError: If a value cannot be parsed.
        OutOfRangeError: If a parsed value is outside its allowed range.
    """
    result = validate_fields(raw)
    if not result.is_valid:
        raise MissingInputError(result.missing)

    try:
        return PatientAssessmentInput(**{name: raw[name] for name in REQUIRED_FIELDS})
    except ValidationError as e:
        raise _to_input_error(e) from None
