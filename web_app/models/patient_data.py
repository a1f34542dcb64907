from typing import Dict

from pydantic import BaseModel, ConfigDict

from cad_risk.validation import PatientAssessmentInput


class PatientData(PatientAssessmentInput):
    """Request body of POST /assess, as published in the OpenAPI schema."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "patient_id": "P-001",
                "age": 66,
                "gender": "male",
                "height_cm": 178,
                "weight_kg": 92,
                "systolic_bp": 150,
                "diastolic_bp": 70,
                "cholesterol_mgdl": 250,
                "glucose_mgdl": 130,
                "smoking": True,
                "alcohol_intake": False,
                "physically_active": False,
                "physical_activity_level": 2,
            }
        }
    )


class AssessmentResponse(BaseModel):
    label: str
    score: int
    factors: Dict[str, int]
