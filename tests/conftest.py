"""Shared fixtures for CAD risk tests."""
import pytest


@pytest.fixture
def high_risk_submission():
    """Older male smoker with elevated readings (14 points)."""
    return {
        "patient_id": "P-001",
        "age": "66",
        "gender": "male",
        "height_cm": "178",
        "weight_kg": "92",
        "systolic_bp": "150",
        "diastolic_bp": "70",
        "cholesterol_mgdl": "250",
        "glucose_mgdl": "130",
        "smoking": "1",
        "alcohol_intake": "0",
        "physically_active": "0",
        "physical_activity_level": "2",
    }


@pytest.fixture
def low_risk_submission():
    """Young active female non-smoker with normal readings (0 points)."""
    return {
        "patient_id": "P-002",
        "age": "30",
        "gender": "female",
        "height_cm": "165",
        "weight_kg": "58",
        "systolic_bp": "110",
        "diastolic_bp": "70",
        "cholesterol_mgdl": "180",
        "glucose_mgdl": "90",
        "smoking": "0",
        "alcohol_intake": "0",
        "physically_active": "1",
        "physical_activity_level": "7",
    }
