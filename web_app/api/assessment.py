"""CAD risk assessment API endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Request

from cad_risk.scoring import DEFAULT_RULES, assess, rules_from_config
from cad_risk.utils import load_config
from cad_risk.validation import AssessmentInputError, MissingInputError
from web_app.config import config
from web_app.models.patient_data import AssessmentResponse, PatientData

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Assessment"])

# Scoring rules are read once per process
_rules_cache = {}


def _load_rules():
    """Load scoring rules from SCORING_CONFIG, or the defaults when unset."""
    if "rules" not in _rules_cache:
        if config.SCORING_CONFIG:
            logger.info(f"Loading scoring rules from {config.SCORING_CONFIG}")
            try:
                _rules_cache["rules"] = rules_from_config(load_config(config.SCORING_CONFIG))
            except (FileNotFoundError, ValueError) as e:
                logger.error(f"Scoring rules unavailable: {e}")
                raise HTTPException(
                    status_code=503,
                    detail=f"Scoring rules unavailable. Check SCORING_CONFIG: {e}"
                )
        else:
            _rules_cache["rules"] = DEFAULT_RULES
    return _rules_cache["rules"]


def _clear_cache():
    """Clear cached rules (useful after editing the scoring config)."""
    _rules_cache.clear()


# The body is read raw so that empty fields reach the validation gate and get
# the generic missing-input message; the schema is still published from PatientData.
@router.post(
    "/assess",
    response_model=AssessmentResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": PatientData.model_json_schema()}},
        }
    },
)
async def assess_patient(request: Request):
    """
    Assess a patient's coronary artery disease risk.

    Every field is required. Incomplete submissions are rejected with a
    generic message; unparseable or out-of-range values with the reason.
    """
    rules = _load_rules()

    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=422, detail="Request body must be a JSON object")
    if not isinstance(body, dict):
        raise HTTPException(status_code=422, detail="Request body must be a JSON object")

    try:
        result = assess(body, rules)
    except MissingInputError as e:
        logger.warning(f"Assessment rejected, missing fields: {sorted(e.missing)}")
        raise HTTPException(status_code=422, detail=str(e))
    except AssessmentInputError as e:
        logger.warning(f"Assessment rejected: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    logger.info(f"Assessed patient {body.get('patient_id')}: {result.label} (score {result.score})")
    return result.to_dict()


@router.get("/rules")
async def get_rules():
    """Get the active scoring weights, cut-offs and threshold."""
    return _load_rules().to_dict()
