"""
API routes for decision tree validation and FAQ content
"""
import logging
from typing import Any, Dict
from fastapi import APIRouter, Body, HTTPException

from ..models.faq import FAQResponse
from ..models.validation import TreeValidationResult
from ..rules_engine import TraversalError
from ..services.wizard_service import TreeNotFoundError, wizard_service
from .errors import not_found_http_error, traversal_http_error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["trees"])


@router.post("/trees/validate", response_model=TreeValidationResult)
async def validate_tree(tree: Dict[str, Any] = Body(...)):
    """
    Check a decision tree before it is published
    """
    return wizard_service.validate_tree(tree)


@router.get("/schemes/{scheme_id}/faq", response_model=FAQResponse)
async def get_scheme_faq(scheme_id: str):
    """
    FAQ entries derived from the scheme's active decision tree
    """
    try:
        return await wizard_service.faq(scheme_id)
    except TreeNotFoundError as e:
        raise not_found_http_error(e)
    except TraversalError as e:
        raise traversal_http_error(e)
    except Exception as e:
        logger.error(f"Error generating FAQ for {scheme_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
