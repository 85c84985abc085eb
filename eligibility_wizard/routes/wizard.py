"""
API routes for wizard sessions
"""
import logging
from fastapi import APIRouter, HTTPException

from ..models.completion import CompletionRecord
from ..models.wizard import SessionSummary, WizardActionRequest, WizardStepResponse
from ..rules_engine import TraversalError, TraversalErrorKind
from ..services.wizard_service import TreeNotFoundError, wizard_service
from .errors import not_found_http_error, traversal_http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/wizard", tags=["wizard"])


@router.post("/{scheme_id}/start", response_model=WizardStepResponse)
async def start_wizard(scheme_id: str):
    """
    Start an eligibility wizard on the scheme's active decision tree
    """
    try:
        return await wizard_service.start(scheme_id)
    except TreeNotFoundError as e:
        raise not_found_http_error(e)
    except TraversalError as e:
        raise traversal_http_error(e)
    except Exception as e:
        logger.error(f"Error starting wizard for {scheme_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/answer", response_model=WizardStepResponse)
async def answer(request: WizardActionRequest):
    """
    Answer the current question by option index
    """
    if request.option_index is None:
        raise traversal_http_error(TraversalError(
            "option_index is required to answer a question",
            TraversalErrorKind.OPTION_INDEX_OUT_OF_RANGE,
            request.state.current_node_id
        ))

    try:
        return await wizard_service.answer(request.state, request.option_index)
    except TreeNotFoundError as e:
        raise not_found_http_error(e)
    except TraversalError as e:
        raise traversal_http_error(e)
    except Exception as e:
        logger.error(f"Error answering question: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/back", response_model=WizardStepResponse)
async def back(request: WizardActionRequest):
    """
    Undo the last answer
    """
    try:
        return await wizard_service.back(request.state)
    except TreeNotFoundError as e:
        raise not_found_http_error(e)
    except TraversalError as e:
        raise traversal_http_error(e)
    except Exception as e:
        logger.error(f"Error going back: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/reset", response_model=WizardStepResponse)
async def reset(request: WizardActionRequest):
    """
    Start over from the first question
    """
    try:
        return await wizard_service.reset(request.state)
    except TreeNotFoundError as e:
        raise not_found_http_error(e)
    except TraversalError as e:
        raise traversal_http_error(e)
    except Exception as e:
        logger.error(f"Error resetting wizard: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/summary", response_model=SessionSummary)
async def summary(request: WizardActionRequest):
    """
    Answers given so far and the outcome, if any
    """
    try:
        return await wizard_service.summary(request.state, request.language)
    except TreeNotFoundError as e:
        raise not_found_http_error(e)
    except TraversalError as e:
        raise traversal_http_error(e)
    except Exception as e:
        logger.error(f"Error building session summary: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/complete")
async def complete(request: WizardActionRequest):
    """
    Record a finished session for analytics (always succeeds)
    """
    try:
        return await wizard_service.record_completion(request.state, request.language)
    except Exception as e:
        # Analytics must never break the user experience
        logger.error(f"Error recording completion: {e}")
        return {"ok": True}


completions_router = APIRouter(tags=["analytics"])


@completions_router.post("/completions")
async def record_completion(record: CompletionRecord):
    """
    Record an anonymous wizard completion built by the client
    """
    try:
        return await wizard_service.store_completion(record)
    except Exception as e:
        logger.error(f"Error recording completion: {e}")
        return {"ok": True}
