"""
Translation of wizard errors into HTTP responses
"""
from fastapi import HTTPException

from ..rules_engine import TraversalError, TraversalErrorKind
from ..services.wizard_service import TreeNotFoundError

STATUS_BY_KIND = {
    TraversalErrorKind.INVALID_TREE: 422,
    TraversalErrorKind.ALREADY_COMPLETE: 409,
    TraversalErrorKind.OPTION_INDEX_OUT_OF_RANGE: 400,
    TraversalErrorKind.NODE_NOT_FOUND: 409,
    TraversalErrorKind.NOT_A_QUESTION: 409,
    TraversalErrorKind.NO_HISTORY_TO_GO_BACK: 409,
}


def traversal_http_error(error: TraversalError) -> HTTPException:
    """HTTPException whose detail names the exact error kind"""
    return HTTPException(
        status_code=STATUS_BY_KIND.get(error.kind, 400),
        detail=error.to_dict()
    )


def not_found_http_error(error: TreeNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={"kind": "TREE_NOT_FOUND", "message": str(error), "node_id": None}
    )
