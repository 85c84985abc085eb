"""
Error taxonomy for decision tree traversal
"""
from enum import Enum
from typing import Optional


class TraversalErrorKind(str, Enum):
    """Every way a wizard operation can refuse to produce a new state"""
    INVALID_TREE = "INVALID_TREE"
    ALREADY_COMPLETE = "ALREADY_COMPLETE"
    OPTION_INDEX_OUT_OF_RANGE = "OPTION_INDEX_OUT_OF_RANGE"
    NODE_NOT_FOUND = "NODE_NOT_FOUND"
    NOT_A_QUESTION = "NOT_A_QUESTION"
    NO_HISTORY_TO_GO_BACK = "NO_HISTORY_TO_GO_BACK"


class TraversalError(Exception):
    """Raised when a wizard operation cannot be applied.

    Callers must surface these to the user; a swallowed traversal error can
    leave someone stuck on an inconsistent step.
    """

    def __init__(self, message: str, kind: TraversalErrorKind, node_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.node_id = node_id

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "node_id": self.node_id
        }

    def __repr__(self) -> str:
        return f"TraversalError(kind={self.kind.value!r}, message={self.message!r}, node_id={self.node_id!r})"
