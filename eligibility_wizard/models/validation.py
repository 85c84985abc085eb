"""
Pydantic models for decision tree validation reports
"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class ValidationCode(str, Enum):
    """Kinds of tree defects reported by the validator"""
    INVALID_SCHEMA = "INVALID_SCHEMA"
    INVALID_START_REF = "INVALID_START_REF"
    INVALID_NEXT_REF = "INVALID_NEXT_REF"
    EMPTY_OPTIONS = "EMPTY_OPTIONS"
    NO_TERMINAL = "NO_TERMINAL"
    CYCLE_DETECTED = "CYCLE_DETECTED"


class TreeValidationIssue(BaseModel):
    """A single violated tree invariant"""
    code: ValidationCode
    message: str
    node_id: Optional[str] = None
    details: Optional[str] = None


class TreeStats(BaseModel):
    """Shape of the part of the tree reachable from the start node"""
    total_nodes: int = 0
    question_nodes: int = 0
    result_nodes: int = 0
    max_depth: int = 0
    all_paths_terminate: bool = False


class TreeValidationResult(BaseModel):
    """Outcome of validating a candidate tree"""
    valid: bool
    errors: List[TreeValidationIssue] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    stats: TreeStats = Field(default_factory=TreeStats)

    def has_error(self, code: ValidationCode) -> bool:
        return any(error.code == code for error in self.errors)
