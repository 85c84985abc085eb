"""
Pydantic models for wizard completion analytics
"""
from typing import List
from pydantic import BaseModel, ConfigDict, Field

from .tree import Language, ResultStatus


class AnswerPathStep(BaseModel):
    """One step of the path a user took, without any personal data"""
    node_id: str
    option_label: str


class CompletionRecord(BaseModel):
    """Anonymous record of a finished wizard session"""
    scheme_id: str = Field(..., min_length=1)
    tree_id: str = Field(..., min_length=1)
    result_status: ResultStatus
    terminal_node_id: str = Field(..., min_length=1)
    answer_path: List[AnswerPathStep] = Field(default_factory=list)
    answer_count: int = Field(0, ge=0)
    language: Language = "en"

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "scheme_id": "gruha_lakshmi",
                "tree_id": "665f1c2ab9d1e2f3a4b5c6d7",
                "result_status": "eligible",
                "terminal_node_id": "r_eligible",
                "answer_path": [
                    {"node_id": "q1", "option_label": "Yes"},
                    {"node_id": "q2", "option_label": "Yes"}
                ],
                "answer_count": 2,
                "language": "en"
            }
        }
    )
