"""
Pydantic models for wizard sessions
"""
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from .tree import Language, QuestionNode, ResultNode


class HistoryEntry(BaseModel):
    """One answered question: which node, and which option (by position)"""
    node_id: str = Field(..., description="Question node that was answered")
    option_index: int = Field(..., ge=0, description="Position of the chosen option")

    model_config = ConfigDict(frozen=True)


class WizardState(BaseModel):
    """Traversal cursor and answer history for one session.

    States are immutable snapshots; every engine operation returns a new one.
    The engine never stores them, the caller owns the current snapshot.
    """
    scheme_id: str = Field(..., description="Scheme being screened")
    tree_id: str = Field(..., description="Tree version backing this session")
    current_node_id: str = Field(..., description="Node the user is on")
    history: Tuple[HistoryEntry, ...] = Field(default_factory=tuple, description="Answers in the order given")
    is_complete: bool = Field(False, description="True once a result node is reached")
    result: Optional[ResultNode] = Field(None, description="The reached result node, if complete")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "scheme_id": "gruha_lakshmi",
                "tree_id": "665f1c2ab9d1e2f3a4b5c6d7",
                "current_node_id": "q2",
                "history": [{"node_id": "q1", "option_index": 0}],
                "is_complete": False,
                "result": None
            }
        }
    )


class Progress(BaseModel):
    """How far through the questionnaire a session is.

    ``estimated_total`` assumes the shortest remaining route to a result, so it
    is a lower bound: taking a longer branch can raise it later.
    """
    current_step: int = Field(..., ge=0, description="Questions answered so far")
    estimated_total: int = Field(..., ge=0, description="Answered plus minimum remaining questions")
    percent_complete: int = Field(..., ge=0, le=100)

    model_config = ConfigDict(frozen=True)


class SummaryAnswer(BaseModel):
    """A question and the answer given to it"""
    question: str
    answer: str

    model_config = ConfigDict(frozen=True)


class SessionSummary(BaseModel):
    """Answered path plus outcome, ready for display"""
    answers: List[SummaryAnswer] = Field(default_factory=list)
    result: Optional[ResultNode] = None


class WizardActionRequest(BaseModel):
    """Request carrying the caller's current session snapshot"""
    state: WizardState = Field(..., description="Current wizard state")
    option_index: Optional[int] = Field(None, description="Chosen option, for answer requests")
    language: Language = Field("en", description="Display language")


class WizardStepResponse(BaseModel):
    """Everything a client needs to render the next wizard step"""
    state: WizardState
    question: Optional[QuestionNode] = None
    progress: Progress
