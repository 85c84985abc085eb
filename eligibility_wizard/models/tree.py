"""
Pydantic models for scheme decision trees
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Tuple, Union
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

Language = Literal["en", "kn"]


def get_current_utc_time():
    """Get current UTC time for default values"""
    return datetime.now(timezone.utc)


class ResultStatus(str, Enum):
    """Outcome carried by a result node.

    The wording shown to users is always hedged: ``eligible`` means the user
    *may* meet the basic criteria, never that they are guaranteed a benefit.
    """
    ELIGIBLE = "eligible"
    INELIGIBLE = "ineligible"
    NEEDS_REVIEW = "needs_review"


def _pick(language: str, english: str, kannada: Optional[str]) -> str:
    if language == "kn" and kannada:
        return kannada
    return english


class Option(BaseModel):
    """One selectable answer on a question, pointing at the next node"""
    label: str = Field(..., min_length=1, description="Answer text")
    label_kn: Optional[str] = Field(None, description="Answer text in Kannada")
    next: str = Field(..., min_length=1, description="Id of the node this answer leads to")

    model_config = ConfigDict(frozen=True)

    def display_label(self, language: str = "en") -> str:
        return _pick(language, self.label, self.label_kn)


class QuestionNode(BaseModel):
    """A decision point in the tree"""
    id: str = Field(default="", description="Node id (the key the node is stored under)")
    type: Literal["question"] = "question"
    text: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("text", "text_en"),
        description="Question text"
    )
    text_kn: Optional[str] = Field(None, description="Question text in Kannada")
    options: Tuple[Option, ...] = Field(default_factory=tuple, description="Answers, in display order")

    model_config = ConfigDict(frozen=True)

    def display_text(self, language: str = "en") -> str:
        return _pick(language, self.text, self.text_kn)


class ResultNode(BaseModel):
    """A terminal node carrying an eligibility determination"""
    id: str = Field(default="", description="Node id (the key the node is stored under)")
    type: Literal["result"] = "result"
    status: ResultStatus = Field(..., description="Eligibility determination")
    message: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("message", "reason_en"),
        description="Explanation shown with the result"
    )
    message_kn: Optional[str] = Field(None, validation_alias=AliasChoices("message_kn", "reason_kn"))
    fix: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("fix", "fix_en"),
        description="What the user can do to become eligible"
    )
    fix_kn: Optional[str] = None
    next_steps: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("next_steps", "next_steps_en"),
        description="How to apply"
    )
    next_steps_kn: Optional[str] = None
    documents: Tuple[str, ...] = Field(default_factory=tuple, description="Documents needed to apply")

    model_config = ConfigDict(frozen=True)

    def display_message(self, language: str = "en") -> str:
        return _pick(language, self.message, self.message_kn)


Node = Annotated[Union[QuestionNode, ResultNode], Field(discriminator="type")]


class DecisionTree(BaseModel):
    """Question/result graph for one version of a scheme's questionnaire.

    Parsing only checks the shape of each node. Graph invariants (start and
    ``next`` references resolve, a result is reachable, no cycles) are the
    validator's job, see ``rules_engine.validator``.
    """
    start: str = Field(..., min_length=1, description="Id of the first node")
    nodes: Dict[str, Node] = Field(..., description="All nodes keyed by id")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def inject_node_ids(cls, data: Any) -> Any:
        """Copy each node's key into its ``id`` field"""
        if not isinstance(data, dict) or not isinstance(data.get("nodes"), dict):
            return data

        nodes = {}
        for node_id, node in data["nodes"].items():
            if isinstance(node, dict):
                node = {**node, "id": node_id}
            elif isinstance(node, (QuestionNode, ResultNode)) and node.id != node_id:
                node = node.model_copy(update={"id": node_id})
            nodes[node_id] = node
        return {**data, "nodes": nodes}

    def get_node(self, node_id: str) -> Optional[Union[QuestionNode, ResultNode]]:
        return self.nodes.get(node_id)

    def to_storage(self) -> Dict[str, Any]:
        """Serialize to the JSON layout used by tree storage"""
        nodes = {}
        for node_id, node in self.nodes.items():
            data = node.model_dump(mode="json", exclude_none=True, exclude={"id"})
            if data.get("documents") == []:
                del data["documents"]
            nodes[node_id] = data
        return {"start": self.start, "nodes": nodes}


class DecisionTreeRow(BaseModel):
    """A stored decision tree version for a scheme"""
    id: Optional[str] = Field(default=None, alias="_id")
    scheme_id: str = Field(..., description="Scheme this tree belongs to")
    version: int = Field(default=1, ge=1)
    is_active: bool = Field(default=True)
    tree: Dict[str, Any] = Field(..., description="Raw tree JSON, validated before use")
    created_by: Optional[str] = None
    created_at: datetime = Field(default_factory=get_current_utc_time)
    updated_at: datetime = Field(default_factory=get_current_utc_time)

    @field_validator('id', mode='before')
    @classmethod
    def stringify_object_id(cls, v):
        if v is not None:
            return str(v)
        return v

    model_config = ConfigDict(
        validate_by_name=True,
        json_schema_extra={
            "example": {
                "scheme_id": "gruha_lakshmi",
                "version": 2,
                "is_active": True,
                "tree": {
                    "start": "q1",
                    "nodes": {
                        "q1": {
                            "type": "question",
                            "text": "Are you a Karnataka resident?",
                            "options": [
                                {"label": "Yes", "next": "r_yes"},
                                {"label": "No", "next": "r_no"}
                            ]
                        },
                        "r_yes": {"type": "result", "status": "eligible", "message": "You may meet the criteria."},
                        "r_no": {"type": "result", "status": "ineligible", "message": "Only for residents."}
                    }
                }
            }
        }
    )
