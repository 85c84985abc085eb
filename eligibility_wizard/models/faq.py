"""
Pydantic models for FAQ entries derived from decision trees
"""
from typing import Any, Dict, List
from pydantic import BaseModel, Field


class FAQItem(BaseModel):
    """A question/answer pair for static display"""
    question: str
    answer: str


class FAQResponse(BaseModel):
    """FAQ entries for a scheme plus their schema.org structured data"""
    scheme_id: str
    items: List[FAQItem] = Field(default_factory=list)
    json_ld: Dict[str, Any] = Field(default_factory=dict)
