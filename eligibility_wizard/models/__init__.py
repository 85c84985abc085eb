"""
Models package for the Scheme Eligibility Wizard
"""

from .tree import (
    ResultStatus,
    Option,
    QuestionNode,
    ResultNode,
    Node,
    DecisionTree,
    DecisionTreeRow
)

from .wizard import (
    HistoryEntry,
    WizardState,
    Progress,
    SummaryAnswer,
    SessionSummary,
    WizardActionRequest,
    WizardStepResponse
)

from .validation import (
    ValidationCode,
    TreeValidationIssue,
    TreeStats,
    TreeValidationResult
)

from .faq import FAQItem, FAQResponse
from .completion import AnswerPathStep, CompletionRecord

__all__ = [
    # Tree models
    "ResultStatus",
    "Option",
    "QuestionNode",
    "ResultNode",
    "Node",
    "DecisionTree",
    "DecisionTreeRow",
    
    # Wizard models
    "HistoryEntry",
    "WizardState",
    "Progress",
    "SummaryAnswer",
    "SessionSummary",
    "WizardActionRequest",
    "WizardStepResponse",
    
    # Validation models
    "ValidationCode",
    "TreeValidationIssue",
    "TreeStats",
    "TreeValidationResult",
    
    # FAQ and analytics models
    "FAQItem",
    "FAQResponse",
    "AnswerPathStep",
    "CompletionRecord"
]
