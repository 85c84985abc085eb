"""
Decision tree rules engine: validation, traversal, progress and summaries
"""

from .errors import TraversalError, TraversalErrorKind

from .validator import (
    validate_decision_tree,
    is_valid_decision_tree,
    parse_decision_tree
)

from .traverser import (
    initialize_wizard,
    get_current_node,
    get_current_question,
    answer_question,
    go_back,
    reset_wizard,
    get_answered_option
)

from .progress import get_progress
from .summary import get_session_summary
from .faq_extractor import extract_faq_from_tree, generate_faq_json_ld
from .completion import build_completion_record

__all__ = [
    # Errors
    "TraversalError",
    "TraversalErrorKind",
    
    # Validation
    "validate_decision_tree",
    "is_valid_decision_tree",
    "parse_decision_tree",
    
    # Traversal
    "initialize_wizard",
    "get_current_node",
    "get_current_question",
    "answer_question",
    "go_back",
    "reset_wizard",
    "get_answered_option",
    
    # Read-only projections
    "get_progress",
    "get_session_summary",
    "extract_faq_from_tree",
    "generate_faq_json_ld",
    "build_completion_record"
]
