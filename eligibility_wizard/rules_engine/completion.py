"""
Completion records for wizard analytics
"""
from ..models.completion import AnswerPathStep, CompletionRecord
from ..models.tree import DecisionTree
from ..models.wizard import WizardState
from .traverser import get_answered_option


def build_completion_record(tree: DecisionTree, state: WizardState, language: str = "en") -> CompletionRecord:
    """
    Anonymous analytics record for a finished session

    Only the decision path and outcome are recorded, never user data.

    Raises:
        ValueError: if the session has not reached a result
        TraversalError: if a history entry does not match the tree
    """
    if not state.is_complete or state.result is None:
        raise ValueError("Cannot record completion for a session without a result")

    answer_path = []
    for entry in state.history:
        _, option = get_answered_option(tree, entry)
        answer_path.append(AnswerPathStep(node_id=entry.node_id, option_label=option.label))

    return CompletionRecord(
        scheme_id=state.scheme_id,
        tree_id=state.tree_id,
        result_status=state.result.status,
        terminal_node_id=state.current_node_id,
        answer_path=answer_path,
        answer_count=len(answer_path),
        language=language
    )
