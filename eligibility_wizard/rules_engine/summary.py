"""
Display-ready summaries of wizard sessions
"""
from ..models.tree import DecisionTree
from ..models.wizard import SessionSummary, SummaryAnswer, WizardState
from .traverser import get_answered_option


def get_session_summary(tree: DecisionTree, state: WizardState, language: str = "en") -> SessionSummary:
    """
    Answered questions, in the order answered, plus the outcome

    Kannada text is used for ``language="kn"`` where the tree provides it.

    Raises:
        TraversalError: if a history entry does not match the tree
    """
    answers = []
    for entry in state.history:
        node, option = get_answered_option(tree, entry)
        answers.append(SummaryAnswer(
            question=node.display_text(language),
            answer=option.display_label(language)
        ))

    return SessionSummary(answers=answers, result=state.result)
