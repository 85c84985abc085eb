"""
Step-by-step navigation through decision trees

Every function here is pure: it takes the tree and the caller's current
WizardState and returns a new WizardState, or raises TraversalError. Nothing
is cached or mutated, so any number of sessions can share one tree.
"""
import logging
from typing import Optional, Tuple, Union

from ..models.tree import DecisionTree, Option, QuestionNode, ResultNode
from ..models.wizard import HistoryEntry, WizardState
from .errors import TraversalError, TraversalErrorKind
from .validator import validate_decision_tree

logger = logging.getLogger(__name__)


def _fresh_state(scheme_id: str, tree_id: str, tree: DecisionTree) -> WizardState:
    start_node = tree.nodes.get(tree.start)
    if start_node is None:
        raise TraversalError(
            f"Start node '{tree.start}' not found in tree",
            TraversalErrorKind.NODE_NOT_FOUND,
            tree.start
        )

    is_complete = isinstance(start_node, ResultNode)
    return WizardState(
        scheme_id=scheme_id,
        tree_id=tree_id,
        current_node_id=tree.start,
        history=(),
        is_complete=is_complete,
        result=start_node if is_complete else None
    )


def initialize_wizard(scheme_id: str, tree_id: str, tree: DecisionTree) -> WizardState:
    """
    Start a new wizard session on a tree

    The tree is validated here, once; later operations trust it.

    Raises:
        TraversalError: INVALID_TREE if the tree fails validation
    """
    report = validate_decision_tree(tree)
    if not report.valid:
        codes = ", ".join(sorted({error.code.value for error in report.errors}))
        raise TraversalError(
            f"Cannot initialize wizard with invalid decision tree ({codes})",
            TraversalErrorKind.INVALID_TREE
        )

    logger.debug(f"Wizard initialized for scheme {scheme_id} on tree {tree_id}")
    return _fresh_state(scheme_id, tree_id, tree)


def get_current_node(tree: DecisionTree, state: WizardState) -> Union[QuestionNode, ResultNode]:
    """Node at the session's cursor; raises NODE_NOT_FOUND if the state is stale"""
    node = tree.nodes.get(state.current_node_id)
    if node is None:
        raise TraversalError(
            f"Current node '{state.current_node_id}' not found in tree",
            TraversalErrorKind.NODE_NOT_FOUND,
            state.current_node_id
        )
    return node


def get_current_question(tree: DecisionTree, state: WizardState) -> Optional[QuestionNode]:
    """The question to show next, or None once the session is complete"""
    if state.is_complete:
        return None

    node = get_current_node(tree, state)
    if isinstance(node, QuestionNode):
        return node
    return None


def answer_question(tree: DecisionTree, state: WizardState, option_index: int) -> WizardState:
    """
    Answer the current question and advance

    Args:
        tree: Validated decision tree
        state: Current wizard state
        option_index: Position of the chosen option (labels may repeat)

    Returns:
        New WizardState one step further along

    Raises:
        TraversalError: ALREADY_COMPLETE, NODE_NOT_FOUND, NOT_A_QUESTION or
            OPTION_INDEX_OUT_OF_RANGE
    """
    if state.is_complete:
        raise TraversalError(
            "Cannot answer question - wizard is already complete",
            TraversalErrorKind.ALREADY_COMPLETE,
            state.current_node_id
        )

    current_node = get_current_node(tree, state)

    if not isinstance(current_node, QuestionNode):
        raise TraversalError(
            "Cannot answer - current node is not a question",
            TraversalErrorKind.NOT_A_QUESTION,
            state.current_node_id
        )

    option_count = len(current_node.options)
    if (
        isinstance(option_index, bool)
        or not isinstance(option_index, int)
        or not 0 <= option_index < option_count
    ):
        raise TraversalError(
            f"Invalid option index: {option_index!r}. Expected 0-{option_count - 1}",
            TraversalErrorKind.OPTION_INDEX_OUT_OF_RANGE,
            state.current_node_id
        )

    next_node_id = current_node.options[option_index].next
    next_node = tree.nodes.get(next_node_id)
    if next_node is None:
        raise TraversalError(
            f"Next node '{next_node_id}' not found in tree",
            TraversalErrorKind.NODE_NOT_FOUND,
            next_node_id
        )

    is_complete = isinstance(next_node, ResultNode)
    return state.model_copy(update={
        "current_node_id": next_node_id,
        "history": state.history + (HistoryEntry(node_id=state.current_node_id, option_index=option_index),),
        "is_complete": is_complete,
        "result": next_node if is_complete else None
    })


def go_back(tree: DecisionTree, state: WizardState) -> WizardState:
    """
    Undo the last answer

    Going back from a result always lands on the question that led to it.

    Raises:
        TraversalError: NO_HISTORY_TO_GO_BACK if nothing has been answered
    """
    if not state.history:
        raise TraversalError(
            "Cannot go back - already at first question",
            TraversalErrorKind.NO_HISTORY_TO_GO_BACK,
            state.current_node_id
        )

    last_answer = state.history[-1]
    return state.model_copy(update={
        "current_node_id": last_answer.node_id,
        "history": state.history[:-1],
        "is_complete": False,
        "result": None
    })


def reset_wizard(tree: DecisionTree, state: WizardState) -> WizardState:
    """Back to the first question, discarding all answers"""
    return _fresh_state(state.scheme_id, state.tree_id, tree)


def get_answered_option(tree: DecisionTree, entry: HistoryEntry) -> Tuple[QuestionNode, Option]:
    """
    Question and chosen option recorded by a history entry

    States arrive from clients, so every entry is checked against the tree.

    Raises:
        TraversalError: NODE_NOT_FOUND, NOT_A_QUESTION or OPTION_INDEX_OUT_OF_RANGE
    """
    node = tree.nodes.get(entry.node_id)
    if node is None:
        raise TraversalError(
            f"Answered node '{entry.node_id}' not found in tree",
            TraversalErrorKind.NODE_NOT_FOUND,
            entry.node_id
        )

    if not isinstance(node, QuestionNode):
        raise TraversalError(
            f"Answered node '{entry.node_id}' is not a question",
            TraversalErrorKind.NOT_A_QUESTION,
            entry.node_id
        )

    if entry.option_index >= len(node.options):
        raise TraversalError(
            f"Invalid option index in history: {entry.option_index}. "
            f"Expected 0-{len(node.options) - 1}",
            TraversalErrorKind.OPTION_INDEX_OUT_OF_RANGE,
            entry.node_id
        )

    return node, node.options[entry.option_index]
