"""
Progress estimation for wizard sessions
"""
import logging
import math

from ..models.tree import DecisionTree
from ..models.wizard import Progress, WizardState
from .graph import shortest_hops_to_result

logger = logging.getLogger(__name__)


def get_progress(tree: DecisionTree, state: WizardState) -> Progress:
    """
    Estimate how far through the questionnaire a session is

    The remaining count is the shortest route from the current node to any
    result, found breadth-first. On a branching tree the user may take a
    longer route, so ``estimated_total`` is a lower bound and
    ``percent_complete`` can drop when a longer branch is chosen.

    Args:
        tree: Validated decision tree
        state: Current wizard state

    Returns:
        Progress with step, estimated total and percentage (0-100)
    """
    current_step = len(state.history)

    if state.is_complete:
        remaining = 0
    else:
        remaining = shortest_hops_to_result(tree, state.current_node_id)
        if remaining is None:
            logger.warning(
                f"No result reachable from node '{state.current_node_id}' "
                f"on tree {state.tree_id}"
            )
            remaining = 0

    estimated_total = current_step + remaining

    if estimated_total == 0:
        percent_complete = 100
    else:
        # Round half up
        percent_complete = math.floor(100 * current_step / estimated_total + 0.5)
        percent_complete = max(0, min(100, percent_complete))

    return Progress(
        current_step=current_step,
        estimated_total=estimated_total,
        percent_complete=percent_complete
    )
