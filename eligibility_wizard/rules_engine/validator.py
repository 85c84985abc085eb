"""
Graph validation for decision trees

Every tree must pass validation before it backs a wizard session. A tree that
fails here could strand a user on a question with no way forward.
"""
import logging
from typing import Any, List

from pydantic import ValidationError

from ..config import settings
from ..models.tree import DecisionTree, QuestionNode, ResultNode
from ..models.validation import (
    TreeStats,
    TreeValidationIssue,
    TreeValidationResult,
    ValidationCode,
)
from .errors import TraversalError, TraversalErrorKind
from .graph import bfs_depths, find_cycle

logger = logging.getLogger(__name__)


def _schema_failure(exc: ValidationError) -> TreeValidationResult:
    errors = [
        TreeValidationIssue(
            code=ValidationCode.INVALID_SCHEMA,
            message=error["msg"],
            details=".".join(str(part) for part in error["loc"])
        )
        for error in exc.errors()
    ]
    return TreeValidationResult(valid=False, errors=errors)


def validate_decision_tree(candidate: Any) -> TreeValidationResult:
    """
    Validate a decision tree

    Checks, in order:
    1. The value parses as a tree (node shapes, statuses, required text)
    2. The start node exists
    3. Every option's ``next`` points at an existing node
    4. Every reachable question has at least one option
    5. The reachable subgraph has no cycles
    6. At least one result node is reachable

    Unreachable nodes are tolerated and reported as warnings.

    Args:
        candidate: Decoded JSON value, or an already parsed DecisionTree

    Returns:
        TreeValidationResult with errors, warnings and stats
    """
    if isinstance(candidate, DecisionTree):
        tree = candidate
    else:
        try:
            tree = DecisionTree.model_validate(candidate)
        except ValidationError as e:
            return _schema_failure(e)

    errors: List[TreeValidationIssue] = []
    warnings: List[str] = []

    if tree.start not in tree.nodes:
        errors.append(TreeValidationIssue(
            code=ValidationCode.INVALID_START_REF,
            message=f"Start node '{tree.start}' does not exist in nodes",
            node_id=tree.start
        ))

    dangling = set()
    for node_id, node in tree.nodes.items():
        if not isinstance(node, QuestionNode):
            continue
        for index, option in enumerate(node.options):
            if option.next not in tree.nodes:
                dangling.add(node_id)
                errors.append(TreeValidationIssue(
                    code=ValidationCode.INVALID_NEXT_REF,
                    message=f"Node '{node_id}' references non-existent node '{option.next}'",
                    node_id=node_id,
                    details=f'Option {index} "{option.label}" -> {option.next}'
                ))

    depths = bfs_depths(tree)
    empty_questions = set()

    for node_id in depths:
        node = tree.nodes[node_id]
        if not isinstance(node, QuestionNode):
            continue
        option_count = len(node.options)
        if option_count == 0:
            empty_questions.add(node_id)
            errors.append(TreeValidationIssue(
                code=ValidationCode.EMPTY_OPTIONS,
                message=f"Question node '{node_id}' has no options",
                node_id=node_id
            ))
        elif option_count == 1:
            warnings.append(f"Question node '{node_id}' has only one option")
        elif option_count > settings.max_recommended_options:
            warnings.append(
                f"Question node '{node_id}' has {option_count} options "
                f"(more than {settings.max_recommended_options})"
            )

    for node_id in tree.nodes:
        if node_id not in depths:
            warnings.append(f"Node '{node_id}' is not reachable from start")

    cycle = find_cycle(tree)
    if cycle:
        errors.append(TreeValidationIssue(
            code=ValidationCode.CYCLE_DETECTED,
            message=f"Cycle detected in tree: {' -> '.join(cycle)}",
            node_id=cycle[0],
            details=" -> ".join(cycle)
        ))

    reachable_results = [
        node_id for node_id in depths if isinstance(tree.nodes[node_id], ResultNode)
    ]
    if tree.start in tree.nodes and not reachable_results:
        errors.append(TreeValidationIssue(
            code=ValidationCode.NO_TERMINAL,
            message=f"No result node is reachable from start node '{tree.start}'",
            node_id=tree.start
        ))

    all_paths_terminate = (
        bool(depths)
        and cycle is None
        and not empty_questions
        and not any(node_id in dangling for node_id in depths)
    )

    stats = TreeStats(
        total_nodes=len(tree.nodes),
        question_nodes=len(depths) - len(reachable_results),
        result_nodes=len(reachable_results),
        max_depth=max(depths.values(), default=0),
        all_paths_terminate=all_paths_terminate
    )

    if errors:
        logger.debug(f"Decision tree rejected with {len(errors)} error(s)")

    return TreeValidationResult(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        stats=stats
    )


def is_valid_decision_tree(candidate: Any) -> bool:
    """Quick check; use validate_decision_tree for the detailed report"""
    return validate_decision_tree(candidate).valid


def parse_decision_tree(candidate: Any) -> DecisionTree:
    """
    Parse and validate a decision tree in one step

    Raises:
        TraversalError: INVALID_TREE if the tree fails validation
    """
    report = validate_decision_tree(candidate)
    if not report.valid:
        summary = "; ".join(error.message for error in report.errors)
        raise TraversalError(
            f"Invalid decision tree: {summary}",
            TraversalErrorKind.INVALID_TREE
        )

    if isinstance(candidate, DecisionTree):
        return candidate
    return DecisionTree.model_validate(candidate)
