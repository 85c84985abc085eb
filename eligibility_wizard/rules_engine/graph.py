"""
Graph walks over decision trees

All walks are iterative and skip ``next`` references that do not resolve, so
they are safe to run on trees that have not passed validation yet.
"""
from collections import deque
from typing import Deque, Dict, Iterator, List, Optional, Tuple

from ..models.tree import DecisionTree, QuestionNode, ResultNode


def iter_successors(tree: DecisionTree, node_id: str) -> Iterator[str]:
    """Yield the ids a node points at, in option order (unresolved ids included)"""
    node = tree.nodes.get(node_id)
    if isinstance(node, QuestionNode):
        for option in node.options:
            yield option.next


def bfs_depths(tree: DecisionTree, origin: Optional[str] = None) -> Dict[str, int]:
    """Breadth-first question-hop distance from ``origin`` (default: start) to every
    reachable node. Insertion order of the result is visit order."""
    origin = tree.start if origin is None else origin
    if origin not in tree.nodes:
        return {}

    depths: Dict[str, int] = {origin: 0}
    queue: Deque[str] = deque([origin])

    while queue:
        node_id = queue.popleft()
        for child in iter_successors(tree, node_id):
            if child in tree.nodes and child not in depths:
                depths[child] = depths[node_id] + 1
                queue.append(child)

    return depths


def reachable_node_ids(tree: DecisionTree) -> List[str]:
    """Ids of the existing nodes reachable from start, in breadth-first order"""
    return list(bfs_depths(tree))


def shortest_hops_to_result(tree: DecisionTree, origin: str) -> Optional[int]:
    """Length of the shortest path from ``origin`` to any result node.

    Returns 0 when ``origin`` is itself a result and None when no result can
    be reached (or ``origin`` does not exist).
    """
    if origin not in tree.nodes:
        return None

    queue: Deque[Tuple[str, int]] = deque([(origin, 0)])
    seen = {origin}

    while queue:
        node_id, hops = queue.popleft()
        if isinstance(tree.nodes[node_id], ResultNode):
            return hops
        for child in iter_successors(tree, node_id):
            if child in tree.nodes and child not in seen:
                seen.add(child)
                queue.append((child, hops + 1))

    return None


def find_cycle(tree: DecisionTree) -> Optional[List[str]]:
    """Find a cycle in the subgraph reachable from start.

    Returns the cycle as a closed path (first id repeated at the end), or None
    if the reachable subgraph is acyclic.
    """
    if tree.start not in tree.nodes:
        return None

    on_path = {tree.start}
    finished = set()
    path = [tree.start]
    stack = [(tree.start, iter_successors(tree, tree.start))]

    while stack:
        node_id, children = stack[-1]
        descended = False

        for child in children:
            if child not in tree.nodes or child in finished:
                continue
            if child in on_path:
                return path[path.index(child):] + [child]
            on_path.add(child)
            path.append(child)
            stack.append((child, iter_successors(tree, child)))
            descended = True
            break

        if not descended:
            stack.pop()
            path.pop()
            on_path.discard(node_id)
            finished.add(node_id)

    return None
