"""Pure forest traversal and edit operations.

All functions in this module are pure - no I/O, no side effects.
They take a forest in and return data out. Edits return a new forest that
shares every untouched subtree with the input; when the targeted id is not
present the input forest object itself is returned, so ``new is old`` tells
a caller that nothing happened.
"""

from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from .models import Forest, TaskNode

T = TypeVar("T")

BREADCRUMB_SEPARATOR = " > "


# =============================================================================
# Fundamental Operations
# =============================================================================


def fold_forest(
    forest: Forest,
    initial: T,
    f: Callable[[T, TaskNode, list[str]], T],
) -> T:
    """Fold over all nodes in the forest with their name paths.

    Visits every node in depth-first order, accumulating a result.

    Args:
        forest: Root sequence to fold over
        initial: Starting accumulator value
        f: Function (accumulator, node, path) -> new_accumulator, where path
            holds the names from the outermost root down to the node itself

    Returns:
        Final accumulated value after visiting all nodes
    """

    def fold_node(acc: T, node: TaskNode, path: list[str]) -> T:
        current_path = path + [node.name]
        acc = f(acc, node, current_path)
        for child in node.children:
            acc = fold_node(acc, child, current_path)
        return acc

    result = initial
    for root in forest:
        result = fold_node(result, root, [])
    return result


def filter_nodes(
    forest: Forest,
    predicate: Callable[[TaskNode], bool],
) -> list[TaskNode]:
    """Return every node matching a predicate, depth-first."""

    def collect(acc: list[TaskNode], node: TaskNode, path: list[str]) -> list[TaskNode]:
        if predicate(node):
            acc.append(node)
        return acc

    return fold_forest(forest, [], collect)


def find_first(
    forest: Forest,
    predicate: Callable[[TaskNode], bool],
) -> TaskNode | None:
    """Find the first node matching a predicate (depth-first).

    Stops descending as soon as a match is found.
    """

    def search(node: TaskNode) -> TaskNode | None:
        if predicate(node):
            return node
        for child in node.children:
            result = search(child)
            if result is not None:
                return result
        return None

    for root in forest:
        result = search(root)
        if result is not None:
            return result
    return None


def walk(forest: Forest, depth: int = 0) -> Iterator[tuple[TaskNode, int]]:
    """Yield ``(node, depth)`` pairs in display order."""
    for node in forest:
        yield node, depth
        yield from walk(node.children, depth + 1)


# =============================================================================
# Predicate Functions
# =============================================================================


def is_leaf(node: TaskNode) -> bool:
    """Check if a node is a leaf (no children)."""
    return node.is_leaf()


def has_id(task_id: int) -> Callable[[TaskNode], bool]:
    """Return a predicate matching a specific id."""

    def predicate(node: TaskNode) -> bool:
        return node.id == task_id

    return predicate


# =============================================================================
# Lookups
# =============================================================================


def find_by_id(forest: Forest, task_id: int) -> TaskNode | None:
    """Find a node anywhere in the forest.

    Returns:
        The node, or None if no node has that id
    """
    return find_first(forest, has_id(task_id))


def collect_leaves(forest: Forest) -> list[TaskNode]:
    """Flatten the forest to its leaves in depth-first order.

    This is the population the burndown runs over. A node that has
    children is never included, whatever fields it carries.
    """
    return filter_nodes(forest, is_leaf)


def collect_ids(forest: Forest) -> list[int]:
    """Return every id in the forest, duplicates included."""

    def collect(acc: list[int], node: TaskNode, path: list[str]) -> list[int]:
        acc.append(node.id)
        return acc

    return fold_forest(forest, [], collect)


def max_id(forest: Forest) -> int:
    """Largest id in the forest, or 0 when it is empty."""
    return max(collect_ids(forest), default=0)


def index_by_id(forest: Forest) -> dict[int, TaskNode]:
    """Map every id to its node."""

    def index(acc: dict[int, TaskNode], node: TaskNode, path: list[str]) -> dict[int, TaskNode]:
        acc.setdefault(node.id, node)
        return acc

    return fold_forest(forest, {}, index)


def ancestor_chain(forest: Forest, task_id: int) -> list[str]:
    """Walk ``parent_id`` back-references up from a node.

    Args:
        forest: The forest to look in
        task_id: Node whose ancestors are wanted

    Returns:
        Ancestor names from the outermost root to the direct parent.
        Empty for a root node or an unknown id. The walk stops at a
        dangling parent id, and at a back-reference that loops.
    """
    nodes = index_by_id(forest)
    node = nodes.get(task_id)
    if node is None:
        return []

    names: list[str] = []
    seen = {node.id}
    current = node.parent_id
    while current is not None and current not in seen:
        parent = nodes.get(current)
        if parent is None:
            break
        names.insert(0, parent.name)
        seen.add(parent.id)
        current = parent.parent_id
    return names


def format_breadcrumb(names: list[str]) -> str:
    """Render ancestor names as ``[Epic] > [Story]``."""
    if not names:
        return ""
    return BREADCRUMB_SEPARATOR.join(f"[{name}]" for name in names)


# =============================================================================
# Edits
# =============================================================================


def update_by_id(forest: Forest, task_id: int, patch: dict[str, Any]) -> Forest:
    """Replace the node with ``task_id`` by a copy with ``patch`` applied.

    Ancestors on the path to the node are rebuilt with new children lists;
    everything else is reused as-is. ``id`` cannot be patched. The patched
    node is validated like a new one, so ISO date strings become dates.

    Args:
        forest: The forest to edit
        task_id: Node to patch
        patch: Field name -> new value

    Returns:
        New forest, or ``forest`` itself when the id is not present

    Raises:
        pydantic.ValidationError: If the patch holds an invalid value.
    """
    patch = {key: value for key, value in patch.items() if key != "id"}

    def update_level(nodes: list[TaskNode]) -> list[TaskNode]:
        changed = False
        result: list[TaskNode] = []
        for node in nodes:
            if node.id == task_id:
                node = node.with_changes(patch)
                changed = True
            elif node.children:
                new_children = update_level(node.children)
                if new_children is not node.children:
                    node = node.model_copy(update={"children": new_children})
                    changed = True
            result.append(node)
        return result if changed else nodes

    return update_level(forest)


def delete_by_id(forest: Forest, task_id: int) -> Forest:
    """Remove the node with ``task_id`` and its whole subtree.

    Returns:
        New forest, or ``forest`` itself when the id is not present
    """

    def prune(nodes: list[TaskNode]) -> list[TaskNode]:
        changed = False
        result: list[TaskNode] = []
        for node in nodes:
            if node.id == task_id:
                changed = True
                continue
            if node.children:
                new_children = prune(node.children)
                if new_children is not node.children:
                    node = node.model_copy(update={"children": new_children})
                    changed = True
            result.append(node)
        return result if changed else nodes

    return prune(forest)


def insert_child(forest: Forest, parent_id: int | None, new_node: TaskNode) -> Forest:
    """Append ``new_node`` under ``parent_id``.

    A ``None`` parent appends to the root sequence. A parent that cannot
    be found leaves the forest untouched.

    Returns:
        New forest, or ``forest`` itself when the parent is not present
    """
    if parent_id is None:
        return [*forest, new_node]

    def attach(nodes: list[TaskNode]) -> list[TaskNode]:
        changed = False
        result: list[TaskNode] = []
        for node in nodes:
            if node.id == parent_id:
                node = node.model_copy(update={"children": [*node.children, new_node]})
                changed = True
            elif node.children:
                new_children = attach(node.children)
                if new_children is not node.children:
                    node = node.model_copy(update={"children": new_children})
                    changed = True
            result.append(node)
        return result if changed else nodes

    return attach(forest)
