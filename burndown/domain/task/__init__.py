"""Task domain - task forest management and burndown projection.

All exports are pure (no I/O, no side effects).

Key Types:
    TaskNode - Tree node representing a task or grouping
    Forest - Ordered list of root TaskNodes
    BurndownPoint - Remaining work on one axis day
    BurndownSummary - Headline numbers for a series

Traversal Functions:
    fold_forest - Fundamental fold operation
    filter_nodes - Filter by predicate
    find_first - Find first matching node
    find_by_id - Look a node up by id
    update_by_id / delete_by_id / insert_child - Structural edits
    collect_leaves - Leaves in depth-first order
    ancestor_chain - Breadcrumb names for a node

Projection Functions:
    build_axis - Consecutive calendar days
    project - Ideal/actual/due remaining series
    project_forest - project() over a forest's leaves
    summarize - Totals for a projected series

Domain Events:
    TaskAdded, TaskUpdated, TaskDeleted, AxisChanged
"""

from .burndown import (
    DEFAULT_AXIS_DAYS,
    BurndownPoint,
    BurndownSummary,
    build_axis,
    project,
    project_forest,
    round2,
    summarize,
)
from .events import AxisChanged, TaskAdded, TaskDeleted, TaskUpdated
from .models import Forest, TaskNode, to_day
from .traversal import (
    ancestor_chain,
    collect_ids,
    collect_leaves,
    delete_by_id,
    filter_nodes,
    find_by_id,
    find_first,
    fold_forest,
    format_breadcrumb,
    has_id,
    index_by_id,
    insert_child,
    is_leaf,
    max_id,
    update_by_id,
    walk,
)

__all__ = [
    # Models
    "TaskNode",
    "Forest",
    "to_day",
    # Traversal - fundamental
    "fold_forest",
    "filter_nodes",
    "find_first",
    "walk",
    # Traversal - predicates
    "is_leaf",
    "has_id",
    # Traversal - lookups
    "find_by_id",
    "collect_leaves",
    "collect_ids",
    "max_id",
    "index_by_id",
    "ancestor_chain",
    "format_breadcrumb",
    # Traversal - edits
    "update_by_id",
    "delete_by_id",
    "insert_child",
    # Projection
    "DEFAULT_AXIS_DAYS",
    "BurndownPoint",
    "BurndownSummary",
    "build_axis",
    "project",
    "project_forest",
    "round2",
    "summarize",
    # Events
    "TaskAdded",
    "TaskUpdated",
    "TaskDeleted",
    "AxisChanged",
]
