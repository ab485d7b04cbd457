"""
Décide si un nouvel ensemble de prérequis fermerait un cycle.

Nothing here mutates its inputs: the candidate list is overlaid on a copy of
the adjacency, so the checks are safe to run concurrently on one snapshot.
"""

from __future__ import annotations

import logging
from typing import Any, Collection, Dict, Iterable, List, Mapping, Optional, Sequence

from core.exceptions import CircularDependencyError, DependencyValidationError

logger = logging.getLogger(__name__)

CYCLE_MESSAGE = "Adding these dependencies creates a circular dependency"


def _is_id(value: Any) -> bool:
    # bool est une sous-classe d'int : on le refuse explicitement
    return isinstance(value, int) and not isinstance(value, bool)


def find_cycle_path(
    snapshot: Mapping[int, Sequence[int]],
    task: int,
    candidate_prerequisite_ids: Iterable[int],
) -> Optional[List[int]]:
    """
    Return ``[task, p1, ..., task]`` if ``task`` becomes reachable from itself
    once its prerequisites are replaced by the candidates, else ``None``.

    Depth-first search with an explicit stack. The visited set is shared by
    every candidate root of the call: the search only ever looks for a path
    back to ``task``, so a node explored from one root cannot lead there from
    another.
    """
    candidates = list(candidate_prerequisite_ids)
    if not candidates:
        return None
    if task in candidates:
        return [task, task]

    graph: Dict[int, Sequence[int]] = dict(snapshot)
    graph[task] = candidates

    parent: Dict[int, int] = {}
    visited: set[int] = set()

    for root in candidates:
        if root in visited:
            continue
        visited.add(root)
        parent[root] = task
        stack = [root]
        while stack:
            node = stack.pop()
            for neighbor in graph.get(node, ()):
                if neighbor == task:
                    path = [node]
                    while path[-1] != task:
                        path.append(parent[path[-1]])
                    path.reverse()
                    path.append(task)
                    return path
                if neighbor not in visited:
                    visited.add(neighbor)
                    parent[neighbor] = node
                    stack.append(neighbor)
    return None


def would_create_cycle(
    snapshot: Mapping[int, Sequence[int]],
    task: int,
    candidate_prerequisite_ids: Iterable[int],
) -> bool:
    return find_cycle_path(snapshot, task, candidate_prerequisite_ids) is not None


def validate_prerequisites(task: Any, candidates: Any, known_ids: Collection[int]) -> List[int]:
    """
    Vérifie la forme de la requête et que tous les ids existent.

    Returns the candidates as a list. Unknown ids are rejected, never dropped.
    """
    if not _is_id(task):
        raise DependencyValidationError("todoId (number) is required")
    if not isinstance(candidates, (list, tuple)) or not all(_is_id(c) for c in candidates):
        raise DependencyValidationError("dependsOnIds (number array) is required")
    if task not in known_ids:
        raise DependencyValidationError(f"Unknown todo: {task}", details={"unknown": [task]})

    unknown = sorted({c for c in candidates if c not in known_ids})
    if unknown:
        raise DependencyValidationError(
            f"Unknown prerequisite todos: {', '.join(str(u) for u in unknown)}",
            details={"unknown": unknown},
        )
    return list(candidates)


def check_update(
    snapshot: Mapping[int, Sequence[int]],
    task: Any,
    candidates: Any,
    known_ids: Collection[int],
) -> List[int]:
    """Validation puis détection de cycle ; lève au premier problème."""
    prereqs = validate_prerequisites(task, candidates, known_ids)
    path = find_cycle_path(snapshot, task, prereqs)
    if path is not None:
        logger.warning(
            "dependency update rejected: cycle",
            extra={"todo_id": task, "prerequisites": prereqs, "cycle": path},
        )
        raise CircularDependencyError(CYCLE_MESSAGE, path=path)
    return prereqs
