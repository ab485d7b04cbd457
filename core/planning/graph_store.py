"""
In-memory holder of the todo dependency edges.

Edges read ``task -> prerequisite``: ``task`` cannot start before
``prerequisite`` is done. The store never validates anything; callers go
through :mod:`core.planning.cycle_guard` first.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Tuple

logger = logging.getLogger(__name__)

TaskId = int
Adjacency = Dict[TaskId, List[TaskId]]
Edge = Tuple[TaskId, TaskId]


def dedupe_ids(ids: Iterable[TaskId]) -> List[TaskId]:
    seen: set[TaskId] = set()
    out: List[TaskId] = []
    for i in ids:
        if i in seen:
            continue
        seen.add(i)
        out.append(i)
    return out


class GraphStore:
    """
    Authoritative adjacency mapping ``{task: [prerequisites...]}``.

    Tasks without prerequisites are simply absent. Every public method takes
    the internal lock, so readers see either the graph before a replacement
    or after it, never a half-applied one.
    """

    def __init__(self, adjacency: Adjacency | None = None) -> None:
        self._lock = threading.RLock()
        self._adj: Adjacency = {}
        for task, prereqs in (adjacency or {}).items():
            cleaned = dedupe_ids(prereqs)
            if cleaned:
                self._adj[task] = cleaned

    @classmethod
    def from_edges(cls, edges: Iterable[Edge]) -> "GraphStore":
        """Construit un store depuis des lignes ``(todo_id, depends_on_id)``."""
        adj: Adjacency = {}
        for task, prereq in edges:
            adj.setdefault(int(task), []).append(int(prereq))
        return cls(adj)

    def snapshot(self) -> Adjacency:
        """Copie profonde : le mapping retourné peut être muté librement."""
        with self._lock:
            return {task: list(prereqs) for task, prereqs in self._adj.items()}

    def prerequisites_of(self, task: TaskId) -> List[TaskId]:
        with self._lock:
            return list(self._adj.get(task, ()))

    def edges(self) -> List[Edge]:
        with self._lock:
            return [(task, p) for task in sorted(self._adj) for p in self._adj[task]]

    def replace_outgoing(self, task: TaskId, prerequisite_ids: Iterable[TaskId]) -> None:
        """
        Remplace toutes les arêtes sortantes de ``task`` (atomique).

        The new list is fully built before the swap, so a failure while
        iterating ``prerequisite_ids`` leaves the previous edges in place.
        """
        new_prereqs = dedupe_ids(prerequisite_ids)
        with self._lock:
            if new_prereqs:
                self._adj[task] = new_prereqs
            else:
                self._adj.pop(task, None)
        logger.debug(
            "outgoing edges replaced",
            extra={"todo_id": task, "prerequisites": new_prereqs},
        )

    def remove_task(self, task: TaskId) -> None:
        """Drop ``task`` and every edge pointing at it."""
        with self._lock:
            self._adj.pop(task, None)
            for other in list(self._adj):
                prereqs = [p for p in self._adj[other] if p != task]
                if prereqs:
                    self._adj[other] = prereqs
                else:
                    del self._adj[other]

    def __len__(self) -> int:
        with self._lock:
            return sum(len(p) for p in self._adj.values())
