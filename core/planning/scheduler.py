"""
Earliest-start days and critical path over the dependency DAG.

Every todo counts as one day of work:
    earliest_start(t) = 0                                   if t has no prerequisite
    earliest_start(t) = 1 + max(earliest_start(p) for p)    otherwise

The critical path is the set of todos reaching the graph-wide maximum.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Sequence, Set, Tuple

from core.exceptions import GraphContractViolation

logger = logging.getLogger(__name__)


class VisitState(Enum):
    UNVISITED = "unvisited"
    IN_PROGRESS = "in_progress"
    DONE = "done"


def _roots(snapshot: Mapping[int, Sequence[int]], task_ids: Optional[Iterable[int]]) -> List[int]:
    roots: List[int] = []
    seen: Set[int] = set()
    for t in list(task_ids or ()) + list(snapshot):
        if t not in seen:
            seen.add(t)
            roots.append(t)
    return roots


def compute_earliest_start(
    snapshot: Mapping[int, Sequence[int]],
    task_ids: Optional[Iterable[int]] = None,
) -> Dict[int, int]:
    """
    Évalue chaque tâche une seule fois (post-ordre itératif, pile explicite).

    ``task_ids`` lists todos that may be absent from ``snapshot`` (no
    prerequisite, value 0). Prerequisites reachable from the snapshot are
    evaluated too, even when not listed.

    Raises :class:`GraphContractViolation` when a cycle is met: the guard
    should have made that impossible, so it is an internal failure.
    """
    state: Dict[int, VisitState] = {}
    earliest: Dict[int, int] = {}

    for root in _roots(snapshot, task_ids):
        if state.get(root, VisitState.UNVISITED) is VisitState.DONE:
            continue

        state[root] = VisitState.IN_PROGRESS
        stack: List[Tuple[int, Iterator[int]]] = [(root, iter(snapshot.get(root, ())))]

        while stack:
            node, pending = stack[-1]
            descended = False
            for prereq in pending:
                current = state.get(prereq, VisitState.UNVISITED)
                if current is VisitState.DONE:
                    continue
                if current is VisitState.IN_PROGRESS:
                    on_stack = [n for n, _ in stack]
                    cycle = on_stack[on_stack.index(prereq):] + [prereq]
                    logger.error("cycle met while scheduling", extra={"cycle": cycle})
                    raise GraphContractViolation(
                        "Dependency graph is not acyclic",
                        hint=" -> ".join(str(c) for c in cycle),
                        details={"cycle": cycle},
                    )
                state[prereq] = VisitState.IN_PROGRESS
                stack.append((prereq, iter(snapshot.get(prereq, ()))))
                descended = True
                break
            if descended:
                continue

            stack.pop()
            prereqs = snapshot.get(node) or ()
            earliest[node] = 1 + max(earliest[p] for p in prereqs) if prereqs else 0
            state[node] = VisitState.DONE

    return {t: earliest[t] for t in sorted(earliest)}


def compute_critical_path(earliest_start: Mapping[int, int]) -> Set[int]:
    if not earliest_start:
        return set()
    longest = max(earliest_start.values())
    return {t for t, day in earliest_start.items() if day == longest}


@dataclass(frozen=True)
class Schedule:
    earliest_start: Dict[int, int] = field(default_factory=dict)
    critical_path: FrozenSet[int] = frozenset()
    length: Optional[int] = None

    def is_critical(self, task: int) -> bool:
        return task in self.critical_path

    def day_of(self, task: int) -> int:
        # une tâche inconnue du graphe n'a aucun prérequis
        return self.earliest_start.get(task, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "earliestStart": dict(self.earliest_start),
            "criticalPath": sorted(self.critical_path),
            "length": self.length,
        }


def build_schedule(
    snapshot: Mapping[int, Sequence[int]],
    task_ids: Optional[Iterable[int]] = None,
) -> Schedule:
    earliest = compute_earliest_start(snapshot, task_ids)
    critical = compute_critical_path(earliest)
    length = max(earliest.values()) if earliest else None
    logger.debug(
        "schedule computed",
        extra={"tasks": len(earliest), "length": length},
    )
    return Schedule(earliest_start=earliest, critical_path=frozenset(critical), length=length)
