"""
task_graph.py: Vue graphe des todos pour l'affichage.
- Construit un DiGraph NetworkX (arête prérequis -> dépendant).
- Ignore les arêtes dont une extrémité n'est pas un todo connu.
- Annote chaque nœud avec son jour de démarrage et son appartenance au chemin critique.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

import networkx as nx

from core.exceptions import GraphContractViolation
from core.planning.scheduler import Schedule, build_schedule


@dataclass
class GraphNode:
    """
    Représentation d'un todo dans la vue graphe.
    Note: on évite d’en faire un type hashable car il contient des listes (mutable).
    """
    id: int
    title: str = ""
    earliest_start: int = 0
    critical: bool = False
    deps: List[int] = field(default_factory=list)
    succ: List[int] = field(default_factory=list)  # dépendants (remplis après construction du graphe)


class TaskGraph:
    """
    Objet enveloppant le graphe NetworkX et un index {id -> GraphNode}.
    """
    def __init__(
        self,
        titles: Mapping[int, str],
        snapshot: Mapping[int, Sequence[int]],
        schedule: Optional[Schedule] = None,
    ):
        self.nodes: Dict[int, GraphNode] = {tid: GraphNode(id=tid, title=title) for tid, title in titles.items()}
        self._g = nx.DiGraph()

        # 1) Ajouter tous les nœuds
        for tid in self.nodes:
            self._g.add_node(tid)

        # 2) Ajouter les arêtes : p -> t, on ne peut démarrer t qu'une fois p terminé
        for tid, prereqs in snapshot.items():
            if tid not in self.nodes:
                continue
            for p in prereqs:
                if p not in self.nodes:
                    continue
                self._g.add_edge(p, tid)
                self.nodes[tid].deps.append(p)

        # 3) Vérifier que le graphe est acyclique
        if not nx.is_directed_acyclic_graph(self._g):
            raise GraphContractViolation("Dependency graph is not acyclic")

        # 4) Initialiser les successeurs et le planning
        for a, b in self._g.edges():
            self.nodes[a].succ.append(b)

        if schedule is None:
            schedule = build_schedule({t: n.deps for t, n in self.nodes.items() if n.deps}, self.nodes)
        self.schedule = schedule
        for tid, node in self.nodes.items():
            node.earliest_start = schedule.day_of(tid)
            node.critical = schedule.is_critical(tid)

    def roots(self) -> Iterator[GraphNode]:
        """
        Génère les todos sans prérequis.
        """
        for tid in self.nodes:
            if self._g.in_degree(tid) == 0:
                yield self.nodes[tid]

    def topological_order(self) -> List[int]:
        # ordre stable : à égalité, le plus petit id d'abord
        return list(nx.lexicographical_topological_sort(self._g))

    def to_node_link(self) -> Dict[str, Any]:
        """Export ``{"nodes": [...], "links": [...]}`` (source = prérequis, target = dépendant)."""
        order = self.topological_order()
        return {
            "nodes": [
                {
                    "id": tid,
                    "title": self.nodes[tid].title,
                    "earliestStart": self.nodes[tid].earliest_start,
                    "critical": self.nodes[tid].critical,
                }
                for tid in order
            ],
            "links": [{"source": a, "target": b} for a, b in sorted(self._g.edges())],
        }
