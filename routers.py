"""
Router implementations for routeflow.

A link-state router runs Dijkstra over the current topology and keeps the
result as a routing table: next hop, cost and full path per destination.
"""

from typing import Dict, List, Optional
import math

from algorithms import DijkstraEngine
from dijkstra_engine import SimpleDijkstraEngine
from graph import Graph
from routing import RouteEntry, Router


class LinkStateRouter(Router):
    """
    Router that relies solely on local Dijkstra computation.
    """

    def __init__(self, router_id: str, dijkstra_engine: Optional[DijkstraEngine] = None) -> None:
        self._router_id = router_id
        self._dijkstra = dijkstra_engine or SimpleDijkstraEngine()
        self._routing_table: Dict[str, RouteEntry] = {
            router_id: RouteEntry(router_id, router_id, 0, (router_id,), 0)
        }
        self._unreachable: List[str] = []
        self._epoch = 0

    @property
    def router_id(self) -> str:
        return self._router_id

    @property
    def epoch(self) -> int:
        return self._epoch

    def recompute_on_topology(self, g: Graph, epoch: int) -> None:
        self._epoch = epoch
        dist, parents = self._dijkstra.shortest_paths(g, self._router_id)
        routes: Dict[str, RouteEntry] = {}
        unreachable: List[str] = []
        for dest, cost in dist.items():
            if math.isinf(cost):
                unreachable.append(dest)
                continue
            path = tuple(self._dijkstra.reconstruct_path(self._router_id, dest, parents))
            next_hop = path[1] if len(path) > 1 else self._router_id
            routes[dest] = RouteEntry(dest, next_hop, cost, path, epoch)
        self._routing_table = routes
        self._unreachable = sorted(unreachable)

    def next_hop(self, dest: str) -> Optional[str]:
        entry = self._routing_table.get(dest)
        return entry.next_hop if entry else None

    def route(self, dest: str) -> Optional[RouteEntry]:
        return self._routing_table.get(dest)

    def routing_table(self) -> List[RouteEntry]:
        """Reachable destinations, sorted by router id, self-route included."""
        return [self._routing_table[dest] for dest in sorted(self._routing_table)]

    def unreachable(self) -> List[str]:
        return list(self._unreachable)

