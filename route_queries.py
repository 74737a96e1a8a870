"""
One-shot route queries over a live topology.

Both helpers compute over a snapshot of the graph, so link state changes made
by other threads mid-computation cannot leak into a single answer.
"""

from typing import List, Optional
import math

from algorithms import DijkstraEngine
from dijkstra_engine import SimpleDijkstraEngine
from link_state_graph import TopologyGraph
from routing import Route, RouteEntry


def routing_table(
    graph: TopologyGraph, source: str, engine: Optional[DijkstraEngine] = None
) -> List[RouteEntry]:
    """
    Routing table for source: one entry per other router, sorted by id.

    Unreachable routers are listed with cost math.inf, no next hop and an
    empty path rather than being left out.
    """
    engine = engine or SimpleDijkstraEngine()
    snapshot = graph.snapshot()
    dist, prev = engine.shortest_paths(snapshot, source)

    entries: List[RouteEntry] = []
    for dest in sorted(snapshot.routers()):
        if dest == source:
            continue
        cost = dist.get(dest, math.inf)
        if math.isinf(cost):
            entries.append(RouteEntry(dest, None, math.inf, ()))
            continue
        path = tuple(engine.reconstruct_path(source, dest, prev))
        entries.append(RouteEntry(dest, path[1], cost, path))
    return entries


def find_route(
    graph: TopologyGraph, src: str, dest: str, engine: Optional[DijkstraEngine] = None
) -> Optional[Route]:
    """
    Optimal route from src to dest, or None when dest cannot be reached.
    """
    engine = engine or SimpleDijkstraEngine()
    dist, prev = engine.shortest_paths(graph.snapshot(), src)
    path = engine.reconstruct_path(src, dest, prev)
    if not path:
        return None
    return Route(tuple(path), dist[dest])
