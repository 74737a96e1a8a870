"""
Heap-based DijkstraEngine implementation for routeflow.

Uses Python's heapq to compute single-source shortest paths over any Graph
implementation that satisfies the Graph interface. Down links are skipped.
"""

from itertools import count
from typing import Dict, List, Mapping
import heapq
import logging
import math

from algorithms import DijkstraEngine
from errors import BrokenPathChain
from graph import Graph

logger = logging.getLogger(__name__)


class SimpleDijkstraEngine(DijkstraEngine):
    """
    Single-source Dijkstra using a binary heap with lazy deletion.

    Complexity:
        O((V + E) log V) where E counts half-edges.
    """

    def __init__(self) -> None:
        # Instrumentation counters per invocation.
        self.last_edges_examined = 0
        self.last_relaxed = 0
        self.last_heap_pops = 0
        self.last_heap_pushes = 0
        self.last_stale_skipped = 0

    def shortest_path_costs(self, graph: Graph, source: str) -> Dict[str, float]:
        """
        Compute only the cost map from source.
        """
        dist, _ = self.shortest_paths(graph, source)
        return dist

    def shortest_paths(
        self, graph: Graph, source: str
    ) -> tuple[Dict[str, float], Dict[str, str]]:
        """
        Dijkstra over up links, recording predecessors for path reconstruction.

        Every router known to the graph appears in the distance map, at
        math.inf when it cannot be reached. The source is always at 0, even
        when the graph has never heard of it; in that case nothing else is
        reachable. The predecessor map omits the source itself because it has
        no parent, and omits unreachable routers.

        Heap entries carry an insertion sequence number, so equal distances
        pop in the order they were pushed. Which of several equal-cost paths
        wins is therefore deterministic but not part of the contract.
        """
        self.last_edges_examined = 0
        self.last_relaxed = 0
        self.last_heap_pops = 0
        self.last_heap_pushes = 0
        self.last_stale_skipped = 0

        dist: Dict[str, float] = {router: math.inf for router in graph.routers()}
        dist[source] = 0
        prev: Dict[str, str] = {}
        seq = count()
        pq = [(0, next(seq), source)]  # priority queue of (distance, seq, router)
        self.last_heap_pushes += 1

        while pq:
            d_u, _, u = heapq.heappop(pq)
            self.last_heap_pops += 1

            # Skip outdated entries
            if d_u > dist[u]:
                self.last_stale_skipped += 1
                continue

            for edge in graph.neighbors(u):
                if not edge.up:
                    continue
                self.last_edges_examined += 1
                alt = d_u + edge.cost
                if alt < dist.get(edge.neighbor, math.inf):
                    dist[edge.neighbor] = alt
                    prev[edge.neighbor] = u
                    heapq.heappush(pq, (alt, next(seq), edge.neighbor))
                    self.last_heap_pushes += 1
                    self.last_relaxed += 1

        logger.debug(
            "dijkstra from %s: %d pops (%d stale), %d edges examined, %d relaxed",
            source,
            self.last_heap_pops,
            self.last_stale_skipped,
            self.last_edges_examined,
            self.last_relaxed,
        )
        return dist, prev

    def reconstruct_path(
        self, source: str, destination: str, prev: Mapping[str, str]
    ) -> List[str]:
        """
        Build the forward path source -> destination from a predecessor map.

        A predecessor map produced by shortest_paths always leads back to the
        source. Anything else (a parent with no entry of its own, or a loop)
        raises BrokenPathChain instead of returning a truncated path.
        """
        if destination == source:
            return [source]
        if destination not in prev:
            return []

        path = [destination]
        seen = {destination}
        step = destination
        while step != source:
            if step not in prev:
                raise BrokenPathChain(source, destination, step)
            step = prev[step]
            if step in seen:
                raise BrokenPathChain(source, destination, step)
            seen.add(step)
            path.append(step)

        path.reverse()
        return path
