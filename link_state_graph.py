"""
Concrete link-state topology for routeflow.

Implements the Graph interface with a router -> [Link] adjacency mapping.
Each added link is a single Link record referenced from both endpoints, so
cost and up/down state can never differ between the two directions.
"""

from dataclasses import dataclass
from typing import AbstractSet, Dict, List, Optional, Sequence
import logging
import threading

from errors import InvalidCost, LinkNotFound
from graph import Graph, HalfEdge

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Link:
    """
    Undirected link between routers a and b.

    Compared by identity: parallel links between the same pair are distinct.
    """
    a: str
    b: str
    cost: int
    up: bool = True

    def other(self, router: str) -> str:
        """Endpoint opposite to router."""
        return self.b if router == self.a else self.a

    def view_from(self, router: str) -> HalfEdge:
        return HalfEdge(self.other(router), self.cost, self.up)


class TopologyGraph(Graph):
    """
    Router set plus ordered per-router link lists, with failover/recovery.
    """

    def __init__(self) -> None:
        self._adj: Dict[str, List[Link]] = {}
        self._links: List[Link] = []
        self._lock = threading.RLock()

    # --- Mutation API --------------------------------------------------------

    def add_router(self, router: str) -> None:
        """Ensure router exists in the graph."""
        with self._lock:
            self._adj.setdefault(router, [])

    def add_link(self, a: str, b: str, cost: int, up: bool = True) -> Link:
        """
        Add a new bidirectional link a <-> b with the given cost, up by default.

        Endpoints are auto-added. An existing link between the same pair is
        left alone; the new one is a parallel link.
        """
        if isinstance(cost, bool) or not isinstance(cost, int) or cost < 0:
            raise InvalidCost(a, b, cost)

        with self._lock:
            self.add_router(a)
            self.add_router(b)
            link = Link(a, b, cost, up)
            self._links.append(link)
            self._adj[a].append(link)
            self._adj[b].append(link)

        logger.info("link added: %s <-> %s (cost: %d)", a, b, cost)
        return link

    def set_link_state(self, a: str, b: str, up: bool) -> None:
        """
        Mark the first a <-> b link up or down.

        Raises LinkNotFound, without changing anything, unless both a's
        adjacency holds a link towards b and b's holds one towards a.
        """
        with self._lock:
            forward = self._first_link(a, b)
            backward = self._first_link(b, a)
            if forward is None or backward is None:
                raise LinkNotFound(a, b)
            forward.up = up
            backward.up = up

        if up:
            logger.info("[RECOVERY] link UP: %s <-> %s", a, b)
        else:
            logger.info("[FAILOVER] link DOWN: %s <-> %s", a, b)

    def link_down(self, a: str, b: str) -> None:
        self.set_link_state(a, b, False)

    def link_up(self, a: str, b: str) -> None:
        self.set_link_state(a, b, True)

    def snapshot(self) -> "TopologyGraph":
        """
        Independent copy of the current topology.

        Later mutations of either graph are not visible in the other.
        """
        with self._lock:
            copy = TopologyGraph()
            copies: Dict[int, Link] = {}
            for link in self._links:
                clone = Link(link.a, link.b, link.cost, link.up)
                copies[id(link)] = clone
                copy._links.append(clone)
            for router, links in self._adj.items():
                copy._adj[router] = [copies[id(link)] for link in links]
        return copy

    # --- Graph interface -----------------------------------------------------

    def routers(self) -> AbstractSet[str]:
        with self._lock:
            return frozenset(self._adj)

    def neighbors(self, router: str) -> Sequence[HalfEdge]:
        with self._lock:
            return [link.view_from(router) for link in self._adj.get(router, ())]

    # --- Queries -------------------------------------------------------------

    def has_router(self, router: str) -> bool:
        with self._lock:
            return router in self._adj

    def links(self) -> List[Link]:
        """Every link once, in insertion order."""
        with self._lock:
            return list(self._links)

    def adjacency(self) -> Dict[str, List[HalfEdge]]:
        """Router -> half-edges, routers in insertion order (for display)."""
        with self._lock:
            return {router: self.neighbors(router) for router in self._adj}

    def _first_link(self, src: str, dst: str) -> Optional[Link]:
        for link in self._adj.get(src, ()):
            if link.other(src) == dst:
                return link
        return None
