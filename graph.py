"""
Link-state graph abstraction for routeflow.

Routers are plain string identities.
Links are undirected with an integer cost and an up/down flag; each router
sees them as an ordered sequence of outgoing half-edges.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import AbstractSet, Sequence


@dataclass(frozen=True)
class HalfEdge:
    """
    One direction of a link, as seen from the router that owns it.
    """
    neighbor: str
    cost: int
    up: bool


class Graph(ABC):
    """Undirected, weighted graph of routers with per-link state."""

    @abstractmethod
    def routers(self) -> AbstractSet[str]:
        """Return all router identities in the graph."""
        raise NotImplementedError

    @abstractmethod
    def neighbors(self, router: str) -> Sequence[HalfEdge]:
        """
        Outgoing half-edges for a given router, in link insertion order.

        Unknown routers have no neighbours.
        """
        raise NotImplementedError
