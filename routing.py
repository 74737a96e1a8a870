"""
Routing abstractions for routeflow.

Defines the Router interface plus simple data structures for routing-table
entries and one-off route answers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple
import math

from graph import Graph


@dataclass(frozen=True)
class RouteEntry:
    """
    Single entry in a router's routing table.

    Unreachable destinations carry cost math.inf, no next hop and an empty path.
    """
    dest: str
    next_hop: Optional[str]
    cost: float
    path: Tuple[str, ...]
    epoch: int = 0  # topology epoch this entry was computed for

    @property
    def reachable(self) -> bool:
        return not math.isinf(self.cost)


@dataclass(frozen=True)
class Route:
    """Optimal path between two routers and its total cost."""
    path: Tuple[str, ...]
    cost: float

    @property
    def hops(self) -> int:
        return len(self.path) - 1


class Router(ABC):
    """
    Router API: owns one node's routing table, rebuilt per topology snapshot.
    """

    @property
    @abstractmethod
    def router_id(self) -> str:
        """Identity of the router this table belongs to."""
        raise NotImplementedError

    @abstractmethod
    def recompute_on_topology(self, g: Graph, epoch: int) -> None:
        """
        Called when a new topology snapshot (and epoch) is available.
        """
        raise NotImplementedError

    @abstractmethod
    def next_hop(self, dest: str) -> Optional[str]:
        """
        Return the next hop toward dest under the current routing state.

        Returns None if dest is currently unreachable.
        """
        raise NotImplementedError
