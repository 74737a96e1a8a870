"""
Algorithm interfaces for routing.

Keeps graph algorithms separate from router wiring and presentation.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Mapping

from graph import Graph


class DijkstraEngine(ABC):
    """
    Interface for single-source shortest-path computation over up links.
    """

    @abstractmethod
    def shortest_path_costs(self, graph: Graph, source: str) -> Dict[str, float]:
        """
        Compute shortest-path costs from source to every router.

        Returns:
            Mapping router -> path_cost(source -> router), math.inf if unreachable.
        """
        raise NotImplementedError

    @abstractmethod
    def shortest_paths(
        self, graph: Graph, source: str
    ) -> tuple[Dict[str, float], Dict[str, str]]:
        """
        Compute shortest-path costs plus the predecessor of each reached router.

        Returns:
            (dist, prev) where dist is the cost map and prev records parents.
        """
        raise NotImplementedError

    @abstractmethod
    def reconstruct_path(
        self, source: str, destination: str, prev: Mapping[str, str]
    ) -> List[str]:
        """
        Walk prev back from destination to source.

        Returns:
            [source, ..., destination], or [] when destination was not reached.
        """
        raise NotImplementedError
