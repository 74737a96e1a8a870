"""
Error kinds raised by the routeflow mutation and path APIs.

Unreachable destinations and unknown sources are not errors: they come back
as infinite distances, empty paths or ``None`` routes.
"""


class TopologyError(Exception):
    """Base class for structural errors in a routing topology."""


class InvalidCost(TopologyError, ValueError):
    """Link cost is negative or not an integer."""

    def __init__(self, a: str, b: str, cost: object) -> None:
        super().__init__(f"invalid cost {cost!r} for link {a} <-> {b}: must be a non-negative integer")
        self.a = a
        self.b = b
        self.cost = cost


class LinkNotFound(TopologyError, LookupError):
    """No link between the pair in one or both directions."""

    def __init__(self, a: str, b: str) -> None:
        super().__init__(f"no link between {a} and {b}")
        self.a = a
        self.b = b


class BrokenPathChain(TopologyError, RuntimeError):
    """Predecessor map does not lead back to the source."""

    def __init__(self, source: str, destination: str, stuck_at: str) -> None:
        super().__init__(
            f"predecessor chain from {destination} back to {source} breaks at {stuck_at}"
        )
        self.source = source
        self.destination = destination
        self.stuck_at = stuck_at
