import math

from dijkstra_engine import SimpleDijkstraEngine
from link_state_graph import TopologyGraph
from routers import LinkStateRouter
from routing import RouteEntry


def _mesh() -> TopologyGraph:
    g = TopologyGraph()
    for a, b, cost in [
        ("R1", "R2", 4),
        ("R1", "R3", 2),
        ("R2", "R3", 1),
        ("R2", "R4", 5),
        ("R3", "R4", 8),
        ("R3", "R5", 10),
        ("R4", "R5", 2),
        ("R4", "R6", 6),
        ("R5", "R6", 3),
    ]:
        g.add_link(a, b, cost)
    return g


def test_router_starts_with_only_self_route():
    r = LinkStateRouter("R1")
    assert r.routing_table() == [RouteEntry("R1", "R1", 0, ("R1",), 0)]
    assert r.next_hop("R6") is None


def test_router_builds_table_from_dijkstra():
    g = _mesh()
    r = LinkStateRouter("R1", SimpleDijkstraEngine())
    r.recompute_on_topology(g, epoch=1)

    assert r.next_hop("R2") == "R3"
    assert r.next_hop("R6") == "R3"
    assert r.next_hop("R1") == "R1"
    assert r.route("R3").next_hop == "R3"  # type: ignore[union-attr]
    assert r.route("R3").path == ("R1", "R3")  # type: ignore[union-attr]

    route = r.route("R6")
    assert route is not None
    assert route.cost == 13
    assert route.path == ("R1", "R3", "R2", "R4", "R5", "R6")
    assert route.epoch == 1
    assert [e.dest for e in r.routing_table()] == ["R1", "R2", "R3", "R4", "R5", "R6"]
    assert r.unreachable() == []


def test_router_follows_failover_and_recovery():
    """Next hops shift away from a failed link and return once it recovers."""
    g = _mesh()
    r = LinkStateRouter("R1")
    r.recompute_on_topology(g, epoch=1)

    g.link_down("R1", "R3")
    r.recompute_on_topology(g, epoch=2)
    assert r.next_hop("R3") == "R2"
    assert r.next_hop("R6") == "R2"
    assert r.route("R6").cost == 14  # type: ignore[union-attr]
    assert r.epoch == 2

    g.link_up("R1", "R3")
    r.recompute_on_topology(g, epoch=3)
    assert r.next_hop("R6") == "R3"
    assert r.route("R6").cost == 13  # type: ignore[union-attr]


def test_router_reports_unreachable_destinations():
    g = _mesh()
    g.add_router("R7")
    g.link_down("R4", "R6")
    g.link_down("R5", "R6")

    r = LinkStateRouter("R1")
    r.recompute_on_topology(g, epoch=1)

    assert r.unreachable() == ["R6", "R7"]
    assert r.next_hop("R6") is None
    assert r.route("R7") is None
    assert all(not math.isinf(e.cost) for e in r.routing_table())
