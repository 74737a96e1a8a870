from pathlib import Path

import pytest

from errors import LinkNotFound
from graph import HalfEdge
from topology_config import (
    LinkEvent,
    LinkSpec,
    apply_event,
    build_graph,
    load_topology,
    parse_topology,
)

MESH = Path(__file__).resolve().parent.parent / "topologies" / "mesh.yml"


def test_load_bundled_mesh():
    cfg = load_topology(MESH)

    assert len(cfg.links) == 9
    assert cfg.links[0] == LinkSpec("R1", "R2", 4, True)
    assert cfg.events[0] == LinkEvent("down", "R1", "R3")
    assert [e.action for e in cfg.events] == ["down", "down", "up", "up"]

    g = build_graph(cfg)
    assert sorted(g.routers()) == ["R1", "R2", "R3", "R4", "R5", "R6"]


def test_build_graph_with_isolated_router_and_down_link(tmp_path):
    path = tmp_path / "topo.yml"
    path.write_text(
        "routers: [R9]\n"
        "links:\n"
        "  - {a: R1, b: R2, cost: 4}\n"
        "  - {a: R1, b: R2, cost: 1, up: false}\n"
    )

    g = build_graph(load_topology(path))

    assert g.routers() == {"R1", "R2", "R9"}
    assert g.neighbors("R1") == [HalfEdge("R2", 4, True), HalfEdge("R2", 1, False)]
    assert g.neighbors("R2") == [HalfEdge("R1", 4, True), HalfEdge("R1", 1, False)]


def test_apply_event_toggles_link():
    g = build_graph(parse_topology({"links": [{"a": "A", "b": "B", "cost": 2}]}))

    apply_event(g, LinkEvent("down", "B", "A"))
    assert g.neighbors("A") == [HalfEdge("B", 2, False)]

    apply_event(g, LinkEvent("up", "A", "B"))
    assert g.neighbors("A") == [HalfEdge("B", 2, True)]

    with pytest.raises(LinkNotFound):
        apply_event(g, LinkEvent("down", "A", "C"))


def test_names_are_coerced_to_strings():
    cfg = parse_topology({"links": [{"a": 1, "b": 2, "cost": 3}]})
    assert cfg.links[0] == LinkSpec("1", "2", 3)


def test_empty_document_sections_default_to_empty():
    cfg = parse_topology({})
    assert list(cfg.routers) == []
    assert list(cfg.links) == []
    assert list(cfg.events) == []


@pytest.mark.parametrize(
    "data, message",
    [
        ([], "mapping at the root"),
        ({"links": {"a": "A"}}, "'links' must be a list"),
        ({"links": ["A-B"]}, "links[0] must be a mapping"),
        ({"links": [{"a": "A", "b": "B"}]}, "missing 'cost'"),
        ({"links": [{"a": "A", "cost": 1}]}, "missing 'b'"),
        ({"links": [{"a": "A", "b": "B", "cost": -1}]}, "non-negative"),
        ({"links": [{"a": "A", "b": "B", "cost": 1.5}]}, "must be an integer"),
        ({"links": [{"a": "A", "b": "B", "cost": 1, "up": "yes"}]}, "'up' must be true or false"),
        ({"events": [{"action": "flap", "a": "A", "b": "B"}]}, "action must be one of"),
        ({"routers": [None]}, "routers[0] must be a router name"),
        ({"routers": ["R1", True]}, "routers[1] must be a router name"),
        ({"routers": [["R1"]]}, "routers[0] must be a router name"),
        ({"links": [{"a": "A", "b": False, "cost": 1}]}, "links[0] 'b' must be a router name"),
        ({"events": [{"action": "up", "a": {"x": 1}, "b": "B"}]}, "events[0] 'a' must be a router name"),
    ],
)
def test_malformed_documents_rejected(data, message):
    with pytest.raises(ValueError) as excinfo:
        parse_topology(data)
    assert message in str(excinfo.value)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_topology(tmp_path / "absent.yml")


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yml"
    path.write_text("links: [\n")
    with pytest.raises(ValueError):
        load_topology(path)
