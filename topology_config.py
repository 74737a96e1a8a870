"""
YAML topology files for routeflow.

A topology file lists links (and optionally isolated routers) plus an
optional sequence of link events to replay, e.g. a failover followed by a
recovery:

    routers: [R7]
    links:
      - {a: R1, b: R2, cost: 4}
      - {a: R1, b: R3, cost: 2, up: false}
    events:
      - {action: down, a: R1, b: R2}
      - {action: up, a: R1, b: R2}
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Sequence

from link_state_graph import TopologyGraph

EVENT_ACTIONS = ("up", "down")


@dataclass(frozen=True)
class LinkSpec:
    a: str
    b: str
    cost: int
    up: bool = True


@dataclass(frozen=True)
class LinkEvent:
    action: str  # "up" or "down"
    a: str
    b: str


@dataclass(frozen=True)
class TopologyConfig:
    routers: Sequence[str]
    links: Sequence[LinkSpec]
    events: Sequence[LinkEvent]


def load_topology(path: Path) -> TopologyConfig:
    import yaml  # type: ignore

    if not path.exists():
        raise FileNotFoundError(f"topology file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ValueError(f"topology file {path} is not valid YAML: {exc}") from exc
    return parse_topology(data)


def parse_topology(data: Any) -> TopologyConfig:
    """
    Validate an already-decoded topology document.
    """
    if not isinstance(data, Mapping):
        raise ValueError("topology file must contain a mapping at the root")

    routers = [_router_name(r, f"routers[{i}]") for i, r in enumerate(_as_list(data, "routers"))]
    links = [_parse_link(i, raw) for i, raw in enumerate(_as_list(data, "links"))]
    events = [_parse_event(i, raw) for i, raw in enumerate(_as_list(data, "events"))]
    return TopologyConfig(routers=routers, links=links, events=events)


def build_graph(config: TopologyConfig) -> TopologyGraph:
    """
    Populate a fresh TopologyGraph from config. Events are not applied.
    """
    graph = TopologyGraph()
    for router in config.routers:
        graph.add_router(router)
    for spec in config.links:
        graph.add_link(spec.a, spec.b, spec.cost, up=spec.up)
    return graph


def apply_event(graph: TopologyGraph, event: LinkEvent) -> None:
    graph.set_link_state(event.a, event.b, event.action == "up")


def _as_list(data: Mapping[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def _require(raw: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in raw or raw[key] is None:
        raise ValueError(f"{where} is missing '{key}'")
    return raw[key]


def _router_name(value: Any, where: str) -> str:
    if value is None or isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError(f"{where} must be a router name, got {value!r}")
    return str(value)


def _parse_link(index: int, raw: Any) -> LinkSpec:
    where = f"links[{index}]"
    if not isinstance(raw, Mapping):
        raise ValueError(f"{where} must be a mapping")
    cost = _require(raw, "cost", where)
    if isinstance(cost, bool) or not isinstance(cost, int):
        raise ValueError(f"{where} cost must be an integer, got {cost!r}")
    if cost < 0:
        raise ValueError(f"{where} cost must be non-negative, got {cost}")
    up = raw.get("up", True)
    if not isinstance(up, bool):
        raise ValueError(f"{where} 'up' must be true or false, got {up!r}")
    return LinkSpec(
        a=_router_name(_require(raw, "a", where), f"{where} 'a'"),
        b=_router_name(_require(raw, "b", where), f"{where} 'b'"),
        cost=cost,
        up=up,
    )


def _parse_event(index: int, raw: Any) -> LinkEvent:
    where = f"events[{index}]"
    if not isinstance(raw, Mapping):
        raise ValueError(f"{where} must be a mapping")
    action = str(_require(raw, "action", where)).lower()
    if action not in EVENT_ACTIONS:
        raise ValueError(f"{where} action must be one of {EVENT_ACTIONS}, got {action!r}")
    return LinkEvent(
        action=action,
        a=_router_name(_require(raw, "a", where), f"{where} 'a'"),
        b=_router_name(_require(raw, "b", where), f"{where} 'b'"),
    )
