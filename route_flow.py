"""
CLI to explore a link-state topology: routing tables, routes, failover.

Reads a YAML topology, prints the topology and the source router's routing
table, then replays the file's link events one by one, reprinting the table
and any requested routes after each.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple
import argparse
import csv
import logging
import math
import sys

from errors import TopologyError
from link_state_graph import TopologyGraph
from route_queries import find_route, routing_table
from routing import RouteEntry
from topology_config import LinkEvent, apply_event, build_graph, load_topology

logger = logging.getLogger(__name__)

RULE = "=" * 40


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Link-state routing with Dijkstra over a YAML topology.",
    )
    parser.add_argument("topology", type=Path, help="Topology definition file (YAML)")
    parser.add_argument("--source", help="Router whose routing table is shown (default: first router by name)")
    parser.add_argument(
        "--route",
        nargs=2,
        action="append",
        default=[],
        metavar=("SRC", "DEST"),
        help="Route to look up after every step; may be repeated",
    )
    parser.add_argument("--csv", type=Path, help="Write the final routing table to this CSV file")
    parser.add_argument("--log-level", default="info", choices=["debug", "info", "warning", "error"])
    return parser.parse_args(argv)


def setup_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-5s %(name)s: %(message)s",
    )


def format_path(path: Iterable[str]) -> str:
    return " -> ".join(path)


def format_cost(cost: float) -> str:
    return "INF" if math.isinf(cost) else str(cost)


def print_topology(graph: TopologyGraph) -> None:
    print(RULE)
    print("NETWORK TOPOLOGY")
    print(RULE)
    for router, edges in graph.adjacency().items():
        print(f"{router} connects to:")
        for edge in edges:
            status = "UP" if edge.up else "DOWN"
            print(f"  -> {edge.neighbor} (cost: {edge.cost}, status: {status})")
        print()
    print(RULE)


def print_routing_table(source: str, entries: Sequence[RouteEntry]) -> None:
    print(RULE)
    print(f"ROUTING TABLE FOR ROUTER: {source}")
    print(RULE)
    print(f"{'Destination':<15}{'Cost':<10}Path")
    print("-" * 40)
    for entry in entries:
        if entry.reachable:
            print(f"{entry.dest:<15}{format_cost(entry.cost):<10}{format_path(entry.path)}")
        else:
            print(f"{entry.dest:<15}{'INF':<10}No path available")
    print(RULE)


def print_route(graph: TopologyGraph, src: str, dest: str) -> None:
    print(f">>> Finding route from {src} to {dest}")
    route = find_route(graph, src, dest)
    if route is None:
        print("NO ROUTE AVAILABLE")
        return
    print(f"Optimal path: {format_path(route.path)}")
    print(f"Total cost: {format_cost(route.cost)}")


def write_routing_table_csv(source: str, entries: Iterable[RouteEntry], path: Path) -> None:
    """
    Write a routing table to CSV for downstream analysis.
    """
    fieldnames = ["source", "destination", "cost", "next_hop", "path"]
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for entry in entries:
            writer.writerow(
                {
                    "source": source,
                    "destination": entry.dest,
                    "cost": format_cost(entry.cost),
                    "next_hop": entry.next_hop or "",
                    "path": format_path(entry.path),
                }
            )


def describe_event(event: LinkEvent) -> str:
    label = "RECOVERY" if event.action == "up" else "FAILOVER"
    return f"[{label}] link {event.action.upper()}: {event.a} <-> {event.b}"


def run(
    topology: Path,
    source: Optional[str] = None,
    routes: Sequence[Tuple[str, str]] = (),
    csv_path: Optional[Path] = None,
) -> List[RouteEntry]:
    """
    Load topology, show its routes, replay its events. Returns the final table.
    """
    config = load_topology(topology)
    graph = build_graph(config)
    routers = sorted(graph.routers())
    if source is None:
        if not routers:
            raise ValueError(f"topology {topology} defines no routers")
        source = routers[0]

    logger.info("loaded %d routers, %d links, %d events", len(routers), len(config.links), len(config.events))

    def show() -> List[RouteEntry]:
        entries = routing_table(graph, source)
        print_routing_table(source, entries)
        for src, dest in routes:
            print_route(graph, src, dest)
        return entries

    print_topology(graph)
    entries = show()

    for event in config.events:
        apply_event(graph, event)
        print()
        print(describe_event(event))
        entries = show()

    if csv_path is not None:
        write_routing_table_csv(source, entries, csv_path)
        print(f"Wrote routing table for {source} to {csv_path}")
    return entries


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(args.log_level)

    try:
        run(
            args.topology,
            source=args.source,
            routes=[tuple(pair) for pair in args.route],
            csv_path=args.csv,
        )
    except (OSError, ValueError, TopologyError) as exc:
        logger.error("%s", exc)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
