"""
CLI to build routing tables for a network described in YAML.

Reads a network file, adds every link, builds one routing table per router,
prints the tables and simulates the requested source/destination queries.

Example network file:

    routers: 4
    links:
      - [0, 1, 1]
      - [1, 2, 1]
      - [0, 2, 5]
      - [2, 3, 1]
    queries:
      - [0, 3]
    next_hop_derivation: predecessor
    max_workers: 4
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple
import argparse
import logging

from algorithms import NextHopDerivation
from dijkstra_engine import SimpleDijkstraEngine
from report import format_path_result, format_routing_tables, routing_tables_frame
from topology import LinkResult
from topology_manager import TopologyManager


@dataclass(frozen=True)
class LinkConfig:
    source: int
    destination: int
    cost: int


@dataclass(frozen=True)
class NetworkConfig:
    routers: int
    links: Sequence[LinkConfig]
    queries: Sequence[Tuple[int, int]] = ()
    next_hop_derivation: NextHopDerivation = NextHopDerivation.PREDECESSOR
    max_workers: Optional[int] = None


def load_config(path: Path) -> NetworkConfig:
    import yaml  # type: ignore

    data = yaml.safe_load(path.read_text())
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level.")
    if "routers" not in data:
        raise ValueError(f"{path}: missing 'routers'.")

    links: List[LinkConfig] = []
    for raw in data.get("links") or []:
        if not isinstance(raw, (list, tuple)) or len(raw) != 3:
            raise ValueError(f"{path}: link {raw!r} must be [source, destination, cost].")
        links.append(LinkConfig(int(raw[0]), int(raw[1]), int(raw[2])))

    queries: List[Tuple[int, int]] = []
    for raw in data.get("queries") or []:
        if not isinstance(raw, (list, tuple)) or len(raw) != 2:
            raise ValueError(f"{path}: query {raw!r} must be [source, destination].")
        queries.append((int(raw[0]), int(raw[1])))

    max_workers = data.get("max_workers")
    return NetworkConfig(
        routers=int(data["routers"]),
        links=links,
        queries=queries,
        next_hop_derivation=NextHopDerivation(data.get("next_hop_derivation", "predecessor")),
        max_workers=int(max_workers) if max_workers is not None else None,
    )


def build_network(cfg: NetworkConfig) -> Tuple[TopologyManager, List[LinkResult]]:
    manager = TopologyManager(
        cfg.routers,
        len(cfg.links),
        engine=SimpleDijkstraEngine(cfg.next_hop_derivation),
        max_workers=cfg.max_workers,
    )
    link_results = [manager.add_link(link.source, link.destination, link.cost) for link in cfg.links]
    manager.build_all_routing_tables()
    return manager, link_results


def run_network(cfg: NetworkConfig) -> Dict[str, object]:
    """
    Build the network and answer every query.

    Returns a summary with the manager, per-link outcomes and per-query results.
    """
    manager, link_results = build_network(cfg)
    rejected = [r for r in link_results if not r.accepted]
    results = [manager.simulate_path(src, dst) for src, dst in cfg.queries]
    return {
        "manager": manager,
        "routers": cfg.routers,
        "links_accepted": manager.topology.link_count,
        "links_rejected": rejected,
        "empty_network": manager.is_empty_of_edges(),
        "results": results,
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Link-state routing tables and path simulation.")
    p.add_argument("--config", type=Path, required=True, help="YAML network description")
    p.add_argument("--csv", type=Path, default=None, help="write all routing tables to this CSV")
    p.add_argument("--log-level", default="WARNING")
    args = p.parse_args(argv)

    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING))

    cfg = load_config(args.config)
    summary = run_network(cfg)
    manager: TopologyManager = summary["manager"]  # type: ignore[assignment]

    print(f"[run] routers={cfg.routers} links_accepted={summary['links_accepted']}")
    for r in summary["links_rejected"]:  # type: ignore[union-attr]
        print(f"[run] link not added: {r.source} - {r.destination} cost={r.cost} ({r.reason.value})")
    if summary["empty_network"]:
        print("[run] no links - empty network")

    print(format_routing_tables(manager.routing_tables()))
    for result in summary["results"]:  # type: ignore[union-attr]
        print(f"[path] {result.source} -> {result.destination}: {format_path_result(result)}")

    if args.csv is not None:
        args.csv.parent.mkdir(parents=True, exist_ok=True)
        routing_tables_frame(manager.routing_tables()).to_csv(args.csv, index=False)
        print(f"[run] wrote routing tables to {args.csv}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
