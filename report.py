"""
Presentation helpers for routing tables and simulated paths.

The core only returns structured results; this module turns them into the
console text layout and pandas frames used by the runner.
"""

from typing import Iterable, List

import pandas as pd

from routing import (
    InvalidEndpoints,
    NoLink,
    PathResult,
    RouteEntry,
    RoutingTable,
    SelfLoop,
)

RULE = "-" * 32
HEADER = "Node\tCost\tNext Hop"


def _format_entry(entry: RouteEntry) -> str:
    if not entry.reachable:
        return f"{entry.dest}\tNo link"
    # "-" marks a destination reached over a direct link.
    hop = "-" if entry.next_hop == entry.dest else str(entry.next_hop)
    return f"{entry.dest}\t{int(entry.cost)}\t{hop}"


def format_routing_table(table: RoutingTable) -> str:
    lines = [
        RULE,
        f"Routing Table for Router {table.router}",
        RULE,
        HEADER,
    ]
    lines.extend(_format_entry(entry) for entry in table.entries())
    lines.append(RULE)
    return "\n".join(lines)


def format_routing_tables(tables: Iterable[RoutingTable]) -> str:
    return "\n\n".join(format_routing_table(t) for t in tables)


def format_path_result(result: PathResult) -> str:
    """One-line description of a simulate_path outcome."""
    if isinstance(result, InvalidEndpoints):
        return "Invalid source and/or destination"
    if isinstance(result, NoLink):
        return "No link exists"
    if isinstance(result, SelfLoop):
        return f"Self loop: {result.source} - {result.destination}"
    return "Link exists: " + " - ".join(str(r) for r in result.path)


def routing_table_frame(table: RoutingTable) -> pd.DataFrame:
    """
    Routing table as a DataFrame with one row per destination.

    Unreachable destinations keep cost inf and a missing next hop.
    """
    rows: List[dict] = [
        {"router": table.router, "dest": e.dest, "cost": float(e.cost), "next_hop": e.next_hop}
        for e in table.entries()
    ]
    frame = pd.DataFrame(rows, columns=["router", "dest", "cost", "next_hop"])
    frame["next_hop"] = frame["next_hop"].astype("Int64")
    return frame


def routing_tables_frame(tables: Iterable[RoutingTable]) -> pd.DataFrame:
    frames = [routing_table_frame(t) for t in tables]
    if not frames:
        return pd.DataFrame(columns=["router", "dest", "cost", "next_hop"])
    return pd.concat(frames, ignore_index=True)
