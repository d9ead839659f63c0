"""
Network-wide orchestration for linkstate.

TopologyManager owns the topology, builds one routing table per router by
running the shortest-path engine from every router, and simulates how a
packet is forwarded hop by hop using those tables.
"""

from __future__ import annotations

from concurrent.futures import Executor, ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence
import logging
import time

import numpy as np

from algorithms import ShortestPathEngine
from dijkstra_engine import SimpleDijkstraEngine
from routing import (
    InvalidEndpoints,
    NoLink,
    Path,
    PathResult,
    RoutingConsistencyError,
    RoutingTable,
    SelfLoop,
)
from topology import LinkResult, Topology

logger = logging.getLogger(__name__)


def create_topology(
    num_routers: int,
    num_links: int = 0,
    engine: Optional[ShortestPathEngine] = None,
    max_workers: Optional[int] = None,
) -> "TopologyManager":
    """Construct an empty network of num_routers routers (num_links is advisory)."""
    return TopologyManager(num_routers, num_links, engine=engine, max_workers=max_workers)


class TopologyManager:
    """
    Holds the topology plus one RoutingTable per router.

    Typical use:
        add_link(...) for every link, then build_all_routing_tables() once,
        then any number of get_routing_table / simulate_path queries.
    """

    def __init__(
        self,
        num_routers: int,
        num_links: int = 0,
        engine: Optional[ShortestPathEngine] = None,
        max_workers: Optional[int] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self._topology = Topology(num_routers, num_links)
        self._engine = engine or SimpleDijkstraEngine()
        self._max_workers = max_workers
        self._executor = executor
        self._tables: Optional[Dict[int, RoutingTable]] = None

    # --- Topology passthrough -------------------------------------------------

    @property
    def topology(self) -> Topology:
        return self._topology

    @property
    def num_routers(self) -> int:
        return self._topology.num_vertices

    @property
    def tables_built(self) -> bool:
        return self._tables is not None

    def is_empty_of_edges(self) -> bool:
        return self._topology.is_empty_of_edges()

    def add_link(self, source: int, destination: int, cost: int) -> LinkResult:
        """
        Add an undirected link; rejected links leave the topology unchanged.

        Any previously built routing tables are discarded on success.
        """
        result = self._topology.add_link(source, destination, cost)
        if result.accepted:
            logger.debug("link added %d <-> %d cost=%d", source, destination, cost)
            if self._tables is not None:
                logger.info("topology changed; discarding routing tables")
                self._tables = None
        else:
            logger.warning(
                "link not added %d <-> %d cost=%d: %s",
                source, destination, cost, result.reason.value,
            )
        return result

    # --- Routing tables -------------------------------------------------------

    def build_all_routing_tables(self) -> Dict[int, RoutingTable]:
        """
        Run the shortest-path engine from every router.

        Each run only reads the topology and produces its own table, so runs
        are mapped over a thread pool and collected by router id.
        """
        start = time.time()
        routers = list(self._topology.nodes())
        if self._executor is not None:
            tables = self._build_with_executor(routers, self._executor)
        elif self._max_workers == 1:
            tables = {r: self._build_table(r) for r in routers}
        else:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                tables = self._build_with_executor(routers, pool)

        self._tables = {r: tables[r] for r in routers}
        logger.info(
            "built %d routing tables in %.3fs", len(self._tables), time.time() - start
        )
        return dict(self._tables)

    def _build_with_executor(self, routers: Sequence[int], executor: Executor) -> Dict[int, RoutingTable]:
        future_to_router = {executor.submit(self._build_table, r): r for r in routers}
        tables: Dict[int, RoutingTable] = {}
        for future in as_completed(future_to_router):
            tables[future_to_router[future]] = future.result()
        return tables

    def _build_table(self, router: int) -> RoutingTable:
        dist, next_hop = self._engine.compute_from(router, self._topology)
        return RoutingTable(router, dist, next_hop)

    def get_routing_table(self, router_id: int) -> RoutingTable:
        tables = self._require_tables()
        if not 0 <= router_id < self.num_routers:
            raise ValueError(f"Router {router_id} outside [0, {self.num_routers}).")
        return tables[router_id]

    def routing_tables(self) -> List[RoutingTable]:
        """All routing tables in router id order."""
        tables = self._require_tables()
        return [tables[r] for r in range(self.num_routers)]

    def distance_matrix(self) -> np.ndarray:
        """All-pairs cost matrix; row i is router i's distance vector (inf if unreachable)."""
        return np.array([t.distances for t in self.routing_tables()], dtype=float)

    def _require_tables(self) -> Dict[int, RoutingTable]:
        if self._tables is None:
            raise RuntimeError("Routing tables not built; call build_all_routing_tables() first.")
        return self._tables

    # --- Path simulation ------------------------------------------------------

    def simulate_path(self, source: int, destination: int) -> PathResult:
        """
        Follow next hops from source to destination using each router's own table.

        Returns InvalidEndpoints, NoLink, SelfLoop or Path.
        """
        n = self.num_routers
        if not (0 <= source < n and 0 <= destination < n):
            return InvalidEndpoints(source, destination)

        tables = self._require_tables()
        if not tables[source].is_reachable(destination):
            return NoLink(source, destination)
        if source == destination:
            return SelfLoop(source, destination)

        hops = [source]
        current = source
        for _ in range(n):
            nxt = tables[current].next_hop_to(destination)
            if nxt is None:
                raise RoutingConsistencyError(
                    f"Router {current} has no next hop toward {destination} "
                    f"on the path from {source}."
                )
            hops.append(nxt)
            if nxt == destination:
                return Path(source, destination, tuple(hops))
            current = nxt

        raise RoutingConsistencyError(
            f"Next-hop chain from {source} to {destination} exceeded {n} steps: {hops}"
        )

    def path_cost(self, path: Sequence[int]) -> int:
        """Sum of the cheapest link costs along consecutive routers of path."""
        total = 0
        for a, b in zip(path, path[1:]):
            cost = self._topology.edge_cost(a, b)
            if cost is None:
                raise ValueError(f"Routers {a} and {b} are not directly linked.")
            total += cost
        return total
