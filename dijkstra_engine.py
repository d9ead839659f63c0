"""
Heap-based Dijkstra engine for linkstate.

Uses Python's heapq to compute single-source shortest paths and first hops
over any Graph implementation that satisfies the Graph interface.
"""

from typing import List, Optional, Tuple
import heapq
import logging

from algorithms import (
    UNREACHABLE,
    DistanceVector,
    NextHopDerivation,
    NextHopVector,
    ShortestPathEngine,
)
from graph import Graph
from routing import RoutingConsistencyError

logger = logging.getLogger(__name__)


class SimpleDijkstraEngine(ShortestPathEngine):
    """
    Single-source Dijkstra using a binary heap.

    There is no decrease-key: an improved router is pushed again and older
    heap entries are skipped when popped.

    Complexity:
        O(E log V) over the routers reachable from the source.
    """

    def __init__(self, derivation: NextHopDerivation = NextHopDerivation.PREDECESSOR) -> None:
        self.derivation = derivation

    def shortest_path_costs(self, graph: Graph, source: int) -> DistanceVector:
        dist, _next_hop = self.compute_from(source, graph)
        return dist

    def compute_from(self, source: int, graph: Graph) -> Tuple[DistanceVector, NextHopVector]:
        """
        Run Dijkstra from source and derive the first hop toward every router.

        Both derivations share the same relaxation sequence: routers are
        popped in (cost, id) order and a neighbour is only updated on a
        strict improvement, so ties keep the first path discovered.
        """
        n = graph.num_vertices
        if not 0 <= source < n:
            raise ValueError(f"Source router {source} outside [0, {n}).")

        dist: List[float] = [UNREACHABLE] * n
        prev: List[Optional[int]] = [None] * n
        # Raw incremental first hops; only maintained for COLLAPSING.
        hops: List[Optional[int]] = [None] * n
        settled: List[int] = []
        collapsing = self.derivation is NextHopDerivation.COLLAPSING

        dist[source] = 0
        pq = [(0, source)]  # priority queue of (distance, router)

        while pq:
            d_u, u = heapq.heappop(pq)

            # Skip outdated entries
            if d_u != dist[u]:
                continue
            settled.append(u)

            for v, w in graph.outgoing(u):
                alt = d_u + w
                if alt < dist[v]:
                    dist[v] = alt
                    prev[v] = u
                    heapq.heappush(pq, (alt, v))
                    if collapsing:
                        self._collapse(hops, source, u, v)

        if collapsing:
            next_hop = self._normalise_collapsed(hops, dist, source)
        else:
            next_hop = self._first_hops_from_predecessors(prev, settled, source)

        logger.debug(
            "dijkstra from %d settled %d/%d routers (%s)",
            source, len(settled), n, self.derivation.value,
        )
        return tuple(dist), tuple(next_hop)

    # --- Next-hop derivations ------------------------------------------------

    @staticmethod
    def _first_hops_from_predecessors(
        prev: List[Optional[int]], settled: List[int], source: int
    ) -> List[Optional[int]]:
        """
        Resolve first hops from the converged predecessor map.

        A router's predecessor is always settled before it, so walking the
        settle order lets each router reuse its predecessor's first hop.
        """
        next_hop: List[Optional[int]] = [None] * len(prev)
        for v in settled:
            if v == source:
                continue
            parent = prev[v]
            next_hop[v] = v if parent == source else next_hop[parent]
        return next_hop

    @staticmethod
    def _collapse(hops: List[Optional[int]], source: int, current: int, neighbor: int) -> None:
        """
        Point neighbor at the first hop currently stored for current.

        hops[x] is None for routers reached directly from the source, so the
        walk stops at the source-adjacent router on current's chain.
        """
        if current == source:
            hops[neighbor] = None
            return
        hops[neighbor] = current
        steps = 0
        while hops[hops[neighbor]] is not None:
            hops[neighbor] = hops[hops[neighbor]]
            steps += 1
            if steps > len(hops):
                raise RoutingConsistencyError(
                    f"Next-hop chain for router {neighbor} from {source} does not terminate."
                )

    @staticmethod
    def _normalise_collapsed(
        hops: List[Optional[int]], dist: List[float], source: int
    ) -> List[Optional[int]]:
        # Collapsed vectors leave direct neighbours as None; report them as themselves.
        next_hop: List[Optional[int]] = list(hops)
        for v, cost in enumerate(dist):
            if v != source and cost != UNREACHABLE and next_hop[v] is None:
                next_hop[v] = v
        return next_hop
