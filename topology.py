"""
Concrete undirected, weighted topology for linkstate.

Implements the Graph interface using a list-of-lists adjacency
representation indexed by router id.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from graph import Graph


class LinkRejection(Enum):
    """Why a link was refused by Topology.add_link."""

    NEGATIVE_COST = "negative_cost"
    INVALID_VERTEX = "invalid_vertex"
    SELF_LOOP = "self_loop"


@dataclass(frozen=True)
class LinkResult:
    """
    Outcome of one add_link call.

    reason is None exactly when the link was accepted.
    """
    source: int
    destination: int
    cost: int
    reason: Optional[LinkRejection] = None

    @property
    def accepted(self) -> bool:
        return self.reason is None


class Topology(Graph):
    """
    Undirected graph over routers 0..num_vertices-1.

    Each accepted link contributes one (neighbor, cost) entry to both
    endpoints' adjacency lists. Rejected links leave the structure untouched.
    """

    def __init__(self, num_vertices: int, num_links: int = 0) -> None:
        if num_vertices < 1:
            raise ValueError(f"Topology needs at least one router, got {num_vertices}.")
        if num_links < 0:
            raise ValueError(f"Number of links must be non-negative, got {num_links}.")
        self._num_vertices = num_vertices
        # Advisory only; add_link never enforces it.
        self._num_links = num_links
        self._link_count = 0
        self._adj: List[List[Tuple[int, int]]] = [[] for _ in range(num_vertices)]

    # --- Mutation API --------------------------------------------------------

    def add_link(self, source: int, destination: int, cost: int) -> LinkResult:
        """
        Add an undirected link source <-> destination with the given cost.

        Returns a LinkResult carrying the rejection reason, if any.
        """
        reason = self._validate(source, destination, cost)
        if reason is not None:
            return LinkResult(source, destination, cost, reason)

        self._adj[source].append((destination, cost))
        self._adj[destination].append((source, cost))
        self._link_count += 1
        return LinkResult(source, destination, cost)

    def _validate(self, source: int, destination: int, cost: int) -> Optional[LinkRejection]:
        if cost < 0:
            return LinkRejection.NEGATIVE_COST
        if not (0 <= source < self._num_vertices and 0 <= destination < self._num_vertices):
            return LinkRejection.INVALID_VERTEX
        if source == destination:
            return LinkRejection.SELF_LOOP
        return None

    # --- Queries -------------------------------------------------------------

    @property
    def num_vertices(self) -> int:
        return self._num_vertices

    @property
    def num_links(self) -> int:
        """Link capacity announced at construction time."""
        return self._num_links

    @property
    def link_count(self) -> int:
        """Number of links actually accepted."""
        return self._link_count

    def is_empty_of_edges(self) -> bool:
        """True when no router has any adjacent link."""
        return all(not neighbours for neighbours in self._adj)

    def edge_cost(self, a: int, b: int) -> Optional[int]:
        """Cheapest direct link cost between a and b, or None if not adjacent."""
        for router in (a, b):
            if not 0 <= router < self._num_vertices:
                raise ValueError(f"Router {router} outside [0, {self._num_vertices}).")
        costs = [cost for neighbor, cost in self._adj[a] if neighbor == b]
        return min(costs) if costs else None

    def adjacency(self) -> Tuple[Tuple[Tuple[int, int], ...], ...]:
        """Immutable snapshot of the full adjacency structure."""
        return tuple(tuple(neighbours) for neighbours in self._adj)

    # --- Graph interface -----------------------------------------------------

    def nodes(self) -> Sequence[int]:
        return range(self._num_vertices)

    def outgoing(self, node: int) -> Sequence[Tuple[int, int]]:
        return list(self._adj[node])  # defensive copy
