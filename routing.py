"""
Routing data structures for linkstate.

Defines the per-router routing table produced by a shortest-path run and the
result variants returned by path simulation.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from algorithms import UNREACHABLE, DistanceVector, NextHopVector


class RoutingConsistencyError(RuntimeError):
    """
    Raised when next-hop data cannot describe a loop-free path.

    This means the shortest-path derivation is broken; callers should not
    try to recover from it.
    """


@dataclass(frozen=True)
class RouteEntry:
    """
    Single forwarding entry in a router's routing table.
    """
    dest: int
    cost: float
    next_hop: Optional[int]

    @property
    def reachable(self) -> bool:
        return self.cost != UNREACHABLE


@dataclass(frozen=True)
class RoutingTable:
    """
    Immutable distance and next-hop vectors for one router.

    Both vectors are indexed by destination router id.
    """
    router: int
    distances: DistanceVector
    next_hops: NextHopVector

    def __post_init__(self) -> None:
        if len(self.distances) != len(self.next_hops):
            raise ValueError(
                f"Routing table for router {self.router} has {len(self.distances)} "
                f"distances but {len(self.next_hops)} next hops."
            )
        if not 0 <= self.router < len(self.distances):
            raise ValueError(f"Router {self.router} outside its own routing table.")
        if self.distances[self.router] != 0 or self.next_hops[self.router] is not None:
            raise ValueError(f"Routing table for router {self.router} has a non-trivial self entry.")

    @property
    def num_routers(self) -> int:
        return len(self.distances)

    def distance_to(self, dest: int) -> float:
        return self.distances[dest]

    def next_hop_to(self, dest: int) -> Optional[int]:
        return self.next_hops[dest]

    def is_reachable(self, dest: int) -> bool:
        return self.distances[dest] != UNREACHABLE

    def entries(self) -> Iterator[RouteEntry]:
        """Enumerate every destination except the router itself, in id order."""
        for dest in range(self.num_routers):
            if dest == self.router:
                continue
            yield RouteEntry(dest, self.distances[dest], self.next_hops[dest])


# --- Path simulation results --------------------------------------------------


@dataclass(frozen=True)
class PathResult:
    """Base class for the outcome of TopologyManager.simulate_path."""
    source: int
    destination: int

    @property
    def path(self) -> Tuple[int, ...]:
        """Routers visited, source first; empty when no path is reported."""
        return ()

    @property
    def exists(self) -> bool:
        return bool(self.path)


@dataclass(frozen=True)
class InvalidEndpoints(PathResult):
    """Source and/or destination outside the router id range."""


@dataclass(frozen=True)
class NoLink(PathResult):
    """Destination is unreachable from the source."""


@dataclass(frozen=True)
class SelfLoop(PathResult):
    """Source and destination are the same router."""

    @property
    def path(self) -> Tuple[int, ...]:
        return (self.source,)


@dataclass(frozen=True)
class Path(PathResult):
    """Hop-by-hop path obtained by chaining each router's next hop."""
    hops: Tuple[int, ...] = ()

    @property
    def path(self) -> Tuple[int, ...]:
        return self.hops
