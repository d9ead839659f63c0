"""
Algorithm interfaces for routing.

Keeps graph algorithms separate from routing tables and path simulation.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Tuple
import math

from graph import Graph

# Distance reported for routers that cannot be reached from the source.
UNREACHABLE = math.inf

DistanceVector = Tuple[float, ...]
NextHopVector = Tuple[Optional[int], ...]


class NextHopDerivation(Enum):
    """
    How the first hop toward each destination is derived.

    PREDECESSOR: record immediate predecessors while relaxing, then walk back
        from each destination to the source once the frontier is empty.
    COLLAPSING: update first hops incrementally during relaxation by
        collapsing the pointer chain through the upstream router's entry.
    """

    PREDECESSOR = "predecessor"
    COLLAPSING = "collapsing"


class ShortestPathEngine(ABC):
    """
    Interface for single-source shortest-path computation.
    """

    @abstractmethod
    def shortest_path_costs(self, graph: Graph, source: int) -> DistanceVector:
        """
        Compute shortest-path costs from source to every router.

        Returns:
            Vector indexed by router id; UNREACHABLE where no path exists.
        """
        raise NotImplementedError

    @abstractmethod
    def compute_from(self, source: int, graph: Graph) -> Tuple[DistanceVector, NextHopVector]:
        """
        Compute shortest-path costs plus the first hop toward every router.

        Returns:
            (dist, next_hop) where next_hop[d] is the first router after source
            on a shortest path to d, or None for source itself and for
            unreachable routers.
        """
        raise NotImplementedError
