"""
Undirected, weighted graph abstraction for linkstate.

Routers are dense integer ids in [0, num_vertices).
Links are undirected: a link a <-> b appears in both adjacency lists.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Sequence, Tuple


class Graph(ABC):
    """Read-only view of a router topology used by shortest-path engines."""

    @property
    @abstractmethod
    def num_vertices(self) -> int:
        """Number of routers; ids run from 0 to num_vertices - 1."""
        raise NotImplementedError

    @abstractmethod
    def nodes(self) -> Iterable[int]:
        """Return all router ids in the graph."""
        raise NotImplementedError

    @abstractmethod
    def outgoing(self, node: int) -> Sequence[Tuple[int, int]]:
        """
        One-hop neighbours of a router in insertion order.

        Returns: sequence of (neighbor, cost) pairs
        """
        raise NotImplementedError
