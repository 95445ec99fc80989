"""Render graph: passes ordered by explicit edges and resource dependencies.

Each pass declares the resources it reads and writes. Compiling the graph
adds an edge from every writer of a resource to every reader of it, rejects
unordered writers of the same resource, and sorts the passes topologically.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Optional


@dataclass(frozen=True, order=True)
class PassId:
    """Unique identifier of a render pass."""

    value: int

    def __repr__(self) -> str:
        return f"PassId({self.value})"


class ResourceAccess(Enum):
    """How a pass uses a resource."""

    READ = "read"
    WRITE = "write"
    READ_WRITE = "read_write"


@dataclass(frozen=True)
class ResourceId:
    """A named GPU resource (texture or buffer) tracked by the graph."""

    name: str


@dataclass(frozen=True)
class ResourceBinding:
    """A resource together with the way a pass accesses it."""

    resource: ResourceId
    access: ResourceAccess


@dataclass(frozen=True)
class PassContext:
    """Information handed to a pass callback when it runs."""

    pass_id: PassId
    pass_name: str
    frame_index: int


PassCallback = Callable[[PassContext], None]


@dataclass
class RenderPassNode:
    """A pass in the graph with its resource declarations and callback."""

    id: PassId
    name: str
    reads: list[ResourceId] = field(default_factory=list)
    writes: list[ResourceId] = field(default_factory=list)
    execute: Optional[PassCallback] = field(default=None, repr=False)


class GraphError(Exception):
    """Base class of render graph errors."""


class CycleDetectedError(GraphError):
    """The dependencies between passes form a cycle."""

    def __init__(self) -> None:
        super().__init__("Render graph contains a cycle")


class UnknownPassError(GraphError):
    """An edge refers to a pass that is not in the graph."""

    def __init__(self, pass_id: PassId) -> None:
        super().__init__(f"Unknown pass: {pass_id!r}")
        self.pass_id = pass_id


class NotCompiledError(GraphError):
    """The graph has not been compiled."""

    def __init__(self) -> None:
        super().__init__("Graph not compiled")


class ResourceConflictError(GraphError):
    """Two passes write the same resource with no ordering between them."""

    def __init__(self, resource: str, pass_a: PassId, pass_b: PassId) -> None:
        super().__init__(
            f"Resource conflict on '{resource}' between {pass_a!r} and {pass_b!r}"
        )
        self.resource = resource
        self.pass_a = pass_a
        self.pass_b = pass_b


Edge = tuple[PassId, PassId]


def _adjacency(edges: Iterable[Edge]) -> dict[PassId, list[PassId]]:
    adj: dict[PassId, list[PassId]] = {}
    for source, target in edges:
        adj.setdefault(source, []).append(target)
    return adj


def _is_reachable(adj: dict[PassId, list[PassId]], start: PassId, goal: PassId) -> bool:
    visited = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if current == goal:
            return True
        for neighbour in adj.get(current, ()):
            if neighbour not in visited:
                visited.add(neighbour)
                queue.append(neighbour)
    return False


class RenderGraph:
    """A directed acyclic graph of render passes."""

    def __init__(self) -> None:
        self._passes: dict[PassId, RenderPassNode] = {}
        self._edges: list[Edge] = []
        self._next_id = 0
        self._execution_order: Optional[list[PassId]] = None

    def add_pass(self, name: str) -> PassId:
        """Add a pass and return its identifier."""
        pass_id = PassId(self._next_id)
        self._next_id += 1
        self._passes[pass_id] = RenderPassNode(pass_id, name)
        self._execution_order = None
        return pass_id

    def set_pass_reads(self, pass_id: PassId, resources: Iterable[str]) -> None:
        """Declare the resources a pass reads; unknown passes are ignored."""
        node = self._passes.get(pass_id)
        if node is not None:
            node.reads = [ResourceId(name) for name in resources]
            self._execution_order = None

    def set_pass_writes(self, pass_id: PassId, resources: Iterable[str]) -> None:
        """Declare the resources a pass writes; unknown passes are ignored."""
        node = self._passes.get(pass_id)
        if node is not None:
            node.writes = [ResourceId(name) for name in resources]
            self._execution_order = None

    def set_pass_execute(self, pass_id: PassId, callback: PassCallback) -> None:
        """Set the callback run for a pass; unknown passes are ignored."""
        node = self._passes.get(pass_id)
        if node is not None:
            node.execute = callback

    def add_edge(self, source: PassId, target: PassId) -> None:
        """Require ``source`` to run before ``target``."""
        self._edges.append((source, target))
        self._execution_order = None

    def compile(self) -> None:
        """Compute the execution order.

        Raises UnknownPassError for an edge to a missing pass,
        ResourceConflictError for unordered writers of one resource and
        CycleDetectedError if the dependencies are cyclic.
        """
        all_ids = list(self._passes)

        edge_set: set[Edge] = set()
        for source, target in self._edges:
            if source not in self._passes:
                raise UnknownPassError(source)
            if target not in self._passes:
                raise UnknownPassError(target)
            edge_set.add((source, target))

        writers: dict[str, list[PassId]] = {}
        readers: dict[str, list[PassId]] = {}
        for pid, node in self._passes.items():
            for resource in node.writes:
                writers.setdefault(resource.name, []).append(pid)
            for resource in node.reads:
                readers.setdefault(resource.name, []).append(pid)

        for resource, writer_list in writers.items():
            for writer in writer_list:
                for reader in readers.get(resource, ()):
                    if writer != reader:
                        edge_set.add((writer, reader))

        for resource, writer_list in writers.items():
            if len(writer_list) < 2:
                continue
            adj = _adjacency(edge_set)
            for i, a in enumerate(writer_list):
                for b in writer_list[i + 1:]:
                    if not _is_reachable(adj, a, b) and not _is_reachable(adj, b, a):
                        raise ResourceConflictError(resource, a, b)

        adj = _adjacency(edge_set)
        in_degree = {pid: 0 for pid in all_ids}
        for _, target in edge_set:
            in_degree[target] += 1

        queue = deque(sorted(pid for pid, degree in in_degree.items() if degree == 0))
        order: list[PassId] = []
        while queue:
            node = queue.popleft()
            order.append(node)
            for neighbour in sorted(adj.get(node, ())):
                in_degree[neighbour] -= 1
                if in_degree[neighbour] == 0:
                    queue.append(neighbour)

        if len(order) != len(all_ids):
            raise CycleDetectedError()
        self._execution_order = order

    def execute(self, frame_index: int) -> None:
        """Run every pass callback in compiled order; does nothing if not compiled."""
        if self._execution_order is None:
            return
        for pid in list(self._execution_order):
            node = self._passes[pid]
            if node.execute is not None:
                node.execute(PassContext(pid, node.name, frame_index))

    def execution_order(self) -> Optional[tuple[PassId, ...]]:
        """The compiled order, or None if the graph is not compiled."""
        if self._execution_order is None:
            return None
        return tuple(self._execution_order)

    def resource_lifetime(self, resource: str) -> Optional[tuple[PassId, PassId]]:
        """First writer and last reader of a resource in compiled order.

        None if the graph is not compiled or the resource lacks either.
        """
        if self._execution_order is None:
            return None
        rid = ResourceId(resource)
        first_writer: Optional[PassId] = None
        last_reader: Optional[PassId] = None
        for pid in self._execution_order:
            node = self._passes[pid]
            if first_writer is None and rid in node.writes:
                first_writer = pid
            if rid in node.reads:
                last_reader = pid
        if first_writer is None or last_reader is None:
            return None
        return (first_writer, last_reader)

    def pass_count(self) -> int:
        return len(self._passes)

    def edge_count(self) -> int:
        """Number of explicit edges; implicit resource edges are not counted."""
        return len(self._edges)