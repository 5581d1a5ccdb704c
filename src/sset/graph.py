"""Graph - node and edge collections with id-based traversal.

Nodes and edges are plain records; ids are looked up by linear scan.
Updates are a remove followed by an add.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .collection import Collection
from .kernel.canonical import Canonical
from .kernel.errors import SerializationError, ValueAlreadyExists, ValueNotFound


class GraphNode(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Any = None

    def to_record(self) -> dict[str, Any]:
        record = {"id": self.id} if "id" in self.model_fields_set else {}
        return {**record, **(self.model_extra or {})}


class GraphEdge(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Any = None
    from_: Any = Field(alias="from")
    to: Any

    def to_record(self) -> dict[str, Any]:
        record = {"id": self.id} if "id" in self.model_fields_set else {}
        return {**record, "from": self.from_, "to": self.to, **(self.model_extra or {})}


class GraphObject(BaseModel):
    """Plain-data form of a graph."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)


@dataclass(frozen=True)
class NodeView:
    """Node operations bound to a graph; mutations return a new Graph."""

    graph: Graph

    @property
    def _nodes(self) -> Collection:
        return self.graph.node_collection

    def _with(self, nodes: Collection) -> Graph:
        return Graph(node_collection=nodes, edge_collection=self.graph.edge_collection)

    def add(self, item: Any) -> Graph:
        if self._nodes.has(item):
            raise ValueAlreadyExists(item, message="Could not add Node to Graph: Node already exists")
        return self._with(self._nodes.add(item))

    def remove(self, item: Any) -> Graph:
        if not self._nodes.has(item):
            raise ValueNotFound("Could not remove Node from Graph: Node does not exist", value=item)
        return self._with(self._nodes.remove(item))

    def update(self, item: Any, new_item: Any) -> Graph:
        if not self._nodes.has(item):
            raise ValueNotFound("Could not update Node from Graph: Node does not exist", value=item)
        return self._with(self._nodes.remove(item).add(new_item))

    def union(self, other: Graph) -> Graph:
        return self._with(self._nodes.union(other.nodes.get_all()))

    def get_all(self) -> Collection:
        return self._nodes

    def get_id(self, node_id: Any) -> Canonical:
        node = self._nodes.find_one({"id": node_id})
        if node is None:
            raise ValueNotFound(f"Could not get Node: Node Id '{node_id}' does not exist in Graph", value=node_id)
        return node

    def has_id(self, node_id: Any) -> bool:
        return self._nodes.find_one({"id": node_id}) is not None

    def reached_by_id(self, node_id: Any) -> Graph:
        """Graph of the nodes targeted by edges leaving ``node_id`` (no edges)."""
        outgoing = self.graph.edges.from_id(node_id).edges.get_all()
        reached = outgoing.map(lambda edge: self.get_id(edge["to"]))
        return Graph(node_collection=reached, edge_collection=Collection())

    def __iter__(self) -> Iterator[Canonical]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)


@dataclass(frozen=True)
class EdgeView:
    """Edge operations bound to a graph; mutations return a new Graph."""

    graph: Graph

    @property
    def _edges(self) -> Collection:
        return self.graph.edge_collection

    def _with(self, edges: Collection) -> Graph:
        return Graph(node_collection=self.graph.node_collection, edge_collection=edges)

    def add(self, item: Any) -> Graph:
        if self._edges.has(item):
            raise ValueAlreadyExists(item, message="Could not add Edge to Graph: Edge already exists")
        return self._with(self._edges.add(item))

    def remove(self, item: Any) -> Graph:
        if not self._edges.has(item):
            raise ValueNotFound("Could not remove Edge from Graph: Edge does not exist", value=item)
        return self._with(self._edges.remove(item))

    def update(self, item: Any, new_item: Any) -> Graph:
        if not self._edges.has(item):
            raise ValueNotFound("Could not update Edge from Graph: Edge does not exist", value=item)
        return self._with(self._edges.remove(item).add(new_item))

    def toggle(self, item: Mapping[str, Any]) -> Graph:
        """Remove the edge if its id is present, add it otherwise."""
        if self.has_id(item.get("id")):
            return self.remove(item)
        return self.add(item)

    def union(self, other: Graph) -> Graph:
        return self._with(self._edges.union(other.edges.get_all()))

    def map(self, fn: Callable[[Canonical], Any]) -> Graph:
        return self._with(self._edges.map(fn))

    def get_all(self) -> Collection:
        return self._edges

    def has_id(self, edge_id: Any) -> bool:
        return self._edges.find_one({"id": edge_id}) is not None

    def from_id(self, source_id: Any) -> Graph:
        """Graph of the edges leaving ``source_id`` (no nodes)."""
        return Graph(node_collection=Collection(), edge_collection=self._edges.find({"from": source_id}))

    def __iter__(self) -> Iterator[Canonical]:
        return iter(self._edges)

    def __len__(self) -> int:
        return len(self._edges)


@dataclass(frozen=True, eq=False)
class Graph:
    """Immutable graph composed of a node collection and an edge collection."""

    node_collection: Collection = field(default_factory=Collection)
    edge_collection: Collection = field(default_factory=Collection)

    @classmethod
    def from_object(cls, obj: Mapping[str, Any] | GraphObject) -> Graph:
        """Build a graph from ``{"nodes": [...], "edges": [...]}``.

        Raises:
            SerializationError: If an edge lacks ``from``/``to`` or the shape is wrong
        """
        try:
            parsed = obj if isinstance(obj, GraphObject) else GraphObject.model_validate(obj)
        except ValidationError as exc:
            raise SerializationError(f"Invalid graph object: {exc.error_count()} error(s)", obj) from exc
        nodes = [node.to_record() for node in parsed.nodes]
        edges = [edge.to_record() for edge in parsed.edges]
        return cls(node_collection=Collection.from_array(nodes), edge_collection=Collection.from_array(edges))

    @property
    def nodes(self) -> NodeView:
        return NodeView(self)

    @property
    def edges(self) -> EdgeView:
        return EdgeView(self)

    def to_object(self) -> dict[str, list[Canonical]]:
        return {
            "edges": self.edge_collection.to_array(),
            "nodes": self.node_collection.to_array(),
        }

    def union(self, other: Graph) -> Graph:
        return self.edges.union(other).nodes.union(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return self.node_collection == other.node_collection and self.edge_collection == other.edge_collection

    __hash__ = None  # type: ignore[assignment]
