import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional, Tuple

import networkx as nx

from .config import ACOConfig

logger = logging.getLogger(__name__)


class InvalidGraphError(ValueError):
    """Raised when nodes and edges do not form a valid journey graph."""


@dataclass(frozen=True)
class Node:
    id: str
    label: str
    position: Optional[Tuple[float, float]] = None


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    pheromone: float
    label: Optional[str] = None


@dataclass(frozen=True)
class GraphData:
    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]


def _coerce_node(item):
    if isinstance(item, Node):
        return item
    if isinstance(item, Mapping):
        node_id = item.get('id')
        label = item.get('label')
        position = item.get('position')
        if position is None and item.get('x') is not None and item.get('y') is not None:
            position = (item['x'], item['y'])
        return Node(node_id, label if label is not None else node_id, position)
    raise InvalidGraphError(f"Cannot interpret {item!r} as a node")


def _coerce_edge(item):
    if isinstance(item, Edge):
        return item
    if isinstance(item, Mapping):
        for key in ('pheromoneStrength', 'pheromone', 'weight'):
            if key in item:
                strength = item[key]
                break
        else:
            raise InvalidGraphError(f"Edge {item!r} has no pheromone strength")
        return Edge(item.get('source'), item.get('target'), strength, item.get('label'))
    raise InvalidGraphError(f"Cannot interpret {item!r} as an edge")


class JourneyGraph:
    """Directed user-journey graph whose edges carry a bounded pheromone strength.

    Nodes are pages (states), edges are transitions between them. The
    pheromone lives on the underlying ``networkx.DiGraph`` as the
    ``'pheromone'`` edge attribute and is only ever written through
    :meth:`set_pheromone`, which clamps it to the configured bounds.
    """

    def __init__(self, config=None):
        self.config = config or ACOConfig()
        self.graph = nx.DiGraph()
        # Edge keys in insertion order; DiGraph iterates by source node instead
        self._edge_keys = []

    def add_node(self, node):
        node = _coerce_node(node)
        if not isinstance(node.id, str) or not node.id.strip():
            raise InvalidGraphError(f"Node id must be a non-empty string, got {node.id!r}")
        if node.id in self.graph:
            raise InvalidGraphError(f"Duplicate node id: {node.id!r}")
        self.graph.add_node(node.id, label=node.label, position=node.position)

    def add_edge(self, edge):
        edge = _coerce_edge(edge)
        for endpoint in (edge.source, edge.target):
            if endpoint not in self.graph:
                raise InvalidGraphError(
                    f"Edge {edge.source!r} -> {edge.target!r} references unknown node {endpoint!r}"
                )
        if self.graph.has_edge(edge.source, edge.target):
            raise InvalidGraphError(f"Duplicate edge {edge.source!r} -> {edge.target!r}")
        try:
            strength = float(edge.pheromone)
        except (TypeError, ValueError) as e:
            raise InvalidGraphError(
                f"Edge {edge.source!r} -> {edge.target!r} has non-numeric strength {edge.pheromone!r}"
            ) from e
        if math.isnan(strength):
            raise InvalidGraphError(f"Edge {edge.source!r} -> {edge.target!r} has NaN strength")

        self.graph.add_edge(edge.source, edge.target, label=edge.label)
        self._edge_keys.append((edge.source, edge.target))
        self.set_pheromone(edge.source, edge.target, strength)

    def set_pheromone(self, source, target, value):
        """Store a new strength for an edge, clamped into the configured bounds.

        Args:
            source: Source node id
            target: Target node id
            value: Requested pheromone strength

        Returns:
            The strength actually stored
        """
        if not self.graph.has_edge(source, target):
            raise KeyError(f"No edge {source!r} -> {target!r}")
        if math.isnan(value):
            raise ValueError(f"Pheromone for {source!r} -> {target!r} cannot be NaN")
        clamped = self.config.clamp(value)
        self.graph[source][target]['pheromone'] = clamped
        return clamped

    def get_pheromone(self, source, target):
        return self.graph[source][target]['pheromone']

    def set_position(self, node_id, x, y):
        """Attach a layout position to a node. The simulation never reads it."""
        if node_id not in self.graph:
            raise KeyError(f"Unknown node {node_id!r}")
        self.graph.nodes[node_id]['position'] = (float(x), float(y))

    def clear_position(self, node_id):
        if node_id not in self.graph:
            raise KeyError(f"Unknown node {node_id!r}")
        self.graph.nodes[node_id]['position'] = None

    def has_node(self, node_id):
        return node_id in self.graph

    def node_ids(self):
        return list(self.graph.nodes())

    def node(self, node_id):
        data = self.graph.nodes[node_id]
        return Node(node_id, data['label'], data['position'])

    def nodes(self):
        return [self.node(node_id) for node_id in self.graph.nodes()]

    def _edge(self, source, target):
        data = self.graph[source][target]
        return Edge(source, target, data['pheromone'], data['label'])

    def edges(self):
        """All edges in insertion order."""
        return [self._edge(u, v) for u, v in self._edge_keys]

    def outgoing_edges(self, node_id):
        """Edges leaving ``node_id`` in insertion order; empty for dead ends or unknown ids."""
        if node_id not in self.graph:
            return []
        # Successor order of a DiGraph is the order edges from this node were added
        return [self._edge(node_id, target) for target in self.graph.successors(node_id)]

    def find_edge(self, source, target):
        if not self.graph.has_edge(source, target):
            return None
        return self._edge(source, target)

    def number_of_nodes(self):
        return self.graph.number_of_nodes()

    def number_of_edges(self):
        return self.graph.number_of_edges()

    def snapshot(self):
        """Read-only view of the current nodes and edges."""
        return GraphData(tuple(self.nodes()), tuple(self.edges()))

    def to_networkx(self):
        """Independent copy of the underlying graph for renderers and analysis."""
        return self.graph.copy()

    def __contains__(self, node_id):
        return node_id in self.graph

    def __repr__(self):
        return f"JourneyGraph(nodes={self.number_of_nodes()}, edges={self.number_of_edges()})"


def build_graph(nodes, edges, config=None):
    """Build a validated journey graph.

    Args:
        nodes: Iterable of ``Node`` records or ``{'id', 'label'}`` mappings
        edges: Iterable of ``Edge`` records or mappings with ``source``,
               ``target``, a strength (``pheromoneStrength``, ``pheromone`` or
               ``weight``) and an optional ``label``
        config: ACOConfig supplying the pheromone bounds

    Returns:
        JourneyGraph instance

    Raises:
        InvalidGraphError: on duplicate node ids or edges referencing unknown nodes
    """
    graph = JourneyGraph(config)
    for node in nodes:
        graph.add_node(node)
    for edge in edges:
        graph.add_edge(edge)
    logger.info("Built journey graph with %d nodes and %d edges",
                graph.number_of_nodes(), graph.number_of_edges())
    return graph


def graph_from_data(data, config=None):
    """Build a graph from a ``GraphData`` record or a ``{'nodes', 'edges'}`` mapping."""
    if isinstance(data, Mapping):
        return build_graph(data.get('nodes', ()), data.get('edges', ()), config)
    return build_graph(data.nodes, data.edges, config)


def outgoing_edges(graph, node_id):
    return graph.outgoing_edges(node_id)


def find_edge(graph, source, target):
    return graph.find_edge(source, target)


def set_pheromone(graph, edge, value):
    """Clamp and store ``value`` as the strength of ``edge`` in ``graph``."""
    return graph.set_pheromone(edge.source, edge.target, value)
