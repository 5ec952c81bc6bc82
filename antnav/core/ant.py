import logging
import random
from dataclasses import dataclass
from typing import Tuple

from .config import ACOConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AntSnapshot:
    id: str
    current_node: str
    path: Tuple[str, ...]
    speed: float


class AntAgent:
    """A simulated walker positioned at one node of the journey graph."""

    def __init__(self, ant_id, start_node, speed):
        self.id = ant_id
        self.current_node = start_node
        self.path = [start_node]  # Append-only
        self.speed = speed  # Stored only; one tick is always one hop

    def move_to(self, node_id):
        self.current_node = node_id
        self.path.append(node_id)

    def snapshot(self):
        return AntSnapshot(self.id, self.current_node, tuple(self.path), self.speed)

    def __repr__(self):
        return f"AntAgent(id={self.id!r}, current_node={self.current_node!r}, hops={len(self.path) - 1})"


class TransitionSelector:
    """Roulette-wheel choice of the next edge, weighted by pheromone strength."""

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else random.Random()

    def select_edge(self, candidates):
        """
        Pick one of ``candidates`` with probability proportional to its strength.

        Args:
            candidates: Non-empty sequence of Edge records in their defined order

        Returns:
            The chosen Edge
        """
        total = sum(edge.pheromone for edge in candidates)
        if total <= 0:
            # No usable weights, fall back to the first candidate
            return candidates[0]

        r = self.rng.random() * total
        for edge in candidates:
            r -= edge.pheromone
            if r <= 0:
                return edge
        # Float round-off can leave r marginally positive
        return candidates[-1]

    def advance(self, graph, agent):
        """
        Move ``agent`` one hop along a pheromone-weighted outgoing edge.

        An agent at a node with no outgoing edges is returned unchanged.
        """
        candidates = graph.outgoing_edges(agent.current_node)
        if not candidates:
            logger.debug("%s is at dead end %r", agent.id, agent.current_node)
            return agent
        chosen = self.select_edge(candidates)
        agent.move_to(chosen.target)
        return agent


def advance(graph, agent, rng=None):
    return TransitionSelector(rng).advance(graph, agent)


def create_colony(graph, config=None, start_node=None):
    """
    Create the configured number of ants, all starting at the same node.

    Args:
        graph: JourneyGraph the ants walk on
        config: ACOConfig providing num_ants and ant_speed
        start_node: Node id to start from (default: first node of the graph)

    Returns:
        List of AntAgent
    """
    config = config or graph.config or ACOConfig()
    if config.num_ants == 0:
        return []

    node_ids = graph.node_ids()
    if start_node is None:
        if not node_ids:
            raise ValueError("Cannot place ants on an empty graph")
        start_node = node_ids[0]
    elif not graph.has_node(start_node):
        raise ValueError(f"Start node {start_node!r} is not in the graph")

    colony = [AntAgent(f"ant-{i}", start_node, config.ant_speed) for i in range(config.num_ants)]
    logger.info("Created colony of %d ants at %r", len(colony), start_node)
    return colony
