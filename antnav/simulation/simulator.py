import logging
import random
from collections import Counter
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..core.ant import AntSnapshot, TransitionSelector, create_colony
from ..core.config import ACOConfig
from ..core.graph import GraphData
from ..core.pheromone import PheromoneManager
from ..utils.navigation import rank_links

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationSnapshot:
    iteration: int
    graph: GraphData
    ants: Tuple[AntSnapshot, ...]


def tick(graph, agents, selector):
    """Advance every agent by at most one hop. Agents never see each other."""
    return [selector.advance(graph, agent) for agent in agents]


class ColonySimulator:
    """Main simulation engine: ants wandering plus reinforcement from navigation events."""

    def __init__(self, graph, config=None, seed=None, start_node=None):
        self.graph = graph
        self.config = config or graph.config or ACOConfig()
        self.pheromone_manager = PheromoneManager(self.graph, self.config)
        self.selector = TransitionSelector(random.Random(seed))
        self.ants = create_colony(self.graph, self.config, start_node)
        self.iteration = 0
        self._visits = Counter()
        self.metrics = {
            'moves_per_step': [],
            'dead_ends_per_step': [],
            'mean_pheromone': [],
            'reinforced_targets': []
        }

    def step(self):
        """Advance all ants by one tick.

        Returns:
            Tuple of AntSnapshot after the move
        """
        before = [len(ant.path) for ant in self.ants]
        tick(self.graph, self.ants, self.selector)
        self.iteration += 1

        moves = 0
        for ant, length in zip(self.ants, before):
            if len(ant.path) > length:
                moves += 1
                self._visits[ant.current_node] += 1
        dead_ends = len(self.ants) - moves

        self.metrics['moves_per_step'].append(moves)
        self.metrics['dead_ends_per_step'].append(dead_ends)
        logger.debug("Step %d: %d ants moved, %d at dead ends", self.iteration, moves, dead_ends)
        return self.ant_snapshots()

    def run(self, num_steps=100):
        """Run ``num_steps`` ticks and return the final snapshot."""
        for _ in range(num_steps):
            self.step()
        return self.snapshot()

    def reinforce(self, target):
        """Record a real user navigation to ``target`` and update pheromone."""
        updated = self.pheromone_manager.reinforce(target)
        self.metrics['reinforced_targets'].append(target)
        self._record_mean(updated)
        logger.info("Reinforced navigation to %r", target)
        return updated

    def evaporate(self):
        """Apply an ambient evaporation pass without reinforcing anything."""
        updated = self.pheromone_manager.evaporate()
        self._record_mean(updated)
        return updated

    def _record_mean(self, updated):
        # One entry per pheromone pass, reinforcement or evaporation
        self.metrics['mean_pheromone'].append(float(np.mean(list(updated.values()))) if updated else 0.0)

    def ant_snapshots(self):
        return tuple(ant.snapshot() for ant in self.ants)

    def snapshot(self):
        """Read-only view of the graph and ant positions for rendering."""
        return SimulationSnapshot(self.iteration, self.graph.snapshot(), self.ant_snapshots())

    def ranked_links(self, source=None):
        """Navigation options ordered by pheromone strength."""
        return rank_links(self.graph.edges(), source)

    def visit_counts(self):
        """How many times ants arrived at each node (every node listed)."""
        return {node_id: self._visits.get(node_id, 0) for node_id in self.graph.node_ids()}

    def traffic_distribution(self):
        """Share of all ant arrivals per node; zeros before any ant has moved."""
        counts = self.visit_counts()
        total = sum(counts.values())
        if total == 0:
            return {node_id: 0.0 for node_id in counts}
        return {node_id: count / total for node_id, count in counts.items()}
