import logging

from .config import ACOConfig

logger = logging.getLogger(__name__)


def compute_update(edges, target, config):
    """
    Compute new pheromone strengths for one navigation event.

    Every edge ending at ``target`` receives the deposit, every other edge
    evaporates. Nothing is mutated; each value depends only on the edge's
    own current strength.

    Args:
        edges: Iterable of Edge records (the full edge set)
        target: Node id the user navigated to, or None for a pure evaporation pass
        config: ACOConfig with deposit, evaporation rate and bounds

    Returns:
        Dict mapping (source, target) to the new clamped strength
    """
    updated = {}
    for edge in edges:
        if target is not None and edge.target == target:
            strength = edge.pheromone + config.pheromone_deposit
        else:
            strength = edge.pheromone * (1 - config.evaporation_rate)
        updated[(edge.source, edge.target)] = config.clamp(strength)
    return updated


class PheromoneManager:
    """Manages pheromone operations on a journey graph."""

    def __init__(self, graph, config=None):
        self.graph = graph
        self.config = config or graph.config or ACOConfig()
        bounds = (self.config.min_pheromone, self.config.max_pheromone)
        graph_bounds = (graph.config.min_pheromone, graph.config.max_pheromone)
        if bounds != graph_bounds:
            raise ValueError(
                f"Pheromone bounds {bounds} differ from the graph's bounds {graph_bounds}"
            )

    def reinforce(self, target):
        """
        Apply a reinforcement + evaporation pass for a navigation to ``target``.

        Args:
            target: Node id the user navigated to

        Returns:
            Dict mapping (source, target) to the new strength
        """
        if not self.graph.has_node(target):
            logger.warning("Navigation target %r is not in the graph; all edges evaporate", target)
        return self._apply(compute_update(self.graph.edges(), target, self.config))

    def evaporate(self):
        """Evaporate pheromone on all edges."""
        return self._apply(compute_update(self.graph.edges(), None, self.config))

    def _apply(self, updated):
        # The whole update is computed before any edge is written
        stored = {}
        for (u, v), strength in updated.items():
            stored[(u, v)] = self.graph.set_pheromone(u, v, strength)
        logger.debug("Updated pheromone on %d edges", len(stored))
        return stored
