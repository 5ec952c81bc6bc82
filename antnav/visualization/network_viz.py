import logging

import matplotlib.pyplot as plt
import networkx as nx
from matplotlib.animation import FuncAnimation

logger = logging.getLogger(__name__)


class JourneyVisualizer:
    """Draws the journey graph and the wandering ants from simulator snapshots."""

    def __init__(self, simulator):
        self.simulator = simulator
        self.pos = self._layout(simulator.snapshot().graph)

    @staticmethod
    def _layout(graph_data):
        """Use stored node positions where present, a circular layout otherwise."""
        node_ids = [node.id for node in graph_data.nodes]
        circle = nx.circular_layout(node_ids) if node_ids else {}
        pos = {}
        for node in graph_data.nodes:
            pos[node.id] = tuple(node.position) if node.position is not None else tuple(circle[node.id])
        return pos

    def draw_frame(self, ax=None, title=None):
        """
        Draw the current snapshot.

        Args:
            ax: Matplotlib axes to draw into (a new figure is created if None)
            title: Custom title for the plot

        Returns:
            The matplotlib figure
        """
        if ax is None:
            fig, ax = plt.subplots(figsize=(10, 8))
        else:
            fig = ax.figure
        ax.clear()

        snapshot = self.simulator.snapshot()
        G = nx.DiGraph()
        G.add_nodes_from(node.id for node in snapshot.graph.nodes)
        G.add_edges_from((edge.source, edge.target) for edge in snapshot.graph.edges)

        # Stronger trails are drawn thicker and more opaque
        for edge in snapshot.graph.edges:
            nx.draw_networkx_edges(
                G, self.pos,
                edgelist=[(edge.source, edge.target)],
                width=edge.pheromone * 5,
                alpha=edge.pheromone,
                edge_color='black',
                arrows=True,
                arrowstyle='-|>',
                arrowsize=15,
                node_size=1500,
                ax=ax
            )

        nx.draw_networkx_nodes(
            G, self.pos,
            node_color='white',
            edgecolors='black',
            linewidths=2,
            node_size=1500,
            ax=ax
        )
        nx.draw_networkx_labels(
            G, self.pos,
            labels={node.id: node.label for node in snapshot.graph.nodes},
            font_size=10,
            ax=ax
        )

        if snapshot.ants:
            xs = [self.pos[ant.current_node][0] for ant in snapshot.ants]
            ys = [self.pos[ant.current_node][1] for ant in snapshot.ants]
            ax.scatter(xs, ys, s=60, c='red', zorder=3, label='Ants')

        ax.set_title(title or f'Journey pheromone trails (step {snapshot.iteration})')
        ax.set_axis_off()
        return fig

    def animate(self, frames=100, interval=200):
        """Animate the simulation, advancing it by one step per frame."""
        fig, ax = plt.subplots(figsize=(10, 8))

        def update(frame):
            self.simulator.step()
            self.draw_frame(ax=ax)
            return ax.collections

        logger.info("Animating %d frames", frames)
        return FuncAnimation(fig, update, frames=frames, interval=interval, blit=False, repeat=False)
