import sys
import os
import logging
import random
from argparse import ArgumentParser

import matplotlib
matplotlib.use('Agg')

# Add parent directory to path so we can import the antnav package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from antnav.core.config import ACOConfig
from antnav.core.graph import graph_from_data
from antnav.simulation.simulator import ColonySimulator
from antnav.utils.journey_loader import SAMPLE_JOURNEY, load_journey_graph
from antnav.utils.navigation import format_navigation_table
from antnav.visualization.network_viz import JourneyVisualizer

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def main():
    parser = ArgumentParser(description='Simulate ant traffic over a user journey graph')
    parser.add_argument('--csv', type=str, default=None,
                        help='Journey CSV (source,target,weight,label); the sample journey if omitted')
    parser.add_argument('--steps', type=int, default=50, help='Number of simulation ticks')
    parser.add_argument('--navigations', type=int, default=10,
                        help='Number of simulated user navigation events')
    parser.add_argument('--ants', type=int, default=5, help='Colony size')
    parser.add_argument('--seed', type=int, default=42, help='Random seed for reproducibility')
    parser.add_argument('--output', type=str, default='journey_pheromone.png',
                        help='Where to save the final frame')
    args = parser.parse_args()

    config = ACOConfig({'num_ants': args.ants})
    if args.csv:
        graph = load_journey_graph(args.csv, config)
    else:
        graph = graph_from_data(SAMPLE_JOURNEY, config)

    simulator = ColonySimulator(graph, config, seed=args.seed)

    print("Running ant simulation...")
    simulator.run(args.steps)

    # Replay user navigations toward the destinations the ants favour
    rng = random.Random(args.seed)
    distribution = simulator.traffic_distribution()
    targets = list(distribution)
    weights = [distribution[t] or 0.01 for t in targets]
    for _ in range(args.navigations):
        simulator.reinforce(rng.choices(targets, weights=weights)[0])

    print("\nTraffic distribution (share of ant arrivals):")
    for node_id, share in distribution.items():
        print(f"  {node_id:>12}: {share:6.1%}")

    print("\nAdaptive navigation:")
    print(format_navigation_table(simulator.ranked_links()))

    visualizer = JourneyVisualizer(simulator)
    fig = visualizer.draw_frame()
    fig.savefig(args.output)
    logger.info("Saved final frame to %s", args.output)


if __name__ == "__main__":
    main()
