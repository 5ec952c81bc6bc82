import logging
import random

import pytest
from antnav.core.config import ACOConfig
from antnav.core.graph import Edge, Node, build_graph, graph_from_data
from antnav.core.pheromone import PheromoneManager, compute_update
from antnav.utils.journey_loader import SAMPLE_JOURNEY


@pytest.fixture
def journey():
    return graph_from_data(SAMPLE_JOURNEY)


def test_reinforce_cart_scenario(journey):
    """One navigation to cart reinforces every edge into cart and evaporates the rest."""
    manager = PheromoneManager(journey)
    manager.reinforce('cart')

    assert journey.get_pheromone('home', 'cart') == 1.0
    assert journey.get_pheromone('home', 'products') == pytest.approx(0.81)
    assert journey.get_pheromone('products', 'cart') == pytest.approx(0.72)
    assert journey.get_pheromone('cart', 'checkout') == pytest.approx(0.765)
    assert journey.get_pheromone('products', 'checkout') == pytest.approx(0.36)


def test_compute_update_is_pure(journey):
    before = journey.snapshot()
    updated = compute_update(journey.edges(), 'checkout', ACOConfig())
    assert journey.snapshot() == before
    assert updated[('cart', 'checkout')] == 1.0
    assert updated[('products', 'checkout')] == pytest.approx(0.9)
    assert updated[('home', 'products')] == pytest.approx(0.81)
    assert len(updated) == journey.number_of_edges()


def test_reinforcement_is_bounded():
    graph = build_graph([Node('a', 'A'), Node('b', 'B')], [Edge('a', 'b', 0.8)])
    PheromoneManager(graph).reinforce('b')
    # 0.8 + 0.5 clamps to 1.0, not 1.3
    assert graph.get_pheromone('a', 'b') == 1.0


def test_deposit_below_ceiling():
    graph = build_graph([Node('a', 'A'), Node('b', 'B')], [Edge('a', 'b', 0.2)])
    PheromoneManager(graph).reinforce('b')
    assert graph.get_pheromone('a', 'b') == pytest.approx(0.7)


def test_evaporation_decays_to_minimum():
    """An edge that is never reinforced decays strictly until it reaches the floor."""
    graph = build_graph(
        [Node('a', 'A'), Node('b', 'B'), Node('c', 'C'), Node('d', 'D')],
        [Edge('a', 'b', 0.6), Edge('c', 'd', 0.5)],
    )
    manager = PheromoneManager(graph)

    manager.reinforce('d')
    assert graph.get_pheromone('a', 'b') == pytest.approx(0.54)
    manager.reinforce('d')
    assert graph.get_pheromone('a', 'b') == pytest.approx(0.486)

    previous = graph.get_pheromone('a', 'b')
    for _ in range(40):
        manager.reinforce('d')
        current = graph.get_pheromone('a', 'b')
        if previous > 0.1:
            assert current < previous
        else:
            assert current == 0.1
        previous = current

    assert graph.get_pheromone('a', 'b') == 0.1
    assert graph.get_pheromone('c', 'd') == 1.0


def test_evaporate_touches_every_edge(journey):
    PheromoneManager(journey).evaporate()
    assert journey.get_pheromone('home', 'products') == pytest.approx(0.81)
    assert journey.get_pheromone('home', 'cart') == pytest.approx(0.54)
    assert journey.get_pheromone('products', 'checkout') == pytest.approx(0.36)


def test_unknown_target_evaporates_and_warns(journey, caplog):
    with caplog.at_level(logging.WARNING, logger='antnav.core.pheromone'):
        PheromoneManager(journey).reinforce('faq')
    assert 'faq' in caplog.text
    assert journey.get_pheromone('home', 'cart') == pytest.approx(0.54)


def test_strengths_stay_within_bounds(journey):
    """Arbitrary reinforcement and evaporation sequences never leave [0.1, 1.0]."""
    manager = PheromoneManager(journey)
    rng = random.Random(7)
    targets = journey.node_ids() + [None]
    for _ in range(500):
        target = rng.choice(targets)
        if target is None:
            manager.evaporate()
        else:
            manager.reinforce(target)
        for edge in journey.edges():
            assert 0.1 <= edge.pheromone <= 1.0


def test_custom_rates():
    config = ACOConfig({'evaporation_rate': 0.5, 'pheromone_deposit': 0.25})
    graph = build_graph(
        [Node('a', 'A'), Node('b', 'B'), Node('c', 'C')],
        [Edge('a', 'b', 0.4), Edge('a', 'c', 0.4)],
        config,
    )
    PheromoneManager(graph).reinforce('c')
    assert graph.get_pheromone('a', 'b') == pytest.approx(0.2)
    assert graph.get_pheromone('a', 'c') == pytest.approx(0.65)


def test_bounds_must_match_graph(journey):
    """A manager clamping with other bounds than the graph is refused."""
    with pytest.raises(ValueError, match="bounds"):
        PheromoneManager(journey, ACOConfig({'max_pheromone': 2.0}))


def test_rates_may_differ_from_graph_config(journey):
    manager = PheromoneManager(journey, ACOConfig({'evaporation_rate': 0.5}))
    manager.reinforce('cart')
    assert journey.get_pheromone('home', 'products') == pytest.approx(0.45)


def test_returned_strengths_are_stored_values(journey):
    updated = PheromoneManager(journey).reinforce('cart')
    assert updated == {(e.source, e.target): e.pheromone for e in journey.edges()}
    updated = PheromoneManager(journey).evaporate()
    assert updated == {(e.source, e.target): e.pheromone for e in journey.edges()}
