import logging

import pandas as pd

from ..core.graph import Edge, GraphData, Node, build_graph

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ['source', 'target', 'weight']

# Home/products/cart/checkout journey used when no data is loaded
SAMPLE_JOURNEY = {
    'nodes': [
        {'id': 'home', 'label': 'Home'},
        {'id': 'products', 'label': 'Products'},
        {'id': 'cart', 'label': 'Cart'},
        {'id': 'checkout', 'label': 'Checkout'}
    ],
    'edges': [
        {'source': 'home', 'target': 'products', 'pheromoneStrength': 0.9},
        {'source': 'products', 'target': 'cart', 'pheromoneStrength': 0.8},
        {'source': 'cart', 'target': 'checkout', 'pheromoneStrength': 0.85},
        {'source': 'home', 'target': 'cart', 'pheromoneStrength': 0.6},
        {'source': 'products', 'target': 'checkout', 'pheromoneStrength': 0.4}
    ]
}


class JourneyDataError(ValueError):
    """Raised when a journey table cannot be turned into graph data."""


def parse_journey_csv(source):
    """
    Parse a ``source,target,weight,label`` table with a header row.

    Args:
        source: Path or file-like object holding the CSV

    Returns:
        List of dicts with keys source, target, weight (float) and label (str or None)
    """
    try:
        frame = pd.read_csv(source, dtype=str, keep_default_na=False, skipinitialspace=True)
    except pd.errors.EmptyDataError as e:
        raise JourneyDataError("Journey data is empty") from e
    except pd.errors.ParserError as e:
        raise JourneyDataError(f"Could not parse journey data: {str(e)}") from e

    frame = frame.fillna('')
    frame.columns = [str(column).strip().lower() for column in frame.columns]
    missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
    if missing:
        raise JourneyDataError(f"Journey data is missing columns: {missing}")
    if 'label' not in frame.columns:
        frame['label'] = ''

    rows = []
    # Header is line 1 of the file
    for line_number, record in enumerate(frame.to_dict('records'), start=2):
        src = record['source'].strip()
        dst = record['target'].strip()
        if not src or not dst:
            raise JourneyDataError(f"Line {line_number}: source and target are required")
        try:
            weight = float(record['weight'].strip())
        except ValueError as e:
            raise JourneyDataError(
                f"Line {line_number}: weight {record['weight']!r} is not a number"
            ) from e
        label = record['label'].strip()
        rows.append({
            'source': src,
            'target': dst,
            'weight': weight,
            'label': label or None
        })

    logger.info("Parsed %d journey transitions", len(rows))
    return rows


def _display_label(node_id):
    return node_id[:1].upper() + node_id[1:]


def convert_to_graph_data(rows):
    """Turn parsed journey rows into GraphData; nodes keep first-appearance order."""
    node_ids = {}
    for row in rows:
        node_ids.setdefault(row['source'], None)
        node_ids.setdefault(row['target'], None)

    nodes = tuple(Node(node_id, _display_label(node_id)) for node_id in node_ids)
    edges = tuple(Edge(row['source'], row['target'], row['weight'], row.get('label')) for row in rows)
    return GraphData(nodes, edges)


def load_journey_graph(source, config=None):
    """Parse a journey CSV and build the validated graph from it."""
    data = convert_to_graph_data(parse_journey_csv(source))
    return build_graph(data.nodes, data.edges, config)
