from dataclasses import dataclass

from tabulate import tabulate

EMPHASIS_THRESHOLD = 0.7


@dataclass(frozen=True)
class NavLink:
    source: str
    target: str
    text: str
    strength: float
    emphasized: bool
    opacity: float


def rank_links(edges, source=None):
    """
    Order navigation options by pheromone strength, strongest first.

    Args:
        edges: Iterable of Edge records
        source: If given, only links leaving this node are returned

    Returns:
        List of NavLink; ties keep the edge order
    """
    links = []
    for edge in edges:
        if source is not None and edge.source != source:
            continue
        text = edge.label or f"{edge.source} → {edge.target}"
        links.append(NavLink(
            source=edge.source,
            target=edge.target,
            text=text,
            strength=edge.pheromone,
            emphasized=edge.pheromone > EMPHASIS_THRESHOLD,
            opacity=0.5 + edge.pheromone * 0.5
        ))
    return sorted(links, key=lambda link: link.strength, reverse=True)


def format_navigation_table(links, tablefmt="grid"):
    """Render ranked links as a plain-text table."""
    headers = ["Rank", "Link", "Target", "Strength", "Emphasis"]
    rows = [
        [i + 1, link.text, link.target, f"{link.strength:.3f}", "bold" if link.emphasized else ""]
        for i, link in enumerate(links)
    ]
    return tabulate(rows, headers=headers, tablefmt=tablefmt)
