"""
One-hop weight propagation.

A signed increment lands fully on the seed node and, scaled by the
relationship weight, on each directly connected node. Neighbours of
neighbours are not touched.
"""

from .database import GraphStore, JobNode
from .logger import get_logger


def propagate(store: GraphStore, node: JobNode, increment: float) -> int:
    """
    Add `increment` to `node` and `increment * w` to each neighbour.

    Zero-weight relationships are skipped. Returns the number of
    neighbours updated.
    """
    updated = 0
    with store.unit_of_work():
        node.weight += increment
        for rel in store.relationships_of(node):
            if rel.weight == 0:
                continue
            other = store.other_endpoint(rel, node)
            other.weight += increment * rel.weight
            updated += 1

    get_logger().record_propagation()
    return updated
