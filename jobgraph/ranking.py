"""
Ranking of job nodes by weight.
"""

from typing import Iterable, List

from .database import JOB_LABEL, GraphStore, JobNode

REPORT_HEADER = "----------ALL NODE WEIGHTS----------"


def order_by_weight(nodes: Iterable[JobNode]) -> List[JobNode]:
    """
    Insertion sort, heaviest first.

    Each node goes in front of the first ranked node that is not strictly
    heavier, so among equal weights the later node comes first.
    """
    ranked: List[JobNode] = []
    for node in nodes:
        i = 0
        while i < len(ranked) and node.weight < ranked[i].weight:
            i += 1
        ranked.insert(i, node)
    return ranked


def rank_by_weight(store: GraphStore) -> List[JobNode]:
    """All job nodes, heaviest first. Empty graph gives an empty list."""
    with store.unit_of_work():
        return order_by_weight(store.find_nodes(JOB_LABEL))


def format_report(nodes: Iterable[JobNode]) -> List[str]:
    lines = [REPORT_HEADER]
    lines.extend(f"{node.weight} - {node.job_id}" for node in nodes)
    return lines
