"""
Maintenance: bulk removal of relationships and job nodes.

Relationships go first; the store refuses to delete a node that still
has relationships attached.
"""

from typing import Optional, Tuple

from .database import JOB_LABEL, GraphStore
from .logger import get_logger


def reset_graph(store: GraphStore, job_title: Optional[str]) -> Tuple[int, int]:
    """
    Delete every relationship and the job nodes matching `job_title`.

    Args:
        store: Graph store
        job_title: Exact title of the nodes to delete; None deletes all job nodes

    Returns:
        Tuple of (relationships_deleted, nodes_deleted)
    """
    logger = get_logger()

    try:
        with store.unit_of_work():
            relationships = store.all_relationships()
            for rel in relationships:
                store.delete_relationship(rel)

            if job_title is None:
                nodes = store.find_nodes(JOB_LABEL)
            else:
                nodes = store.find_nodes(JOB_LABEL, "job_title", job_title)
            for node in nodes:
                store.delete_node(node)
    except Exception as e:
        logger.error(f"Reset failed: {e}", job_title=job_title)
        raise

    logger.record_cleanup(len(relationships), len(nodes))
    logger.info(
        f"Reset complete: {len(relationships)} relationships, {len(nodes)} nodes removed",
        job_title=job_title,
    )
    return (len(relationships), len(nodes))
