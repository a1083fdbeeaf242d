"""
Interaction events.

Maps a client interaction on a job to a weight increment and runs the
propagation from that job's node.
"""

from enum import Enum
from typing import Optional

from .database import JOB_LABEL, GraphStore, JobNode
from .errors import IntegrityViolation, JobNotFound
from .logger import get_logger
from .propagation import propagate
from .schema import compute_job_id

DEFAULT_CLICK_INCREMENT = 1
DEFAULT_LIKE_INCREMENT = 10
DEFAULT_DISLIKE_DECREMENT = -10


class EventKind(Enum):
    CLICK = "click"
    LIKE = "like"
    DISLIKE = "dislike"

    @property
    def increment(self) -> int:
        return _INCREMENTS[self]


_INCREMENTS = {
    EventKind.CLICK: DEFAULT_CLICK_INCREMENT,
    EventKind.LIKE: DEFAULT_LIKE_INCREMENT,
    EventKind.DISLIKE: DEFAULT_DISLIKE_DECREMENT,
}


def find_job(store: GraphStore, company: str, job_title: str) -> JobNode:
    """
    The unique node for a company and title.

    Raises:
        JobNotFound: no node has this composite id
        IntegrityViolation: more than one node has this composite id
    """
    job_id = compute_job_id(company, job_title)
    with store.unit_of_work():
        nodes = store.find_nodes(JOB_LABEL, "job_id", job_id)
    if not nodes:
        raise JobNotFound(job_id)
    if len(nodes) > 1:
        raise IntegrityViolation(f"{len(nodes)} nodes share the id {job_id!r}")
    return nodes[0]


def click(store: GraphStore, company: str, job_title: str, kind="click") -> Optional[JobNode]:
    """
    Apply one interaction to a job.

    Args:
        store: Graph store
        company: Company of the job
        job_title: Title of the job
        kind: EventKind or its value ("click", "like", "dislike")

    Returns:
        The updated node, or None when no job matches (nothing is changed)

    Raises:
        ValueError: unknown event kind
    """
    kind = EventKind(kind)
    logger = get_logger()

    with store.unit_of_work():
        try:
            node = find_job(store, company, job_title)
        except JobNotFound as e:
            logger.warning(str(e), event=kind.value)
            logger.record_lookup_miss()
            return None
        propagate(store, node, kind.increment)

    logger.record_event(kind.value)
    logger.info("Event applied", job_id=node.job_id, event=kind.value, weight=node.weight)
    return node
