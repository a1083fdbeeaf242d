"""
Job ingestion.

Every new job is connected to every job already in the graph, so a
single insert costs O(n) and building a graph of n jobs costs O(n^2).
"""

from typing import Iterable, List

from .database import DEFAULT_NODE_WEIGHT, JOB_LABEL, SIMILAR_TO, GraphStore, JobNode
from .errors import DuplicateJobError, InvalidJobError
from .logger import get_logger
from .schema import JobRecord, compute_job_id, validate_job
from .similarity import relationship_weight


def add_job(store: GraphStore, company: str, job_title: str) -> JobNode:
    """
    Insert a job node and wire it to every existing job.

    The node and all of its relationships are committed together.

    Raises:
        InvalidJobError: company or title is empty
        DuplicateJobError: a job with the same company and title exists
    """
    errors = validate_job({"company": company, "title": job_title})
    if errors:
        raise InvalidJobError(errors)

    logger = get_logger()
    job_id = compute_job_id(company, job_title)

    with store.unit_of_work():
        if store.find_nodes(JOB_LABEL, "job_id", job_id):
            raise DuplicateJobError(job_id)

        existing = store.find_nodes(JOB_LABEL)
        node = store.create_node(
            JOB_LABEL,
            job_id=job_id,
            company=company,
            job_title=job_title,
            weight=DEFAULT_NODE_WEIGHT,
        )
        for other in existing:
            store.create_relationship(
                node, other, SIMILAR_TO, weight=relationship_weight(node, other)
            )

    logger.record_ingest(len(existing))
    logger.debug("Job added", job_id=job_id, relationships=len(existing))
    return node


def add_jobs(store: GraphStore, records: Iterable[JobRecord]) -> List[JobNode]:
    """Insert records in order, one unit of work per job."""
    return [add_job(store, r.company, r.job_title) for r in records]
