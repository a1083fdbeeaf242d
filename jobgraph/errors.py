"""
Error kinds raised by the graph core.

Lookup misses are recoverable and handled by the event dispatcher;
integrity and store failures propagate to the caller.
"""


class GraphError(Exception):
    """Base class for all job graph errors."""
    pass


class JobNotFound(GraphError):
    """No job node matches the requested composite id."""

    def __init__(self, job_id: str):
        super().__init__(f"There is no job for: {job_id}")
        self.job_id = job_id


class IntegrityViolation(GraphError):
    """The graph would break (or already breaks) one of its invariants."""
    pass


class DuplicateJobError(IntegrityViolation):
    """A job with the same company and title already exists."""

    def __init__(self, job_id: str):
        super().__init__(f"Job already exists: {job_id}")
        self.job_id = job_id


class StoreFailure(GraphError):
    """The storage backend failed; the unit of work was rolled back."""
    pass


class InvalidJobError(GraphError, ValueError):
    """Job input failed validation."""

    def __init__(self, errors):
        super().__init__("; ".join(errors))
        self.errors = list(errors)
