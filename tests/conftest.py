"""
Pytest configuration and shared fixtures.
"""

import os

# Keep log files out of the working tree; set before jobgraph reads settings.
os.environ.setdefault("JOBGRAPH_LOG_TO_FILE", "false")

import pytest

from jobgraph.database import GraphStore
from jobgraph.ingest import add_job
from jobgraph.logger import get_logger, reset_logger


@pytest.fixture(autouse=True)
def quiet_logger():
    """Fresh global logger with no console or file output."""
    reset_logger()
    logger = get_logger(enable_console=False, enable_file=False)
    yield logger
    reset_logger()


@pytest.fixture
def store():
    """Empty in-memory graph store."""
    s = GraphStore("sqlite://")
    yield s
    s.close()


@pytest.fixture
def scenario(store):
    """Boeing/IT, Google/IT and Google/Systems Analyst, inserted in that order."""
    return {
        "boeing_it": add_job(store, "Boeing", "IT"),
        "google_it": add_job(store, "Google", "IT"),
        "google_sa": add_job(store, "Google", "Systems Analyst"),
    }


def relationship_between(store, a, b):
    """The relationship joining nodes a and b, or None."""
    for rel in store.relationships_of(a):
        if store.other_endpoint(rel, a) is b:
            return rel
    return None


@pytest.fixture
def edge(store):
    """Lookup for the relationship between two nodes of `store`."""
    return lambda a, b: relationship_between(store, a, b)
