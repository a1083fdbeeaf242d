"""
Job catalogs: the bundled demo catalog and JSON catalog files.

JSON catalogs are either a list of postings or an object with a "jobs"
list; each posting needs "company" and "title":

    {"jobs": [{"company": "Boeing", "title": "IT"}]}
"""

import json
from pathlib import Path
from typing import List, Tuple

from .database import GraphStore, JobNode
from .errors import InvalidJobError
from .events import click
from .ingest import add_jobs
from .ranking import rank_by_weight
from .schema import JobRecord, record_from_dict, validate_job

DEMO_COMPANIES = {
    "Boeing": [
        "Business Analyst", "IT", "Electrical Engineer", "Mechanical Engineer",
        "Aerospace Engineer", "Chief Electrical Engineer", "Computer Engineer",
    ],
    "Google": [
        "Systems Analyst", "Software Engineer", "IT", "Database Manager",
        "Senior Developer", "Web Developer",
    ],
    "Microsoft": [
        "Software Engineer", "IT", "Database Manager", "Business Administrator",
        "Senior Developer", "Systems Analyst",
    ],
    "Amazon": [
        "Business Administrator", "Systems Analyst", "Software Engineer", "IT",
        "Database Manager", "Warehouse Associate", "Warehouse Manager",
    ],
    "Texas Instruments": ["Computer Engineer"],
    "KPMG": ["IT Project Manager"],
    "Equifax": ["Information Security Officer", "Systems Analyst", "Business Analyst"],
    "Monsanto": [
        "Data Analyst", "Chemical Engineer", "Botanist", "Weed Control Scientist",
        "Sales Representative",
    ],
    "Dot Foods": ["Database Manager", "Warehouse Associate", "Warehouse Manager", "Business Analyst"],
    "Panera Bread": [
        "Store Manager", "Database Manager", "Baker", "Bakery Associate",
        "Shift Supervisor", "Warehouse Associate", "Truck Driver", "Sales Representative",
    ],
    "Imo's": ["Delivery Driver", "Store Manager", "Baker", "Truck Driver"],
    "Starbucks": [
        "Barista", "Shift Supervisor", "Store Manager", "Sales Representative",
        "Truck Driver", "Warehouse Manager",
    ],
}

DEMO_CATALOG: List[JobRecord] = [
    JobRecord(company, title)
    for company, titles in DEMO_COMPANIES.items()
    for title in titles
]

DEMO_EVENTS: List[Tuple[str, str, str]] = [
    ("Starbucks", "Barista", "click"),
    ("Starbucks", "Shift Supervisor", "like"),
    ("Starbucks", "Store Manager", "like"),
    ("Equifax", "Systems Analyst", "like"),
    ("Equifax", "Business Analyst", "like"),
    ("Amazon", "Systems Analyst", "like"),
    ("Imo's", "Truck Driver", "dislike"),
    ("Monsanto", "Chemical Engineer", "dislike"),
]


def load_catalog(path: Path) -> List[JobRecord]:
    """
    Read job records from a JSON catalog file.

    Raises:
        InvalidJobError: a posting is malformed (all problems are reported)
    """
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    postings = data.get("jobs", []) if isinstance(data, dict) else data
    if not isinstance(postings, list):
        raise InvalidJobError(["Catalog must be a list of postings or an object with a 'jobs' list"])

    errors: List[str] = []
    records: List[JobRecord] = []
    for i, posting in enumerate(postings):
        if not isinstance(posting, dict):
            errors.append(f"Posting {i}: must be an object")
            continue
        problems = validate_job(posting)
        if problems:
            errors.extend(f"Posting {i}: {p}" for p in problems)
            continue
        records.append(record_from_dict(posting))

    if errors:
        raise InvalidJobError(errors)
    return records


def seed_catalog(store: GraphStore, records=DEMO_CATALOG) -> List[JobNode]:
    return add_jobs(store, records)


def run_demo(store: GraphStore) -> List[JobNode]:
    """Seed the demo catalog, replay the demo events and rank the result."""
    seed_catalog(store)
    for company, title, kind in DEMO_EVENTS:
        click(store, company, title, kind)
    return rank_by_weight(store)
