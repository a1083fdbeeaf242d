"""
Relationship weight between two distinct jobs.

Weights read as the share of relevance that flows between two jobs:
a shared company links them at 25%, a shared title at 80%.
"""

DEFAULT_RELATIONSHIP_WEIGHT = 0.0
COMPANY_RELATIONSHIP_WEIGHT = 0.25
JOBTITLE_RELATIONSHIP_WEIGHT = 0.8


def relationship_weight(a, b) -> float:
    """
    Weight of the edge between jobs `a` and `b`.

    Both arguments need `company` and `job_title` attributes. Company is
    checked first; company and title cannot both match for distinct jobs.
    """
    if a.company == b.company:
        return COMPANY_RELATIONSHIP_WEIGHT
    if a.job_title == b.job_title:
        return JOBTITLE_RELATIONSHIP_WEIGHT
    return DEFAULT_RELATIONSHIP_WEIGHT
