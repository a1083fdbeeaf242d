"""
Tests for the relationship weight rule.
"""

from jobgraph.schema import JobRecord
from jobgraph.similarity import (
    COMPANY_RELATIONSHIP_WEIGHT,
    DEFAULT_RELATIONSHIP_WEIGHT,
    JOBTITLE_RELATIONSHIP_WEIGHT,
    relationship_weight,
)


class TestRelationshipWeight:
    """Test weight assignment between two jobs."""

    def test_same_company_different_title(self):
        a = JobRecord("Google", "IT")
        b = JobRecord("Google", "Systems Analyst")
        assert relationship_weight(a, b) == 0.25

    def test_same_title_different_company(self):
        a = JobRecord("Boeing", "IT")
        b = JobRecord("Google", "IT")
        assert relationship_weight(a, b) == 0.8

    def test_nothing_in_common(self):
        a = JobRecord("Boeing", "IT")
        b = JobRecord("Google", "Systems Analyst")
        assert relationship_weight(a, b) == 0.0

    def test_symmetric(self):
        """Weight should not depend on argument order."""
        pairs = [
            (JobRecord("Amazon", "IT"), JobRecord("Amazon", "Warehouse Manager")),
            (JobRecord("Amazon", "IT"), JobRecord("KPMG", "IT")),
            (JobRecord("Imo's", "Baker"), JobRecord("Starbucks", "Barista")),
        ]
        for a, b in pairs:
            assert relationship_weight(a, b) == relationship_weight(b, a)

    def test_company_checked_before_title(self):
        """Identical records fall under the company rule."""
        a = JobRecord("Google", "IT")
        assert relationship_weight(a, a) == COMPANY_RELATIONSHIP_WEIGHT

    def test_constants(self):
        assert DEFAULT_RELATIONSHIP_WEIGHT == 0.0
        assert COMPANY_RELATIONSHIP_WEIGHT == 0.25
        assert JOBTITLE_RELATIONSHIP_WEIGHT == 0.8

    def test_comparison_is_exact(self):
        """Case differences count as different companies and titles."""
        a = JobRecord("google", "it")
        b = JobRecord("Google", "IT")
        assert relationship_weight(a, b) == 0.0
