from typing import Any, Dict, List, NamedTuple

REQUIRED_STR_FIELDS = ["company", "title"]

ID_SEPARATOR = ": "


class JobRecord(NamedTuple):
    company: str
    job_title: str


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def compute_job_id(company: str, job_title: str) -> str:
    """Composite key of a job node. Kept verbatim, no normalization."""
    return f"{company}{ID_SEPARATOR}{job_title}"


def validate_job(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    errors: List[str] = []

    for f in REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    return errors


def record_from_dict(data: Dict[str, Any]) -> JobRecord:
    return JobRecord(company=data["company"], job_title=data["title"])
