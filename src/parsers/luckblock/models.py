"""Pydantic models for the LuckBlock AI audit job API."""

from enum import Enum

from pydantic import BaseModel


class AuditStatus(str, Enum):
    PENDING = "pending"
    ENDED = "ended"
    ERRORED = "errored"
    UNKNOWN = "unknown"


# Statuses that stop polling with an error event
FAILED_STATUSES = frozenset({AuditStatus.ERRORED.value, AuditStatus.UNKNOWN.value})


class AuditStatusResponse(BaseModel):
    """Job status. Intermediate progress values besides ``pending`` are passed through as-is."""

    status: str = AuditStatus.UNKNOWN.value
    error: str | None = None

    model_config = {"extra": "ignore"}


class AuditIssue(BaseModel):
    issueExplanation: str = ""
    issueCodeDiffUrl: str = ""

    model_config = {"extra": "ignore"}


class AuditReport(BaseModel):
    issues: list[AuditIssue] = []

    model_config = {"extra": "ignore"}
