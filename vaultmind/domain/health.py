"""Health grade models."""

from typing import Literal

from pydantic import BaseModel

Severity = Literal["critical", "warning", "info"]


class HealthIssue(BaseModel):
    severity: Severity
    message: str
    fix: str


class HealthReport(BaseModel):
    """Overall vault health: a 0-100 score, its letter grade and the issues behind it."""

    grade: str
    score: int
    issues: list[HealthIssue] = []
    summary: str
