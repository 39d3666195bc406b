"""Result models for filter invocations, archives and whole runs."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class Completed(BaseModel):
    """Result of a subprocess execution."""

    returncode: int
    stdout: bytes
    stderr: Optional[bytes] = None


class MemberOutcome(BaseModel):
    """What happened to one matching archive member."""

    name: str
    status: Literal["updated", "unchanged", "failed"]


class ArchiveResult(BaseModel):
    """Outcome of processing one archive."""

    path: str
    changed: bool = False
    failure_count: int = 0
    members: List[MemberOutcome] = Field(default_factory=list)

    def members_with(self, status: str) -> List[str]:
        return [m.name for m in self.members if m.status == status]


class RunResult(BaseModel):
    """Aggregate outcome of one run over a list of archives."""

    archives: List[ArchiveResult] = Field(default_factory=list)

    @property
    def failure_count(self) -> int:
        return sum(a.failure_count for a in self.archives)

    @property
    def changed_count(self) -> int:
        return sum(1 for a in self.archives if a.changed)

    @property
    def success(self) -> bool:
        return self.failure_count == 0


__all__ = ["ArchiveResult", "Completed", "MemberOutcome", "RunResult"]
