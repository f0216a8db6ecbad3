"""Pydantic models for memos and the links between them."""

from typing import Protocol

from pydantic import BaseModel, Field


class MemoLike(Protocol):
    """Anything with an id and raw content can be analyzed."""

    id: str
    content: str


class MemoEntry(BaseModel):
    """A single memo as supplied by the note store."""

    id: str
    content: str
    category: str | None = None
    timestamp: str | None = None  # ISO 8601 string, kept as stored
    source: str | None = None  # File the memo was read from (loader only)


class MemoLink(BaseModel):
    """A [[link]] found inside a memo."""

    source_id: str  # Memo containing the link
    target_id: str  # Memo being referenced
    text: str  # Display text (target_id when none given)
    line: int | None = None  # Positional hint, not populated


class Backlink(BaseModel):
    """A memo that references the queried memo, with surrounding text."""

    memo_id: str
    preview: str
    text: str


class HealthSummary(BaseModel):
    """Counts and score for a health report."""

    total_memos: int = 0
    total_links: int = 0
    orphans_count: int = 0
    broken_links_count: int = 0
    health_score: int = 100


class HealthReport(BaseModel):
    """Integrity findings for a memo collection."""

    orphans: list[MemoEntry] = Field(default_factory=list)
    broken_links: list[MemoLink] = Field(default_factory=list)
    summary: HealthSummary = Field(default_factory=HealthSummary)
