"""Shared test fixtures for memolog test suite.

Design:
- sample_memos: small in-memory corpus with links, an orphan and a broken link
- memo_dir: the same corpus written to disk in memolog file format
- runner / cli_invoke: CliRunner with an isolated memo root
"""

import logging
from pathlib import Path
from typing import Generator

import pytest
from click.testing import CliRunner

from memolog.cli import cli
from memolog.models import MemoEntry


# ─────────────────────────────────────────────────────────────────────────────
# Environment Isolation
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep user configuration and CLI log handlers out of tests."""
    monkeypatch.delenv("MEMOLOG_ROOT", raising=False)
    monkeypatch.delenv("MEMOLOG_CONTEXT_LENGTH", raising=False)
    monkeypatch.delenv("MEMOLOG_LOG_LEVEL", raising=False)

    yield

    # CliRunner swaps stderr per invocation; drop handlers bound to old streams
    package_logger = logging.getLogger("memolog")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


# ─────────────────────────────────────────────────────────────────────────────
# Memo Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_memos() -> list[MemoEntry]:
    """Five memos:

    - memo-1 links to memo-2
    - memo-2 links to memo-1 (with display text) and memo-3
    - memo-3 has no links but is referenced
    - memo-4 is orphaned
    - memo-5 links to a memo that does not exist
    """
    return [
        MemoEntry(id="memo-1", category="work", content="これは[[memo-2]]へのリンクです。"),
        MemoEntry(id="memo-2", category="work", content="[[memo-1|メモ1]]と[[memo-3]]を参照。"),
        MemoEntry(id="memo-3", category="hobby", content="リンクなしのメモ。"),
        MemoEntry(id="memo-4", category="hobby", content="孤立したメモ。"),
        MemoEntry(id="memo-5", category="work", content="壊れたリンク[[nonexistent]]を含む。"),
    ]


def memo_header(memo_id: str, timestamp: str, category: str | None = None, extra: str = "") -> str:
    """Build a memolog header comment line."""
    category_part = f', category: "{category}"' if category else ""
    return f"<!-- memo-id: {memo_id}, timestamp: {timestamp}{category_part}{extra} -->"


@pytest.fixture
def memo_dir(tmp_path: Path, sample_memos: list[MemoEntry]) -> Path:
    """Write sample_memos to disk, split across two memolog files.

    Creates:
    - memos/work.md (memo-1, memo-2, memo-5)
    - memos/hobby.md (memo-3, memo-4)
    """
    root = tmp_path / "memos"
    root.mkdir()

    by_file: dict[str, list[MemoEntry]] = {}
    for memo in sample_memos:
        by_file.setdefault(f"{memo.category}.md", []).append(memo)

    for filename, memos in by_file.items():
        blocks = [
            f"{memo_header(m.id, '2025-01-20T10:00:00Z', m.category)}\n"
            f"## 2025-01-20 10:00\n{m.content}\n"
            for m in memos
        ]
        (root / filename).write_text("\n".join(blocks), encoding="utf-8")

    return root


# ─────────────────────────────────────────────────────────────────────────────
# CLI Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def runner() -> CliRunner:
    """CLI runner with isolated environment."""
    return CliRunner()


@pytest.fixture
def cli_invoke(runner: CliRunner, memo_dir: Path):
    """Invoke the CLI against memo_dir.

    Usage:
        def test_graph(cli_invoke):
            result = cli_invoke(["graph", "--json"])
            assert result.exit_code == 0
    """

    def _invoke(args: list[str], input: str | None = None):
        return runner.invoke(cli, ["--root", str(memo_dir), *args], input=input)

    return _invoke
