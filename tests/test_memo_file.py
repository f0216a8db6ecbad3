"""Tests for memolog.parser.memo_file: reading memos from disk."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import memo_header
from memolog.parser.memo_file import ParseError, load_memos, parse_memo_file, parse_memo_text

MEMOLOG_TEXT = "\n".join(
    [
        memo_header("memo-1", "2025-01-20T10:00:00Z", "work"),
        "## 2025-01-20 10:00",
        "See [[memo-3]].",
        "",
        memo_header(
            "memo-2",
            "2025-01-21T14:30:00Z",
            "work",
            extra=', deleted: "true", trashedAt: "2025-01-22T00:00:00Z"',
        ),
        "## 2025-01-21 14:30",
        "Trashed memo.",
        "",
        memo_header("memo-3", "2025-01-22T18:00:00Z"),
        "## 2025-01-22 18:00",
        "Body with attachment.",
        "",
        "添付: [[image.png]]",
        "",
    ]
)


# ─────────────────────────────────────────────────────────────────────────────
# memolog Format
# ─────────────────────────────────────────────────────────────────────────────


class TestParseMemoText:
    """Tests for parse_memo_text."""

    def test_memos_in_file_order(self):
        memos = parse_memo_text(MEMOLOG_TEXT)
        assert [m.id for m in memos] == ["memo-1", "memo-3"]

    def test_header_fields(self):
        memo = parse_memo_text(MEMOLOG_TEXT)[0]

        assert memo.timestamp == "2025-01-20T10:00:00Z"
        assert memo.category == "work"
        assert memo.source is None

    def test_content_drops_header(self):
        memo = parse_memo_text(MEMOLOG_TEXT)[0]
        assert memo.content == "## 2025-01-20 10:00\nSee [[memo-3]]."

    def test_attachment_line_removed(self):
        memo = parse_memo_text(MEMOLOG_TEXT)[1]

        assert memo.content == "## 2025-01-22 18:00\nBody with attachment."
        assert memo.category is None

    def test_trashed_memos_skipped(self):
        assert "memo-2" not in [m.id for m in parse_memo_text(MEMOLOG_TEXT)]

    def test_text_before_first_header_ignored(self):
        text = "# Daily memos\n\n" + memo_header("m1", "2025-01-01T00:00:00Z") + "\nhello\n"

        memos = parse_memo_text(text)

        assert [(m.id, m.content) for m in memos] == [("m1", "hello")]

    def test_unquoted_category_kept_as_is(self):
        text = "<!-- memo-id: m1, timestamp: 2025-01-01T00:00:00Z, category: misc -->\nhi\n"
        assert parse_memo_text(text)[0].category == "misc"

    def test_source_recorded(self):
        memos = parse_memo_text(MEMOLOG_TEXT, source="memos/work.md")
        assert all(m.source == "memos/work.md" for m in memos)

    def test_empty_text(self):
        assert parse_memo_text("") == []


# ─────────────────────────────────────────────────────────────────────────────
# Files
# ─────────────────────────────────────────────────────────────────────────────


class TestParseMemoFile:
    """Tests for parse_memo_file."""

    def test_memolog_file(self, tmp_path: Path):
        path = tmp_path / "work.md"
        path.write_text(MEMOLOG_TEXT, encoding="utf-8")

        memos = parse_memo_file(path)

        assert [m.id for m in memos] == ["memo-1", "memo-3"]
        assert memos[0].source == str(path)

    def test_frontmatter_note(self, tmp_path: Path):
        path = tmp_path / "note.md"
        path.write_text(
            "---\nid: note-a\ncategory: work\n---\nLinks to [[note-b]].\n",
            encoding="utf-8",
        )

        memos = parse_memo_file(path)

        assert len(memos) == 1
        assert memos[0].id == "note-a"
        assert memos[0].category == "work"
        assert memos[0].content == "Links to [[note-b]]."

    def test_numeric_frontmatter_id_is_stringified(self, tmp_path: Path):
        path = tmp_path / "note.md"
        path.write_text("---\nid: 42\n---\nbody\n", encoding="utf-8")

        assert parse_memo_file(path)[0].id == "42"

    def test_plain_file_uses_stem_as_id(self, tmp_path: Path):
        path = tmp_path / "plain-note.md"
        path.write_text("Just text, see [[other]].\n", encoding="utf-8")

        memos = parse_memo_file(path)

        assert memos[0].id == "plain-note"
        assert memos[0].content == "Just text, see [[other]]."

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ParseError, match="does not exist"):
            parse_memo_file(tmp_path / "missing.md")

    def test_directory_is_not_a_file(self, tmp_path: Path):
        with pytest.raises(ParseError, match="not a file"):
            parse_memo_file(tmp_path)

    def test_undecodable_file(self, tmp_path: Path):
        path = tmp_path / "binary.md"
        path.write_bytes(b"\xff\xfe\xfa not utf-8")

        with pytest.raises(ParseError) as exc_info:
            parse_memo_file(path)

        assert exc_info.value.path == path


class TestLoadMemos:
    """Tests for load_memos."""

    def test_loads_all_files_in_sorted_order(self, memo_dir: Path):
        memos = load_memos(memo_dir)

        # hobby.md sorts before work.md
        assert [m.id for m in memos] == ["memo-3", "memo-4", "memo-1", "memo-2", "memo-5"]

    def test_recurses_into_subdirectories(self, tmp_path: Path):
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "deep.md").write_text("[[top]]\n", encoding="utf-8")
        (tmp_path / "top.md").write_text("hello\n", encoding="utf-8")

        ids = [m.id for m in load_memos(tmp_path)]

        assert sorted(ids) == ["deep", "top"]

    def test_skips_underscore_files_and_other_extensions(self, tmp_path: Path):
        (tmp_path / "_draft.md").write_text("draft\n", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("text\n", encoding="utf-8")
        (tmp_path / "kept.md").write_text("kept\n", encoding="utf-8")

        assert [m.id for m in load_memos(tmp_path)] == ["kept"]

    def test_skips_unreadable_files(self, tmp_path: Path):
        (tmp_path / "bad.md").write_bytes(b"\xff\xfe\xfa")
        (tmp_path / "good.md").write_text("fine\n", encoding="utf-8")

        assert [m.id for m in load_memos(tmp_path)] == ["good"]

    def test_missing_root(self, tmp_path: Path):
        assert load_memos(tmp_path / "nope") == []
