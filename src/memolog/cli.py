#!/usr/bin/env python3
"""
memolog: CLI for memo links

Usage:
    memolog links memo-id          # Outgoing links of a memo
    memolog backlinks memo-id      # Memos that link to it, with previews
    memolog graph                  # Full link graph
    memolog health                 # Orphans and broken links
    memolog highlight "text"       # Render links as anchors
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, NoReturn

import click

from . import __version__ as MEMOLOG_VERSION

log = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Output Formatting
# ─────────────────────────────────────────────────────────────────────────────


def format_table(rows: list[dict], columns: list[str], max_widths: dict | None = None) -> str:
    """Format rows as a simple table."""
    if not rows:
        return ""

    max_widths = max_widths or {}
    widths = {col: len(col) for col in columns}

    def cell(row: dict, col: str) -> str:
        val = str(row.get(col, ""))
        limit = max_widths.get(col, 50)
        if len(val) > limit:
            val = val[: limit - 3] + "..."
        return val

    for row in rows:
        for col in columns:
            widths[col] = max(widths[col], len(cell(row, col)))

    header = "  ".join(col.upper().ljust(widths[col]) for col in columns)
    separator = "  ".join("-" * widths[col] for col in columns)

    lines = [header, separator]
    for row in rows:
        lines.append("  ".join(cell(row, col).ljust(widths[col]) for col in columns))

    return "\n".join(lines)


def output(data: Any, as_json: bool = False) -> None:
    """Output data as JSON or formatted text."""
    if as_json:
        click.echo(json.dumps(data, indent=2, default=str))
    else:
        click.echo(data)


def _handle_error(ctx: click.Context, error: Exception, exit_code: int = 1) -> NoReturn:
    """Print a human-readable error and exit."""
    message = getattr(error, "message", None) or str(error)
    click.echo(f"Error: {message}", err=True)
    ctx.exit(exit_code)


def _single_line(text: str) -> str:
    return " ".join(text.split())


# ─────────────────────────────────────────────────────────────────────────────
# Memo Loading
# ─────────────────────────────────────────────────────────────────────────────


def _load_memos(ctx: click.Context) -> list:
    """Load memos from --root, MEMOLOG_ROOT or .memologconfig."""
    from .config import ConfigurationError, get_memo_root
    from .parser import load_memos

    root: Path | None = ctx.obj.get("root") if ctx.obj else None
    if root is None:
        try:
            root = get_memo_root()
        except ConfigurationError as exc:
            _handle_error(ctx, exc)

    if not root.is_dir():
        _handle_error(ctx, ConfigurationError(f"Memo directory not found: {root}"))

    log.debug("Loading memos from %s", root)
    return load_memos(root)


# ─────────────────────────────────────────────────────────────────────────────
# Main CLI Group
# ─────────────────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version=MEMOLOG_VERSION, prog_name="memolog")
@click.option(
    "--root",
    "-r",
    type=click.Path(path_type=Path, file_okay=False),
    envvar="MEMOLOG_ROOT",
    help="Directory holding memo files",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, root: Path | None, verbose: bool):
    """memolog: links, backlinks and integrity checks for memos.

    \b
    Quick start:
      memolog links memo-id            # What does this memo link to?
      memolog backlinks memo-id        # What links to this memo?
      memolog health                   # Orphans and broken links

    \b
    The memo directory comes from --root, MEMOLOG_ROOT, or a
    .memologconfig file (memo_path: <dir>) in a parent directory.
    """
    from ._logging import configure_logging

    configure_logging(verbose=verbose)

    ctx.ensure_object(dict)
    ctx.obj["root"] = root


# ─────────────────────────────────────────────────────────────────────────────
# Links Command
# ─────────────────────────────────────────────────────────────────────────────


@cli.command()
@click.argument("memo_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def links(ctx: click.Context, memo_id: str, as_json: bool):
    """Show the links a memo contains.

    \b
    Examples:
      memolog links 0192f3a4-note
      memolog links 0192f3a4-note --json
    """
    from .parser import extract_links

    memos = _load_memos(ctx)
    memo = next((m for m in memos if m.id == memo_id), None)
    if memo is None:
        _handle_error(ctx, LookupError(f"Memo not found: {memo_id}"))

    result = extract_links(memo)

    if as_json:
        output([link.model_dump() for link in result], as_json=True)
        return

    if not result:
        click.echo(f"No links in {memo_id}.")
        return

    rows = [{"target": link.target_id, "text": link.text} for link in result]
    click.echo(format_table(rows, ["target", "text"], {"target": 40, "text": 40}))


# ─────────────────────────────────────────────────────────────────────────────
# Graph Command
# ─────────────────────────────────────────────────────────────────────────────


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def graph(ctx: click.Context, as_json: bool):
    """Show the link graph (memo -> linked memos).

    \b
    Examples:
      memolog graph
      memolog graph --json
    """
    from .graph import build_link_graph

    result = build_link_graph(_load_memos(ctx))

    if as_json:
        output(result, as_json=True)
        return

    if not result:
        click.echo("No memos found.")
        return

    for memo_id, targets in result.items():
        click.echo(f"{memo_id} -> {', '.join(targets) if targets else '(none)'}")


# ─────────────────────────────────────────────────────────────────────────────
# Backlinks Command
# ─────────────────────────────────────────────────────────────────────────────


@cli.command()
@click.argument("memo_id")
@click.option(
    "--context",
    "context_length",
    type=click.IntRange(min=0),
    default=None,
    help="Characters of context around each link (default 50)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def backlinks(ctx: click.Context, memo_id: str, context_length: int | None, as_json: bool):
    """Show memos that link to MEMO_ID, with a preview of each link.

    \b
    Examples:
      memolog backlinks 0192f3a4-note
      memolog backlinks 0192f3a4-note --context=20
    """
    from .backlinks import get_backlinks
    from .config import get_context_length

    if context_length is None:
        context_length = get_context_length()

    result = get_backlinks(memo_id, _load_memos(ctx), context_length=context_length)

    if as_json:
        output([b.model_dump() for b in result], as_json=True)
        return

    if not result:
        click.echo(f"No memos link to {memo_id}.")
        return

    click.echo(f"Referenced by ({len(result)}):")
    for b in result:
        click.echo(f"  - {b.memo_id}: {_single_line(b.preview)}")


# ─────────────────────────────────────────────────────────────────────────────
# Integrity Commands
# ─────────────────────────────────────────────────────────────────────────────


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def orphans(ctx: click.Context, as_json: bool):
    """List memos with no links in or out.

    \b
    Examples:
      memolog orphans
    """
    from .integrity import find_orphaned_memos

    result = find_orphaned_memos(_load_memos(ctx))

    if as_json:
        output([m.model_dump() for m in result], as_json=True)
        return

    if not result:
        click.echo("No orphaned memos.")
        return

    rows = [{"id": m.id, "source": m.source or ""} for m in result]
    click.echo(format_table(rows, ["id", "source"], {"id": 40, "source": 60}))


@cli.command("broken-links")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def broken_links(ctx: click.Context, as_json: bool):
    """List links pointing at memos that do not exist.

    \b
    Examples:
      memolog broken-links
    """
    from .integrity import find_broken_links

    result = find_broken_links(_load_memos(ctx))

    if as_json:
        output([link.model_dump() for link in result], as_json=True)
        return

    if not result:
        click.echo("No broken links.")
        return

    for link in result:
        click.echo(f"  - {link.source_id} -> {link.target_id}")


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def health(ctx: click.Context, as_json: bool):
    """Audit memos for orphans and broken links.

    \b
    Examples:
      memolog health
      memolog health --json
    """
    from .integrity import check_health

    result = check_health(_load_memos(ctx))

    if as_json:
        output(result.model_dump(), as_json=True)
        return

    summary = result.summary
    click.echo("Memo Link Health Report")
    click.echo("=" * 40)
    click.echo(f"Health Score: {summary.health_score}/100")
    click.echo(f"Total Memos: {summary.total_memos}")
    click.echo(f"Total Links: {summary.total_links}")

    if result.orphans:
        click.echo(f"\n⚠ Orphaned memos ({len(result.orphans)}):")
        for memo in result.orphans[:10]:
            click.echo(f"  - {memo.id}")
    else:
        click.echo("\n✓ No orphaned memos")

    if result.broken_links:
        click.echo(f"\n⚠ Broken links ({len(result.broken_links)}):")
        for link in result.broken_links[:10]:
            click.echo(f"  - {link.source_id} -> {link.target_id}")
    else:
        click.echo("\n✓ No broken links")


# ─────────────────────────────────────────────────────────────────────────────
# Link Syntax Helpers
# ─────────────────────────────────────────────────────────────────────────────


@cli.command()
@click.argument("text", required=False)
def highlight(text: str | None):
    """Render [[links]] in TEXT (or stdin) as HTML anchors.

    \b
    Examples:
      memolog highlight "See [[memo-1|the plan]]"
      cat memo.md | memolog highlight
    """
    from .markup import highlight_links

    if text is None:
        text = click.get_text_stream("stdin").read()

    click.echo(highlight_links(text), nl=not text.endswith("\n"))


@cli.command("create-link")
@click.argument("memo_id")
@click.argument("display_text", required=False)
def create_link_cmd(memo_id: str, display_text: str | None):
    """Print link syntax for MEMO_ID.

    \b
    Examples:
      memolog create-link memo-1             # [[memo-1]]
      memolog create-link memo-1 "The plan"  # [[memo-1|The plan]]
    """
    from .parser import create_link, is_valid_memo_id

    if not is_valid_memo_id(memo_id):
        click.echo(
            f"Warning: '{memo_id}' is not a valid memo id; the link will not be recognized.",
            err=True,
        )

    click.echo(create_link(memo_id, display_text))


@cli.command("validate-id")
@click.argument("memo_id")
@click.pass_context
def validate_id(ctx: click.Context, memo_id: str):
    """Check that MEMO_ID only uses letters, digits and hyphens.

    Exits with status 1 when the id is invalid.
    """
    from .parser import is_valid_memo_id

    if is_valid_memo_id(memo_id):
        click.echo(f"valid: {memo_id}")
        return

    click.echo(f"invalid: {memo_id}", err=True)
    ctx.exit(1)


def main() -> None:
    """Entry point for the memolog script."""
    cli()


if __name__ == "__main__":
    main()
