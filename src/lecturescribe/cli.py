"""CLI entry point for lecturescribe."""

import json
import sys
from dataclasses import asdict
from pathlib import Path

import click
from loguru import logger

from .config import Config, load_config
from .exceptions import ConfigError, LectureScribeError
from .formatter import export_text, format_blocks, format_markdown
from .generators import create_note, get_generator
from .llm import PROVIDER_NAMES, get_llm_provider
from .models import GenerationMode, SourceType
from .parser import parse_response
from .renderer import render_note, render_notes
from .store import SORT_MODES, NoteStore
from .utils import export_filename, slugify

_MODES = [m.value for m in GenerationMode]
_SOURCES = [s.value for s in SourceType]
_TABS = ["notes", "transcript", "key-points", "definitions"]


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _load(ctx: click.Context, require_llm: bool = False, **overrides) -> Config:
    try:
        return load_config(
            store_path=ctx.obj["store_path"],
            verbose=ctx.obj["verbose"],
            require_llm=require_llm,
            **overrides,
        )
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)


def _store(ctx: click.Context) -> NoteStore:
    return NoteStore(_load(ctx).store_path)


def _fail(e: LectureScribeError) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


@click.group()
@click.option(
    "--store",
    "store_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Note store file (default: ~/.lecturescribe/notes.json or LECTURESCRIBE_STORE)",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output")
@click.pass_context
def main(ctx, store_path, verbose):
    """Turn lecture transcripts into structured study notes."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["store_path"] = store_path
    ctx.obj["verbose"] = verbose


@main.command()
@click.argument("transcript_file", type=click.File("r", encoding="utf-8"))
@click.option("--title", required=True, help="Lecture title")
@click.option("--mode", type=click.Choice(_MODES), default=None, help="Generation mode (default: full)")
@click.option("--source", type=click.Choice(_SOURCES), default="audio", show_default=True)
@click.option("--source-info", default="", help="Original filename or URL")
@click.option("--provider", type=click.Choice(PROVIDER_NAMES), default=None, help="LLM provider")
@click.option("--model", type=str, default=None, help="LLM model to use")
@click.pass_context
def generate(ctx, transcript_file, title, mode, source, source_info, provider, model):
    """Generate notes from a transcript file and store them."""
    config = _load(ctx, require_llm=True, provider=provider, model=model, mode=mode)
    if config.verbose:
        click.echo(f"Provider: {config.llm_provider} ({config.default_model})")

    transcript = transcript_file.read()
    try:
        llm = get_llm_provider(config)
    except Exception as e:
        click.echo(f"Failed to initialize LLM provider: {e}", err=True)
        sys.exit(2)

    try:
        click.echo(f"Generating {config.mode} notes for '{title}'...")
        parsed = get_generator(config.generation_mode, llm).generate(transcript, title)
        note_id = NoteStore(config.store_path).add(
            create_note(
                parsed,
                title=title,
                source=source,
                source_info=source_info or getattr(transcript_file, "name", ""),
                transcript=transcript,
            )
        )
    except LectureScribeError as e:
        _fail(e)
    click.echo(note_id)


@main.command("parse")
@click.argument("response_file", type=click.File("r", encoding="utf-8"))
@click.option("--title", required=True, help="Lecture title")
@click.option("--mode", type=click.Choice(_MODES), default="full", show_default=True)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the parsed fields as JSON")
def parse_cmd(response_file, title, mode, as_json):
    """Parse a saved raw response without calling any service."""
    parsed = parse_response(response_file.read(), title, GenerationMode(mode))
    if as_json:
        click.echo(json.dumps(asdict(parsed), indent=2, ensure_ascii=False))
        return
    click.echo(f"SUMMARY\n\n{parsed.summary}\n")
    click.echo("KEY POINTS\n")
    for point in parsed.key_points:
        click.echo(f"• {point}")
    click.echo("\nDEFINITIONS\n")
    for definition in parsed.definitions:
        click.echo(f"• {definition}")
    click.echo(f"\nFULL NOTES\n\n{parsed.full_notes}")


@main.command()
@click.argument("note_id", required=False)
@click.option("--file", "notes_file", type=click.File("r", encoding="utf-8"), default=None,
              help="Render a notes file instead of a stored note")
@click.option("--color/--no-color", default=None, help="Style output (default: when a terminal)")
@click.pass_context
def render(ctx, note_id, notes_file, color):
    """Render full notes to the terminal."""
    if bool(note_id) == bool(notes_file):
        raise click.UsageError("Give either a note ID or --file.")
    if notes_file is not None:
        text = notes_file.read()
    else:
        try:
            text = _store(ctx).require(note_id).full_notes
        except LectureScribeError as e:
            _fail(e)
    if color is None:
        color = sys.stdout.isatty()
    click.echo(format_blocks(render_notes(text), color=color))


@main.command("list")
@click.option("--search", default="", help="Only notes whose title or source info contains this text")
@click.option("--source", type=click.Choice(["all", *_SOURCES]), default="all", show_default=True)
@click.option("--sort", type=click.Choice(SORT_MODES), default="newest", show_default=True)
@click.pass_context
def list_cmd(ctx, search, source, sort):
    """List stored notes, newest first unless --sort says otherwise."""
    try:
        store = _store(ctx)
        notes = store.search(search, source=source, sort=sort)
        if not notes:
            click.echo("No matching notes." if len(store) else "No notes yet.")
            return
    except LectureScribeError as e:
        _fail(e)
    for note in notes:
        click.echo(
            f"{note.id}  {note.created_at.strftime('%Y-%m-%d')}  "
            f"[{note.source.value}]  {note.title}"
        )


@main.command()
@click.argument("note_id")
@click.option("--tab", type=click.Choice(_TABS), default="notes", show_default=True)
@click.option("--color/--no-color", default=None, help="Style output (default: when a terminal)")
@click.pass_context
def show(ctx, note_id, tab, color):
    """Show one tab of a stored note."""
    try:
        note = _store(ctx).require(note_id)
    except LectureScribeError as e:
        _fail(e)
    rendered = render_note(note)
    if color is None:
        color = sys.stdout.isatty()

    click.echo(click.style(note.title, bold=True) if color else note.title)
    click.echo(f"Source: {note.source_info or note.source.value}\n")
    if tab == "notes":
        click.echo(format_blocks(rendered.blocks, color=color))
    elif tab == "transcript":
        click.echo("\n\n".join(rendered.transcript))
    elif tab == "key-points":
        for i, point in enumerate(rendered.key_points, 1):
            click.echo(f"{i}. {point}")
    else:
        for term, meaning in rendered.definitions:
            click.echo(f"{click.style(term, bold=True) if color else term}")
            if meaning:
                click.echo(f"    {meaning}")


@main.command()
@click.argument("note_id")
@click.argument("new_title")
@click.pass_context
def rename(ctx, note_id, new_title):
    """Rename a stored note."""
    new_title = new_title.strip()
    if not new_title:
        raise click.BadParameter("Title cannot be empty.", param_hint="NEW_TITLE")
    try:
        _store(ctx).update(note_id, title=new_title)
    except LectureScribeError as e:
        _fail(e)
    click.echo(f"Renamed to: {new_title}")


@main.command()
@click.argument("note_ids", nargs=-1, required=True)
@click.pass_context
def delete(ctx, note_ids):
    """Delete one or more stored notes."""
    try:
        removed = _store(ctx).delete_many(note_ids)
    except LectureScribeError as e:
        _fail(e)
    click.echo(f"Deleted {removed} note(s).")
    if removed < len(set(note_ids)):
        sys.exit(1)


@main.command()
@click.option("--yes", is_flag=True, default=False, help="Skip the confirmation prompt")
@click.pass_context
def clear(ctx, yes):
    """Delete every stored note."""
    if not yes:
        click.confirm("Delete all notes?", abort=True)
    try:
        _store(ctx).clear()
    except LectureScribeError as e:
        _fail(e)
    click.echo("All notes deleted.")


@main.command()
@click.argument("note_id")
@click.option("--format", "fmt", type=click.Choice(["text", "markdown"]), default="text", show_default=True)
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Output file (default: derived from the title)")
@click.pass_context
def export(ctx, note_id, fmt, output):
    """Export a stored note as plain text or markdown."""
    try:
        note = _store(ctx).require(note_id)
    except LectureScribeError as e:
        _fail(e)
    if fmt == "text":
        content = export_text(note)
        default_name = export_filename(note.title)
    else:
        content = format_markdown(note)
        default_name = f"{slugify(note.title)}.md"

    path = Path(output or default_name)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        click.echo(f"Failed to write file: {e}", err=True)
        sys.exit(1)
    click.echo(f"Wrote {path}")
