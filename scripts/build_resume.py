#!/usr/bin/env python3
"""
Resume Build CLI

Renders resume JSON documents to PDF and inspects their layout.

Commands:
    render   - Render a resume document to PDF
    layout   - Print the draw instructions of a resume document
    validate - Check a rendered PDF against its document's layout
    migrate  - Rewrite a document in the current schema version
    watch    - Re-render a document whenever its file changes

Examples:\n

    build_resume.py render data/resume.json                    # Render to outs/results/<date>/

    build_resume.py render data/resume.json -o cv.pdf --check  # Render and validate

    build_resume.py layout data/resume.json --page 2           # Show page 2 instructions

    build_resume.py validate data/resume.json cv.pdf           # Validate an existing PDF

    build_resume.py watch data/resume.json -o preview.pdf      # Live preview file
"""

import os
import time
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vitae.contexts.editing import ResumeLoadError, load_resume_file, save_resume_file
from vitae.contexts.editing.logger import setup_editing_logger
from vitae.contexts.layout import (
    DrawLine,
    DrawText,
    PageLayoutEngine,
    load_layout_settings,
)
from vitae.contexts.layout.settings import LAYOUT_CONFIG_PATH
from vitae.contexts.rendering import (
    PreviewScheduler,
    render_resume,
    render_resume_bytes,
    validate_rendered_pdf,
)
from vitae.contexts.rendering.logger import setup_rendering_logger
from vitae.contexts.rendering.preview import PREVIEW_DELAY_S
from vitae.utils.timestamp import format_timestamp, now

load_dotenv()
LOGS_PATH = Path(os.getenv("VITAE_LOGS_PATH", "outs/logs"))

app = typer.Typer(
    help="Render resume documents to PDF and inspect their layout",
    add_completion=False,
    invoke_without_command=True,
)

DocumentArgument = Annotated[Path, typer.Argument(help="Resume JSON document")]
ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="YAML file with layout setting overrides"),
]
TodayOption = Annotated[
    Optional[datetime],
    typer.Option("--today", help="Reference date for graduation status", formats=["%Y-%m-%d"]),
]


def _load(document: Path):
    try:
        return load_resume_file(document)
    except ResumeLoadError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _settings(config: Optional[Path]):
    try:
        return load_layout_settings(config if config is not None else LAYOUT_CONFIG_PATH)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _reference_date(today: Optional[datetime]) -> Optional[date]:
    return today.date() if today is not None else None


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("render")
def render_command(
    document: DocumentArgument,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="PDF path (default: results directory)"),
    ] = None,
    config: ConfigOption = None,
    today: TodayOption = None,
    check: Annotated[
        bool,
        typer.Option("--check", help="Validate the PDF against its layout after rendering"),
    ] = False,
):
    """
    Render a resume document to PDF.

    Examples:\n

        $ build_resume.py render data/resume.json

        $ build_resume.py render data/resume.json -o cv.pdf --check
    """
    setup_rendering_logger(LOGS_PATH / f"render_{now()}", document=document)

    resume = _load(document)
    settings = _settings(config)

    typer.secho(f"\nRendering: {resume.name or document.name}", fg=typer.colors.BLUE, bold=True)
    result = render_resume(resume, output, settings=settings, today=_reference_date(today))

    typer.echo("")
    if not result.success:
        typer.secho("✗ Render failed", fg=typer.colors.RED, bold=True)
        for error in result.errors:
            typer.secho(f"  - {error}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.secho("✓ Render succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Pages: {result.page_count}")
    typer.echo(f"  Links: {result.link_count}")
    typer.echo(f"  PDF: {result.pdf_path}")

    if check:
        validation = validate_rendered_pdf(result.pdf_path, result.layout)
        if validation.is_valid:
            typer.secho("✓ Validation passed", fg=typer.colors.GREEN, bold=True)
        else:
            typer.secho(f"✗ Validation failed ({len(validation.issues)} issues)", fg=typer.colors.RED, bold=True)
            for issue in validation.issues[:10]:
                typer.echo(f"  - {issue}")
            raise typer.Exit(code=1)
    typer.echo("")


@app.command("layout")
def layout_command(
    document: DocumentArgument,
    page: Annotated[
        Optional[int],
        typer.Option("--page", "-p", help="Only show this page (1-indexed)", min=1),
    ] = None,
    config: ConfigOption = None,
    today: TodayOption = None,
):
    """
    Print the draw instructions of a resume document.

    Examples:\n

        $ build_resume.py layout data/resume.json

        $ build_resume.py layout data/resume.json --page 2
    """
    resume = _load(document)
    layout = PageLayoutEngine(_settings(config)).layout(resume, today=_reference_date(today))

    typer.secho(f"\n{layout.page_count} page(s), {len(layout.links)} links", bold=True)
    for page_number, instructions in enumerate(layout.pages, start=1):
        if page is not None and page_number != page:
            continue
        typer.secho(f"\nPage {page_number}", fg=typer.colors.BLUE, bold=True)
        for instruction in instructions:
            if isinstance(instruction, DrawText):
                style = instruction.style or "-"
                link = f"  -> {instruction.hyperlink.url}" if instruction.hyperlink else ""
                typer.echo(
                    f"  text  x={instruction.x:6.1f} y={instruction.y:6.1f} "
                    f"{instruction.font_size:4.1f}pt {style} {instruction.align:<6} "
                    f"{instruction.text}{link}"
                )
            elif isinstance(instruction, DrawLine):
                typer.echo(
                    f"  line  ({instruction.x1:.1f}, {instruction.y1:.1f}) -> "
                    f"({instruction.x2:.1f}, {instruction.y2:.1f})"
                )
    typer.echo("")


@app.command("validate")
def validate_command(
    document: DocumentArgument,
    pdf_path: Annotated[Path, typer.Argument(help="Rendered PDF to check")],
    config: ConfigOption = None,
    today: TodayOption = None,
):
    """
    Check a rendered PDF against the layout of its document.

    Examples:\n

        $ build_resume.py validate data/resume.json outs/results/2025-11-14/Jane\\ Doe.pdf
    """
    resume = _load(document)
    layout = PageLayoutEngine(_settings(config)).layout(resume, today=_reference_date(today))
    result = validate_rendered_pdf(pdf_path, layout)

    if result.is_valid:
        typer.secho("\n✓ Validation passed", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Page count: {result.page_count}\n")
        raise typer.Exit(code=0)

    typer.secho("\n✗ Validation failed", fg=typer.colors.RED, bold=True)
    typer.echo(f"  Page count: {result.page_count} (expected {result.expected_page_count})")
    for issue in result.issues:
        typer.echo(f"  - {issue}")
    typer.echo("")
    raise typer.Exit(code=1)


@app.command("migrate")
def migrate_command(
    document: DocumentArgument,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output path (default: overwrite the document)"),
    ] = None,
):
    """
    Rewrite a document with property names and the current schema version.

    Examples:\n

        $ build_resume.py migrate old_resume.json -o resume.json
    """
    setup_editing_logger(LOGS_PATH / f"migrate_{now()}", document=document)

    resume = _load(document)
    target = save_resume_file(resume, output or document)
    typer.secho(f"✓ Wrote {target}", fg=typer.colors.GREEN)


def _preview_generator(document: Path, settings) -> Callable[[], Optional[bytes]]:
    """Preview generator for watch; None (keep the last preview) while the document does not load."""

    def generate() -> Optional[bytes]:
        try:
            resume = load_resume_file(document)
        except ResumeLoadError as e:
            typer.secho(f"  Skipping update, document did not load: {e.message}", fg=typer.colors.YELLOW)
            return None
        return render_resume_bytes(resume, settings=settings)

    return generate


@app.command("watch")
def watch_command(
    document: DocumentArgument,
    output: Annotated[Path, typer.Option("--output", "-o", help="Preview PDF path")] = Path(
        "preview.pdf"
    ),
    delay: Annotated[
        float,
        typer.Option("--delay", "-d", help="Seconds to wait after the last change", min=0.0),
    ] = PREVIEW_DELAY_S,
    interval: Annotated[
        float,
        typer.Option("--interval", help="Seconds between file checks", min=0.05),
    ] = 0.25,
    config: ConfigOption = None,
):
    """
    Re-render a document whenever its file changes, until interrupted.

    Examples:\n

        $ build_resume.py watch data/resume.json -o preview.pdf --delay 0.5
    """
    setup_rendering_logger(LOGS_PATH / f"watch_{now()}", document=document)
    settings = _settings(config)

    generate = _preview_generator(document, settings)

    def commit(artifact) -> None:
        output.write_bytes(artifact.data)
        typer.echo(f"  Preview #{artifact.generation} written at {format_timestamp(artifact.committed_at)}")

    scheduler = PreviewScheduler(generate, delay=delay, on_commit=commit)
    typer.secho(f"\nWatching {document} -> {output} (Ctrl+C to stop)", fg=typer.colors.BLUE, bold=True)

    last_mtime = None
    try:
        while True:
            try:
                mtime = document.stat().st_mtime
            except FileNotFoundError:
                mtime = None
            if mtime is not None and mtime != last_mtime:
                scheduler.request_update(immediate=last_mtime is None)
                last_mtime = mtime
            time.sleep(interval)
    except KeyboardInterrupt:
        scheduler.cancel()
        typer.echo("\nStopped.")


if __name__ == "__main__":
    app()
