# src/cfarag/cli/app.py
"""Command-line interface for cfarag.

This module provides a thin Typer wrapper around the commands layer.
Each command:
1. Parses args (via Typer)
2. Creates progress callbacks (for Rich display)
3. Calls commands module functions
4. Renders results with Rich
"""

from __future__ import annotations

import json

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from cfarag import __version__
from cfarag.commands import CommandStage, ProgressUpdate, generate, index, objectives, topics
from cfarag.commands.base import GenerateResult
from cfarag.config import ConfigError, get_app_config, load_env_file
from cfarag.logging_config import configure_logging

app = typer.Typer(
    name="cfarag",
    help="cfarag - Generate CFA Level 1 questions grounded in training materials.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"cfarag {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Log level for pipeline events (DEBUG, INFO, WARNING, ...)",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Emit log events as JSON lines",
    ),
) -> None:
    """cfarag - RAG question generation for CFA Level 1."""
    load_env_file()
    configure_logging(log_level, json_logs=json_logs)


@app.command(name="generate")
def generate_cmd(
    topic: str = typer.Argument(..., help="Topic area name or slug, e.g. 'fixed-income'"),
    difficulty: str = typer.Option(
        "intermediate",
        "--difficulty",
        "-d",
        help="beginner, intermediate or advanced",
    ),
    count: int = typer.Option(1, "--count", "-n", min=1, max=50, help="Number of questions"),
    subtopic: str = typer.Option(None, "--subtopic", "-s", help="Subtopic or reading name"),
    lo_id: str = typer.Option(None, "--lo-id", help="Learning objective ID"),
    lo_text: str = typer.Option(None, "--lo-text", help="Learning objective statement"),
    save: bool = typer.Option(False, "--save", help="Save accepted questions"),
    created_by: str = typer.Option(None, "--created-by", help="Recorded with saved questions"),
    no_delay: bool = typer.Option(False, "--no-delay", help="Skip the pause between attempts"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    materials_dir: str = typer.Option(None, "--materials-dir", "-m", help="Materials directory"),
    data_dir: str = typer.Option(None, "--data-dir", help="Data directory"),
    config_file: str = typer.Option(None, "--config", "-c", help="Path to config file"),
) -> None:
    """Generate questions for a topic."""
    if as_json:
        result = _run_generate(
            topic, difficulty, count, subtopic, lo_id, lo_text, save, created_by, no_delay,
            materials_dir, data_dir, config_file,
        )
        _print_json(result)
    else:
        with console.status(f"Generating {count} question(s) for {topic}..."):
            result = _run_generate(
                topic, difficulty, count, subtopic, lo_id, lo_text, save, created_by, no_delay,
                materials_dir, data_dir, config_file,
            )
        _render_generate_result(result)

    if not result.success:
        raise typer.Exit(1)


def _run_generate(
    topic: str,
    difficulty: str,
    count: int,
    subtopic: str | None,
    lo_id: str | None,
    lo_text: str | None,
    save: bool,
    created_by: str | None,
    no_delay: bool,
    materials_dir: str | None,
    data_dir: str | None,
    config_file: str | None,
) -> GenerateResult:
    return generate.generate(
        topic=topic,
        difficulty=difficulty,
        count=count,
        subtopic=subtopic,
        learning_objective_id=lo_id,
        learning_objective_text=lo_text,
        save=save,
        created_by=created_by,
        no_delay=no_delay,
        materials_dir=materials_dir,
        data_dir=data_dir,
        config_path=config_file,
    )


def _print_json(result: GenerateResult) -> None:
    payload = {
        "success": result.success,
        "topic": result.topic,
        "questions": [q.model_dump() for q in result.questions],
        "count": len(result.questions),
        "errors": result.errors,
        "source_files": result.source_files,
        "saved_count": result.saved_count,
        "error": result.error,
    }
    print(json.dumps(payload, indent=2))


def _render_generate_result(result: GenerateResult) -> None:
    """Render generate result to console."""
    for warning in result.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    for i, question in enumerate(result.questions, 1):
        body = "\n".join(
            [
                question.question_text,
                "",
                f"A. {question.option_a}",
                f"B. {question.option_b}",
                f"C. {question.option_c}",
                "",
                f"[bold green]Answer: {question.correct_answer}[/bold green]",
                "",
                question.explanation,
                "",
                f"[dim]Keywords: {', '.join(question.keywords)}[/dim]",
            ]
        )
        console.print(
            Panel(
                body,
                title=f"Question {i} · {question.topic_area} · {question.difficulty_level}",
                border_style="cyan",
            )
        )

    for error in result.errors:
        console.print(f"[red]{error}[/red]")

    console.print()
    console.print(
        f"[green]Generated {len(result.questions)}/{result.requested} questions[/green]"
        if result.questions
        else f"[red]Generated 0/{result.requested} questions[/red]"
    )
    if result.source_files:
        console.print(f"[dim]Sources: {', '.join(result.source_files)}[/dim]")
    if result.saved_count is not None:
        console.print(f"[green]Saved {result.saved_count} questions[/green]")
    if result.error and result.error not in result.errors:
        console.print(f"[red]Error: {result.error}[/red]")


@app.command(name="index")
def index_cmd(
    topic_names: list[str] = typer.Argument(None, help="Topics to index (default: all)"),
    materials_dir: str = typer.Option(None, "--materials-dir", "-m", help="Materials directory"),
    data_dir: str = typer.Option(None, "--data-dir", help="Data directory"),
    config_file: str = typer.Option(None, "--config", "-c", help="Path to config file"),
    plain: bool = typer.Option(False, "--plain", help="Plain output (no colors/formatting)"),
) -> None:
    """Embed training materials into the vector index."""
    show_progress = not plain and console.is_terminal

    if show_progress:
        with Progress(
            SpinnerColumn(),
            TextColumn("[bold]Indexing"),
            BarColumn(bar_width=20),
            TextColumn("{task.fields[progress_text]}", style="cyan"),
            TextColumn("{task.description}", style="dim"),
            console=console,
        ) as progress:
            task = progress.add_task("", total=None, progress_text="")

            def on_progress(update: ProgressUpdate) -> None:
                progress.update(
                    task,
                    total=update.total,
                    completed=(
                        update.current - 1
                        if update.stage is CommandStage.INDEXING
                        else update.current
                    ),
                    progress_text=f"{update.current}/{update.total}",
                    description=update.message or "",
                )

            result = index.index(
                topics=topic_names or None,
                materials_dir=materials_dir,
                data_dir=data_dir,
                config_path=config_file,
                on_progress=on_progress,
            )
    else:
        result = index.index(
            topics=topic_names or None,
            materials_dir=materials_dir,
            data_dir=data_dir,
            config_path=config_file,
        )

    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    console.print(
        f"Indexed {result.total_documents} documents ({result.total_chunks} chunks) "
        f"across {len(result.topics_indexed)} topics"
    )
    console.print(f"Index now holds {result.index_size} chunks")
    if result.topics_skipped:
        console.print(f"Skipped (no material): {', '.join(result.topics_skipped)}")


@app.command(name="topics")
def topics_cmd(
    materials_dir: str = typer.Option(None, "--materials-dir", "-m", help="Materials directory"),
    config_file: str = typer.Option(None, "--config", "-c", help="Path to config file"),
    plain: bool = typer.Option(False, "--plain", help="Plain output (no colors/formatting)"),
) -> None:
    """List topic areas and their training material files."""
    result = topics.topics(materials_dir=materials_dir, config_path=config_file)

    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    if plain:
        for info in result.topics:
            console.print(f"{info.topic} ({info.slug}): {len(info.files)} files")
            for name in info.files:
                console.print(f"  {name}")
        return

    table = Table(title=f"Training Materials ({result.materials_dir})")
    table.add_column("Topic", style="cyan")
    table.add_column("Slug", style="dim")
    table.add_column("Files", justify="right")
    for info in result.topics:
        files = str(len(info.files)) if info.files else "[red]0[/red]"
        table.add_row(info.topic, info.slug, files)
    console.print(table)


@app.command(name="objectives")
def objectives_cmd(
    topic: str = typer.Argument(..., help="Topic area (display name or slug)"),
    reading: str = typer.Option(None, "--reading", "-r", help="Filter by reading name"),
    plain: bool = typer.Option(False, "--plain", help="Plain output (no colors/formatting)"),
) -> None:
    """List learning objective IDs for a topic area."""
    result = objectives.objectives(topic, reading=reading)

    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    if plain:
        for objective in result.objectives:
            console.print(f"{objective.id}\t{objective.text}", soft_wrap=True)
        return

    table = Table(title=f"Learning Objectives: {result.topic}")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Reading", style="dim")
    table.add_column("Objective")
    for objective in result.objectives:
        table.add_row(objective.id, objective.reading, objective.text)
    console.print(table)


@app.command(name="serve")
def serve_cmd(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Port"),
    materials_dir: str = typer.Option(None, "--materials-dir", "-m", help="Materials directory"),
    data_dir: str = typer.Option(None, "--data-dir", help="Data directory"),
    config_file: str = typer.Option(None, "--config", "-c", help="Path to config file"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from cfarag.api import create_app
    from cfarag.pipeline import QuestionPipeline
    from cfarag.service import QuestionService

    app_config = get_app_config(materials_dir, data_dir, config_file)
    if isinstance(app_config, ConfigError):
        console.print(f"[red]Error: {app_config.message}[/red]")
        if app_config.suggestion:
            console.print(f"[dim]{app_config.suggestion}[/dim]")
        raise typer.Exit(1)

    for warning in app_config.warnings or []:
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    pipeline = QuestionPipeline.from_config(app_config)
    try:
        uvicorn.run(create_app(QuestionService(pipeline)), host=host, port=port)
    finally:
        pipeline.close()
