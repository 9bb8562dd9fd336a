"""CLI entry point for textpipe."""

from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path
from typing import Annotated

import structlog
import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from textpipe_core.config import DEFAULT_CONFIG_TEMPLATE, TextpipeConfig, load_config
from textpipe_core.errors import TextpipeError
from textpipe_core.executor import ExecutionResult, StepStatus, execute
from textpipe_core.pipeline import Pipeline, PipelineDocument
from textpipe_core.plugins import default_registry
from textpipe_core.preview import PreviewController, PreviewSnapshot, ThreadingScheduler

app = typer.Typer(
    name="textpipe",
    help="Compose text transformation pipelines and run them over documents.",
)

config_app = typer.Typer(help="Manage textpipe configuration.")
app.add_typer(config_app, name="config")

console = Console()
err_console = Console(stderr=True)

# Global state
_config: TextpipeConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def _json_formatter() -> structlog.stdlib.ProcessorFormatter:
    """One JSON object per stdlib log record."""
    return structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
        ],
    )


def _configure_logging(cfg: TextpipeConfig) -> None:
    if cfg.log_format == "json":
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_json_formatter())
    else:
        handler = RichHandler(console=err_console, show_path=False)
    logging.basicConfig(level=_LOG_LEVELS[cfg.log_level], handlers=[handler], force=True)


def _get_config() -> TextpipeConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to textpipe.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)
    _configure_logging(_config)


def _load_pipeline(path: Path) -> Pipeline:
    cfg = _get_config()
    try:
        registry = default_registry(cfg)
        return PipelineDocument.load(path).to_pipeline(registry)
    except TextpipeError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)


def _display_diagnostics(result: ExecutionResult) -> None:
    styles = {StepStatus.ok: "green", StepStatus.skipped: "dim", StepStatus.failed: "red"}
    table = Table(title=f"Diagnostics ({len(result.diagnostics)} steps)")
    table.add_column("#", justify="right")
    table.add_column("Step", style="cyan")
    table.add_column("Status")
    table.add_column("Chars", justify="right")
    table.add_column("Time", justify="right")
    table.add_column("Error", style="red")
    for i, d in enumerate(result.diagnostics, start=1):
        style = styles[d.status]
        table.add_row(
            str(i),
            d.kind,
            f"[{style}]{d.status.value}[/{style}]",
            f"{d.chars_in} -> {d.chars_out}",
            f"{d.duration_ms:.2f}ms",
            escape(d.error or ""),
        )
    err_console.print(table)


@app.command()
def ops() -> None:
    """List available operation kinds and their default configuration."""
    registry = default_registry(_get_config())
    table = Table(title=f"Operations ({len(registry)})")
    table.add_column("Kind", style="cyan")
    table.add_column("Label")
    table.add_column("Category", style="green")
    table.add_column("Defaults", style="yellow")
    for info in registry.list():
        defaults = json.dumps(info.default_config) if info.default_config else "-"
        table.add_row(info.kind, info.label, info.category, defaults)
    rprint(table)


@app.command()
def run(
    pipeline: Path = typer.Argument(..., help="Pipeline document (.yaml or .json)"),
    input_path: Path | None = typer.Argument(None, help="Input file (default: stdin)"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write result to file"),
    diagnostics: bool = typer.Option(False, "--diagnostics", "-d", help="Show per-step diagnostics"),
    strict: bool = typer.Option(False, "--strict", help="Exit with code 2 if any step failed"),
) -> None:
    """Apply a pipeline to a file or stdin."""
    pipe = _load_pipeline(pipeline)
    if input_path is not None:
        try:
            text = input_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            err_console.print(
                f"[red]Error:[/red] cannot read {escape(str(input_path))}: {escape(str(e))}",
                soft_wrap=True,
            )
            raise typer.Exit(1)
    else:
        text = sys.stdin.read()

    result = execute(pipe, text)

    if output is not None:
        output.write_text(result.output, encoding="utf-8")
        err_console.print(f"[green]Wrote[/green] {escape(str(output))}", soft_wrap=True)
    else:
        typer.echo(result.output, nl=False)

    if diagnostics:
        _display_diagnostics(result)
    for failure in result.failures:
        err_console.print(f"[yellow]Step {failure.kind} failed:[/yellow] {escape(failure.error or '')}")
    if strict and not result.ok:
        raise typer.Exit(2)


@app.command()
def check(
    pipeline: Path = typer.Argument(..., help="Pipeline document (.yaml or .json)"),
) -> None:
    """Validate a pipeline document without running it."""
    pipe = _load_pipeline(pipeline)
    table = Table(title=f"{pipeline.name} ({len(pipe)} steps)")
    table.add_column("#", justify="right")
    table.add_column("Kind", style="cyan")
    table.add_column("Enabled")
    table.add_column("Config", style="yellow")
    for i, step in enumerate(pipe.steps, start=1):
        table.add_row(str(i), step.kind, "yes" if step.enabled else "no", json.dumps(step.config_dict()))
    rprint(table)
    rprint("[green]Pipeline is valid.[/green]")


@app.command()
def new(
    path: Path = typer.Argument(..., help="Where to write the pipeline document"),
    step: list[str] = typer.Option([], "--step", "-s", help="Operation kind to add (repeatable)"),
    name: str = typer.Option("untitled", "--name", help="Pipeline name"),
    force: bool = typer.Option(False, "--force", help="Overwrite existing file"),
) -> None:
    """Create a pipeline document with default-configured steps."""
    if path.exists() and not force:
        console.print(
            f"[yellow]{escape(str(path))} already exists.[/yellow] Use --force to overwrite.",
            soft_wrap=True,
        )
        raise typer.Exit(1)
    pipe = Pipeline(default_registry(_get_config()))
    try:
        for kind in step:
            pipe = pipe.add_step(kind)
    except TextpipeError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)
    PipelineDocument.from_pipeline(pipe, name=name).save(path)
    console.print(f"[green]Created[/green] {escape(str(path))} ({len(pipe)} steps)", soft_wrap=True)


def _print_snapshot(snapshot: PreviewSnapshot) -> None:
    failed = [d for d in snapshot.diagnostics if d.status is StepStatus.failed]
    subtitle = f"{len(failed)} failed step(s)" if failed else "all steps ok"
    rprint(Panel(Text(snapshot.output), title=f"Preview #{snapshot.epoch}", subtitle=subtitle, border_style="blue"))
    for d in failed:
        err_console.print(f"[yellow]Step {d.kind} failed:[/yellow] {escape(d.error or '')}")


@app.command()
def watch(
    pipeline: Path = typer.Argument(..., help="Pipeline document (.yaml or .json)"),
    input_path: Path = typer.Argument(..., help="Input file"),
) -> None:
    """Re-run the pipeline whenever the pipeline document or the input changes."""
    from textpipe.watch import LivePreview

    cfg = _get_config()
    # watchdog delivers events on its own thread, so only timer threads fit here
    controller = PreviewController.from_config(cfg, scheduler=ThreadingScheduler())
    live = LivePreview(
        pipeline,
        input_path,
        registry=default_registry(cfg),
        controller=controller,
        on_update=_print_snapshot,
    )
    live.start()
    console.print(
        f"[dim]Watching {escape(str(pipeline))} and {escape(str(input_path))}. Press Ctrl+C to stop.[/dim]",
        soft_wrap=True,
    )
    try:
        while True:
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass
    finally:
        live.stop()


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default textpipe.yaml in current directory."""
    target = Path("textpipe.yaml")
    if target.exists() and not force:
        rprint("[yellow]textpipe.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    console.print(f"[green]Created[/green] {escape(str(target))}", soft_wrap=True)
