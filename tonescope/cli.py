"""
tonescope.cli - Typer CLI entry point.

Thin shell around the analysis core: decodes files, runs the pipeline, and
renders results with rich.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tonescope import __version__
from tonescope.config import (
    CONFIG_FILENAME,
    TonescopeConfig,
    create_default_config,
    find_config,
    load_config,
    write_config,
)
from tonescope.exceptions import ConfigError, TonescopeError
from tonescope.logging import configure_logging
from tonescope.utils import format_duration, get_risk_style

app = typer.Typer(
    name="tonescope",
    help="Heuristic vocal tone profiling.\n\n"
    "Scores recordings as calm, tense, angry and excited percentages and "
    "estimates a conflict-risk index from simple waveform statistics.",
    add_completion=False,
)
console = Console()


def resolve_config(config_path: str | None) -> TonescopeConfig:
    """Load the config given on the command line, else the nearest tonescope.yaml."""
    path = Path(config_path).expanduser() if config_path else find_config()
    try:
        return load_config(path)
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"tonescope {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Tonescope - heuristic vocal tone profiling."""
    configure_logging(verbose)


@app.command("analyze")
def analyze_files(
    files: list[str] = typer.Argument(..., help="Audio file(s) to analyze"),
    json_out: str | None = typer.Option(
        None, "--json", "-j", help="Write all results to this JSON file"
    ),
    config_path: str | None = typer.Option(None, "--config", "-c", help="Path to tonescope.yaml"),
) -> None:
    """Analyze the vocal tone of one or more audio files.

    Only the first 30 seconds (configurable) of each file are analyzed. The
    Length column shows the full recording length.
    """
    from tonescope.analyze.pipeline import analyze_file
    from tonescope.extract.audio import validate_audio_file

    config = resolve_config(config_path)

    results: list[dict[str, Any]] = []
    errors: list[dict[str, str]] = []

    table = Table(title="Tone Analysis")
    table.add_column("File", style="cyan")
    table.add_column("Length", style="green")
    table.add_column("Calm", justify="right")
    table.add_column("Tense", justify="right")
    table.add_column("Angry", justify="right")
    table.add_column("Excited", justify="right")
    table.add_column("Risk", justify="right")
    table.add_column("Status", style="yellow")

    notes = []

    for file_arg in files:
        audio_file = Path(file_arg).expanduser()

        try:
            info = validate_audio_file(audio_file, config.max_file_size_mb)
            console.print(f"[dim]Analyzing {audio_file.name} ({info['size']})...[/dim]")
            result = analyze_file(audio_file, config, validate=False)
        except TonescopeError as e:
            table.add_row(
                audio_file.name, "-", "-", "-", "-", "-", "-", f"[red]Error: {escape(str(e))}[/red]"
            )
            errors.append({"file": str(audio_file), "error": str(e)})
            continue

        emotions = result.emotions
        style = get_risk_style(result.risk_level)
        table.add_row(
            audio_file.name,
            format_duration(result.duration_analyzed),
            f"{emotions.calm}%",
            f"{emotions.tense}%",
            f"{emotions.angry}%",
            f"{emotions.excited}%",
            f"[{style}]{result.conflict_risk}%[/{style}]",
            "[green]✓ Analyzed[/green]",
        )
        notes.append(
            f"[cyan]{audio_file.name}[/cyan]: mostly {result.dominant_emotion}; "
            f"[{style}]{result.risk_level.value} risk[/{style}]. {result.risk_level.description} "
            f"[dim](volume {result.features.volume}, variability {result.features.variability}, "
            f"zero crossing {result.features.zero_crossing})[/dim]"
        )
        results.append({"file": str(audio_file), "size": info["size"], **result.to_dict()})

    console.print(table)
    for note in notes:
        console.print(note)

    if json_out:
        from tonescope.io import write_json

        output_path = Path(json_out).expanduser()
        write_json(output_path, {"results": results, "errors": errors})
        console.print(f"\n[green]✓[/green] Results written to {output_path}")

    console.print(f"\n[green]✓[/green] Analyzed {len(results)} file(s), failed {len(errors)}")

    if errors:
        raise typer.Exit(1)


@app.command("config")
def show_config(
    config_path: str | None = typer.Option(None, "--config", "-c", help="Path to tonescope.yaml"),
    init: bool = typer.Option(
        False, "--init", help=f"Write a default {CONFIG_FILENAME} in the current directory"
    ),
) -> None:
    """Show the resolved configuration, or create a default one."""
    if init:
        target = Path.cwd() / CONFIG_FILENAME
        if target.exists():
            console.print(f"[red]Error: {target} already exists[/red]")
            raise typer.Exit(1)
        write_config(create_default_config(), target)
        console.print(f"[green]✓[/green] Created {target}")
        return

    config = resolve_config(config_path)

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("source", str(config.config_path) if config.config_path else "(defaults)")
    table.add_row("max_window_seconds", str(config.max_window_seconds))
    table.add_row("centroid_frame_size", str(config.centroid_frame_size))
    table.add_row("max_file_size_mb", str(config.max_file_size_mb))
    table.add_row("risk_thresholds.medium", str(config.risk_thresholds.medium))
    table.add_row("risk_thresholds.high", str(config.risk_thresholds.high))

    console.print(table)


@app.command("doctor")
def run_doctor() -> None:
    """Check that the audio stack can be imported."""
    console.print("[cyan]Running preflight checks...[/cyan]\n")

    table = Table(title="Dependency Status")
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Version/Details")

    all_passed = True

    for module_name, required in (("numpy", True), ("librosa", True), ("soundfile", False)):
        try:
            module = __import__(module_name)
            table.add_row(module_name, "✓ Installed", getattr(module, "__version__", "unknown"))
        except ImportError as e:
            if required:
                table.add_row(module_name, "✗ Missing", escape(str(e)))
                all_passed = False
            else:
                table.add_row(module_name, "— Optional", "Falls back to audioread decoding")

    try:
        config = load_config(find_config())
        source = str(config.config_path) if config.config_path else "defaults"
        table.add_row("Config", "✓ Valid", source)
    except ConfigError as e:
        table.add_row("Config", "✗ Invalid", escape(str(e)))
        all_passed = False

    console.print(table)

    if all_passed:
        console.print("\n[green]✓ All checks passed[/green]")
    else:
        console.print("\n[yellow]⚠ Some checks failed[/yellow]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
