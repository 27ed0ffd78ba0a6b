"""CLI entry point for the vta pipeline.

Usage:
    vta run                          # Video -> frames -> grids (-> analysis)
    vta run-step s02_compose_grids -i '{"frame_list": [...]}'
    vta info                         # Show pipeline steps
    vta plan 90                      # Sampling plan for a 90 s video
    vta show                         # Render a saved grid analysis
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from vta.core.errors import VTAError
from vta.core.logging import setup_logging

app = typer.Typer(name="vta", help="Screen recording to frames, 2x2 grids and an action analysis")
console = Console()

DEFAULT_CONFIG = Path("configs/pipeline.yaml")
DEFAULT_ANALYSIS = Path("content/grid_analysis.json")


def _fail(err: VTAError) -> None:
    console.print(f"[red]Error {escape(f'[{err.code.value}]')}:[/red] {escape(err.message)}")
    raise typer.Exit(1)


@app.command()
def run(
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    log_level: str = typer.Option("INFO", help="Logging level"),
) -> None:
    """Run the full pipeline."""
    setup_logging(log_level)
    from vta.core.pipeline_runner import run_pipeline

    try:
        result = run_pipeline(config)
    except VTAError as err:
        _fail(err)

    table = Table(title="Run summary", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Video", result.video.path.name)
    table.add_row("Duration", f"{result.video.duration:.2f}s ({result.duration_category})")
    table.add_row(
        "Plan",
        f"every {result.sampling_plan.interval_seconds:g}s, max {result.sampling_plan.max_frames} frames",
    )
    table.add_row("Frames", f"{result.frames.frame_count} in {result.frames.frames_dir}")
    table.add_row("Grids", f"{result.grids.grid_count} in {result.grids.grid_dir}")
    if result.analysis is not None:
        table.add_row("Analysis", str(result.analysis.report_path))
    console.print(table)


@app.command()
def run_step(
    step_name: str = typer.Argument(..., help="Step name (e.g. s01_extract_frames)"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    input_json: str = typer.Option(None, "--input", "-i", help="Input as JSON string"),
) -> None:
    """Run a single pipeline step."""
    setup_logging()
    from vta.core.decoder import FFmpegDecoder
    from vta.core.pipeline_runner import (
        import_step_class,
        instantiate_step,
        load_pipeline_config,
        load_step_config,
    )

    pipeline_cfg = load_pipeline_config(config)
    entry = pipeline_cfg.step(step_name)
    if entry is None:
        console.print(f"[red]Step '{step_name}' not found in pipeline config[/red]")
        raise typer.Exit(1)

    step_cls = import_step_class(entry.module)
    step_config = load_step_config(Path(entry.config_file), step_cls.config_type)
    step_instance = instantiate_step(
        step_cls,
        step_config,
        pipeline_cfg.data_root,
        {"decoder": FFmpegDecoder.from_config(pipeline_cfg.decoder)},
    )

    if input_json:
        try:
            input_data = json.loads(input_json)
        except json.JSONDecodeError as exc:
            console.print(f"[red]Invalid --input JSON: {escape(str(exc))}[/red]")
            raise typer.Exit(1)
    else:
        schema = step_cls.input_type.model_json_schema()
        required = schema.get("required", [])
        if required:
            console.print(f"[yellow]Step '{step_name}' requires input fields: {required}[/yellow]")
            console.print("[yellow]Use --input/-i with JSON string, e.g.:[/yellow]")
            console.print(f'  vta run-step {step_name} -i \'{{"field": "value"}}\'')
            raise typer.Exit(1)
        input_data = {}

    try:
        step_input = step_cls.input_type.model_validate(input_data)
    except ValidationError as exc:
        console.print(f"[red]Invalid input for {step_name}:[/red] {escape(str(exc))}")
        raise typer.Exit(1)

    console.print(f"[green]Running step: {step_name}[/green]")
    try:
        output = step_instance.execute(step_input)
    except VTAError as err:
        _fail(err)
    console.print(f"[green]Done. Output:[/green] {output.model_dump_json(indent=2)}")


@app.command()
def info(config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path")) -> None:
    """Show pipeline steps and their status."""
    from vta.core.pipeline_runner import load_pipeline_config
    from vta.utils.subprocess_utils import binary_available

    pipeline_cfg = load_pipeline_config(config)
    table = Table(title=f"Pipeline: {pipeline_cfg.project_name}")
    table.add_column("#", style="dim")
    table.add_column("Step", style="cyan")
    table.add_column("Module", style="green")
    table.add_column("Enabled", style="yellow")
    table.add_column("Depends On", style="dim")

    for i, step in enumerate(pipeline_cfg.steps, 1):
        table.add_row(
            str(i),
            step.name,
            step.module,
            "Y" if step.enabled else "N",
            ", ".join(step.depends_on) if step.depends_on else "-",
        )
    console.print(table)
    console.print(f"Content root: {pipeline_cfg.data_root}  (source: {pipeline_cfg.source_dir})")

    for binary in (pipeline_cfg.decoder.ffmpeg_bin, pipeline_cfg.decoder.ffprobe_bin):
        status = "[green]found[/green]" if binary_available(binary) else "[red]missing[/red]"
        console.print(f"{binary}: {status}")


@app.command()
def plan(duration: float = typer.Argument(..., help="Video duration in seconds")) -> None:
    """Show the sampling plan and frame timestamps for a duration."""
    from vta.core.sampling import classify_duration, duration_category, frame_count, frame_timestamps

    if duration <= 0:
        console.print("[red]Duration must be positive[/red]")
        raise typer.Exit(1)

    sampling = classify_duration(duration)
    count = frame_count(duration, sampling)
    console.print(
        f"[cyan]{duration_category(duration)}[/cyan]: interval {sampling.interval_seconds:g}s, "
        f"max {sampling.max_frames} -> {count} frames, {-(-count // 4)} grids"
    )
    table = Table("Frame", "Timestamp (s)")
    for i, t in enumerate(frame_timestamps(duration, sampling)):
        table.add_row(f"{i:03d}", f"{t:.3f}")
    console.print(table)


@app.command()
def show(path: Path = typer.Argument(DEFAULT_ANALYSIS, help="Saved grid_analysis.json")) -> None:
    """Render a saved grid analysis (read-only)."""
    from vta.steps.s03_analyze_grids._report import parse_analysis

    try:
        analysis = parse_analysis(path.read_text(encoding="utf-8"))
    except OSError as exc:
        console.print(f"[red]Cannot read {path}: {escape(str(exc))}[/red]")
        raise typer.Exit(1)
    except VTAError as err:
        _fail(err)

    uv = analysis.user_view
    console.print(Panel(escape(f"Type: {uv.task_type}\nSummary: {uv.summary}"), title="Task Overview", border_style="cyan"))
    console.print(
        Panel(
            escape("\n".join(f"{i}. {step}" for i, step in enumerate(uv.action_sequence, 1))) or "-",
            title="Action Sequence",
            border_style="green",
        )
    )
    elements = analysis.technical_details.automation_notes.critical_elements
    console.print(
        Panel(escape("\n".join(f"- {e}" for e in elements)) or "-", title="Technical Elements", border_style="yellow")
    )
    if uv.possible_automations:
        console.print(Panel(escape("\n".join(f"- {a}" for a in uv.possible_automations)), title="Possible Automations"))


if __name__ == "__main__":
    app()
