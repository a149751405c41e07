"""
Gridiron Recap — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Execute action.
  4. Report result to stdout; errors go to stderr with exit code 1.

Install and run::

    pip install -e .
    gridiron-recap --help
    gridiron-recap validate-config
    gridiron-recap run
    gridiron-recap run --html-file data/raw/winners.html --top-n 3 --no-chart
    gridiron-recap split-result "Green Bay 35, Kansas City 10"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="gridiron-recap",
    help="Scrape Super Bowl results and pick the closest games to rewatch.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from gridiron_recap.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from gridiron_recap.utils.logging import configure_logging
    configure_logging(config.logging)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("run")
def run(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
    html_file: Optional[str] = typer.Option(
        None,
        "--html-file",
        help="Read a saved copy of the results page instead of fetching it.",
    ),
    top_n: Optional[int] = typer.Option(
        None,
        "--top-n",
        min=1,
        help="Number of close games to recommend (default: config.report.top_n).",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Override config.report.output_dir.",
    ),
    no_chart: bool = typer.Option(
        False,
        "--no-chart",
        help="Skip rendering the category bar chart.",
    ),
) -> None:
    """Run the full pipeline: fetch, normalize, derive, report.

    Prints spread statistics and the recommendation table, and writes
    CSV/JSON outputs (plus a PNG chart) to the output directory.
    """
    from gridiron_recap.pipeline.orchestrator import PipelineOrchestrator
    from gridiron_recap.reporting.formatters import (
        format_recommendations_table,
        format_spread_summary,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    if html_file and not Path(html_file).exists():
        typer.echo(f"[ERROR] HTML file not found: {html_file}", err=True)
        raise typer.Exit(code=1)

    try:
        result = PipelineOrchestrator(config).run(
            html_file=html_file,
            top_n=top_n,
            output_dir=output_dir,
            render_chart=not no_chart,
        )
    except Exception as exc:
        typer.echo(f"[ERROR] Pipeline failed: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_spread_summary(result.summary, source=result.source))
    typer.echo(format_recommendations_table(result.recommendations))
    typer.echo("")
    for path in result.written_files:
        typer.echo(f"  Wrote: {path}")
    typer.echo("[OK] Pipeline complete.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Source URL:   {config.source.url}")
    typer.echo(f"  Header row:   {config.normalize.header_row}")
    typer.echo(f"  Quantiles:    {config.derive.low_quantile} / {config.derive.high_quantile}")
    typer.echo(f"  Top N:        {config.report.top_n}")
    typer.echo(f"  Output dir:   {config.report.output_dir}")
    typer.echo(f"  Log level:    {config.logging.level}")
    typer.echo(f"  Debug mode:   {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("split-result")
def split_result_cmd(
    text: str = typer.Argument(..., help='Result string, e.g. "Green Bay 35, Kansas City 10".'),
) -> None:
    """Split a single result string into team and score fields."""
    from gridiron_recap.pipeline.derive import ResultParseError, split_result
    from gridiron_recap.reporting.formatters import format_parsed_result

    try:
        parsed = split_result(text)
    except ResultParseError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_parsed_result(parsed))


if __name__ == "__main__":
    app()
