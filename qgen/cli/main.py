"""Typer-based CLI entry points for checking mix files and planning workloads."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional

import typer

# ---- project imports ----
from qgen.emit.yaml_emit import write_plan
from qgen.errors import ConfigError, TemplateNotFound
from qgen.loader import load_index
from qgen.log import setup_logging
from qgen.sampler import TemplateSelector, summarize_plan
from qgen.settings import load_settings
from qgen.templates import DEFAULT_TOLERANCE, OperationKind, Template, TemplateIndex

# -----------------------------------------------------------------------------
# Typer app
# -----------------------------------------------------------------------------
app = typer.Typer(help="Weighted query-template selection for synthetic workloads.")


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None, help="Logging level (DEBUG, INFO, WARNING, ERROR)."
    ),
) -> None:
    """Configure logging shared by every command."""
    ctx.obj = {"log_level": log_level}
    _configure_logging(log_level or "WARNING")


# -----------------------------------------------------------------------------
# Utility helpers (shared by commands)
# -----------------------------------------------------------------------------
def _configure_logging(level: str) -> None:
    try:
        setup_logging(level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _fail(exc: Exception) -> NoReturn:
    """Report a fatal error and stop with a non-zero exit status."""
    typer.echo(f"error: {exc}", err=True)
    raise typer.Exit(code=1)


def _load(mix: Path, tolerance: float) -> TemplateIndex:
    try:
        return load_index(mix, tolerance=tolerance)
    except ConfigError as exc:
        _fail(exc)


def _interval(floor: float, template: Template) -> str:
    attrs = " ".join(template.attributes) or "-"
    return f"]{floor:g}, {template.roof:g}] {attrs}"


def _ensure_parent_dir(path: Path) -> None:
    """Create the parent directory for `path` if needed."""
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)


# -----------------------------------------------------------------------------
# CHECK: validate a mix file and print its intervals
# -----------------------------------------------------------------------------
@app.command(name="check")
def check(
    mix: Path = typer.Option(..., help="Mix file with kind percentages and templates."),
    tolerance: float = typer.Option(
        DEFAULT_TOLERANCE, help="Absolute tolerance for 100.0 checks (0 = exact)."
    ),
) -> None:
    """Build the template index and print each kind's intervals."""
    index = _load(mix, tolerance)
    for kind in OperationKind:
        templates = index.templates(kind)
        typer.echo(
            f"{kind.label:<7} {index.mix.share(kind):g}% ({len(templates)} template(s))"
        )
        floor = 0.0
        for template in templates:
            typer.echo(f"  {_interval(floor, template)}")
            floor = template.roof
    typer.echo(f"[check] {mix} OK: {len(index)} template(s)")


# -----------------------------------------------------------------------------
# LOOKUP: resolve a single draw
# -----------------------------------------------------------------------------
@app.command(name="lookup")
def lookup(
    mix: Path = typer.Option(..., help="Mix file with kind percentages and templates."),
    kind: str = typer.Option(..., help="Operation kind: I/M/S or insert/modify/search."),
    draw: float = typer.Option(..., help="Percentage draw in (0, 100]."),
    tolerance: float = typer.Option(DEFAULT_TOLERANCE, help="Absolute tolerance for 100.0 checks."),
) -> None:
    """Print the template owning ``draw`` for the given kind."""
    try:
        op_kind = OperationKind.coerce(kind)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc
    index = _load(mix, tolerance)
    try:
        template = index.lookup(op_kind, draw)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except TemplateNotFound as exc:
        _fail(exc)
    typer.echo(f"{op_kind.label} roof={template.roof:g} attributes={' '.join(template.attributes)}")


# -----------------------------------------------------------------------------
# PLAN: sample a sequence of operations and write it to YAML
# -----------------------------------------------------------------------------
@app.command(name="plan")
def plan(
    ctx: typer.Context,
    mix: Path = typer.Option(..., help="Mix file with kind percentages and templates."),
    out: Path = typer.Option(Path("plan.yaml"), help="Output plan YAML."),
    n: Optional[int] = typer.Option(None, help="Number of operations (default 10)."),
    seed: Optional[int] = typer.Option(None, help="Sampling seed (default 0)."),
    tolerance: Optional[float] = typer.Option(None, help="Absolute tolerance for 100.0 checks."),
    settings: Optional[Path] = typer.Option(None, help="Optional YAML with generation settings."),
    summary: bool = typer.Option(False, help="Print expected vs observed template shares."),
) -> None:
    """Draw ``n`` operations from the mix and persist them."""
    try:
        run = load_settings(settings).override(
            n=n,
            seed=seed,
            tolerance=tolerance,
            log_level=(ctx.obj or {}).get("log_level"),
        )
    except ConfigError as exc:
        _fail(exc)
    _configure_logging(run.log_level)
    if run.n < 0:
        raise typer.BadParameter("n must be non-negative")

    index = _load(mix, run.tolerance)
    selector = TemplateSelector(index, seed=run.seed)
    operations = selector.plan(run.n)

    _ensure_parent_dir(out)
    write_plan(out, operations, index.mix)
    typer.echo(f"[plan] Wrote {len(operations)} operation(s) to {out}")
    if summary:
        frame = summarize_plan(index, operations)
        typer.echo(frame.to_string(index=False, float_format=lambda x: f"{x:.2f}"))


# Allow `python -m qgen.cli.main` direct execution
if __name__ == "__main__":
    app()
