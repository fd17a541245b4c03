"""Command-line interface for regtables.

Loads a table collection, applies a filter and prints the comparison matrix.
"""

import json
import logging
import sys
from pathlib import Path

import click

from regtables import __version__
from regtables.assemble import build_matrix, detail_tables
from regtables.index import TableIndex, build_index, coarse_sample
from regtables.labels import SAMPLE_LABELS, STAGE_LABELS
from regtables.loader import TableLoadError, load_tables
from regtables.models import (
    SELECTABLE_DEPENDENTS,
    SELECTABLE_UI_MEASURES,
    ControlType,
    FilterRequest,
    IvSample,
    IvStage,
    Spec,
)
from regtables.reporting import MarkdownMatrixRenderer

_SAMPLE_CHOICES = [s.value for s in IvSample if s is not IvSample.UNKNOWN]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _iv_selection(request: FilterRequest) -> str:
    """Describe the selected IV stages and samples."""
    stages = ", ".join(STAGE_LABELS[s] for s in IvStage if s in request.stages)
    samples = ", ".join(
        SAMPLE_LABELS[s] for s in IvSample if s in request.samples and s in SAMPLE_LABELS
    )
    return f"Stages: {stages}\nSamples: {samples}"


def _load_index(tables_file: Path) -> TableIndex:
    try:
        return build_index(load_tables(tables_file))
    except TableLoadError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="regtables")
def cli() -> None:
    """regtables - Regression results explorer.

    Classify regression tables and compare selected columns side by side.
    """
    pass


@cli.command()
@click.argument("tables_file", type=click.Path(path_type=Path))
@click.option(
    "--spec",
    type=click.Choice([s.value for s in Spec]),
    default=Spec.BASELINE.value,
    show_default=True,
    help="Model specification to display.",
)
@click.option(
    "--dep",
    multiple=True,
    type=click.Choice([d.value for d in SELECTABLE_DEPENDENTS]),
    help="Dependent variable(s). Can be specified multiple times.",
)
@click.option(
    "--ui",
    multiple=True,
    type=click.Choice([u.value for u in SELECTABLE_UI_MEASURES]),
    help="UI size measure(s). Can be specified multiple times.",
)
@click.option(
    "--control",
    multiple=True,
    type=click.Choice([c.value for c in ControlType]),
    help="Age control configuration(s). Can be specified multiple times.",
)
@click.option(
    "--stage",
    multiple=True,
    type=click.Choice([s.value for s in IvStage]),
    help="IV stage(s) (default: second).",
)
@click.option(
    "--sample",
    multiple=True,
    type=click.Choice(_SAMPLE_CHOICES),
    help="IV estimation sample(s) (default: whole).",
)
@click.option(
    "--benchmark",
    is_flag=True,
    help="Use the document benchmark selection (3m, average UI, include age).",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["markdown", "json"]),
    default="markdown",
    show_default=True,
    help="Output format.",
)
@click.option("--details", is_flag=True, help="Append source tables for additional outcomes.")
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Write to file.")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
def show(
    tables_file: Path,
    spec: str,
    dep: tuple[str, ...],
    ui: tuple[str, ...],
    control: tuple[str, ...],
    stage: tuple[str, ...],
    sample: tuple[str, ...],
    benchmark: bool,
    output_format: str,
    details: bool,
    output: Path | None,
    verbose: bool,
) -> None:
    """Show the comparison matrix for a selection.

    TABLES_FILE is a JSON, YAML or tablesData.js file of regression tables.

    Examples:

        regtables show tables.json --benchmark

        regtables show tables.json --dep 3m --dep 6m --ui avg_ui_linear

        regtables show tables.json --spec iv --stage first --sample whole
    """
    _configure_logging(verbose)
    index = _load_index(tables_file)

    if benchmark:
        request = FilterRequest.document_benchmark()
    else:
        request = FilterRequest(
            spec=Spec(spec),
            dependents=frozenset(dep),
            ui_measures=frozenset(ui),
            controls=frozenset(control),
            stages=frozenset(stage or [IvStage.SECOND.value]),
            samples=frozenset(sample or [IvSample.WHOLE.value]),
        )

    matrix = build_matrix(request, index)
    extra = detail_tables(request, index) if details else []

    if output_format == "markdown":
        renderer = MarkdownMatrixRenderer()
        preamble = _iv_selection(request) if request.spec is Spec.IV else ""
        if output:
            renderer.write(output, matrix, extra, preamble=preamble)
            click.echo(f"Wrote {output}")
        else:
            click.echo(renderer.render(matrix, extra, preamble=preamble))
        return

    payload = {
        "matrix": matrix.model_dump(mode="json"),
        "details": [t.model_dump(mode="json") for t in extra],
    }
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        click.echo(f"Wrote {output}")
    else:
        click.echo(text)


@cli.command("index")
@click.argument("tables_file", type=click.Path(path_type=Path))
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
def index_command(tables_file: Path, verbose: bool) -> None:
    """List how every table was classified.

    Tables whose dependent variable is not recognised cannot be selected by
    any filter; they are listed separately.
    """
    _configure_logging(verbose)
    index = _load_index(tables_file)

    click.echo(f"{len(index)} tables")
    for record in index:
        controls = ", ".join(f"{k}={c.value}" for k, c in record.column_meta.items()) or "-"
        click.echo(
            f"  #{record.id:<3} {record.spec.value:<8} {record.dep.value:<7} "
            f"{record.ui.value:<14} {coarse_sample(record):<8} {controls}"
        )

    unreachable = index.unreachable()
    if unreachable:
        click.echo(f"\nUnreachable ({len(unreachable)}):")
        for record in unreachable:
            click.echo(f"  #{record.id} {record.table.dependent_variable!r}")
