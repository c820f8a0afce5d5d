"""CLI entry point for epic-layout."""

import json
import logging
import sys

import click

from epic_layout.config import DEFAULT_BATCH_LAYOUT_CONFIG, DEFAULT_LAYOUT_CONFIG
from epic_layout.errors import DocumentError, LayoutError
from epic_layout.ir.epic import Epic
from epic_layout.layout.epic import layout_epic
from epic_layout.renderers.svg import SvgRenderer


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option(
    "--format", "-f", "fmt", type=click.Choice(["json", "svg"]), default="json", help="Output format (default json)"
)
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--cell-width", type=float, default=None, help="Task card width in pixels")
@click.option("--cell-height", type=float, default=None, help="Task card height in pixels")
@click.option("--horizontal-gap", type=float, default=None, help="Gap between task columns")
@click.option("--vertical-gap", type=float, default=None, help="Gap between task rows")
@click.option("--verbose", "-v", is_flag=True, help="Log layout decisions to stderr")
def main(
    input: str | None,
    fmt: str,
    output: str | None,
    cell_width: float | None,
    cell_height: float | None,
    horizontal_gap: float | None,
    vertical_gap: float | None,
    verbose: bool,
) -> None:
    """Lay out a GitHub epic document (JSON) as batches of dependent tasks."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if input:
        try:
            with open(input) as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    overrides = {
        "cell_width": cell_width,
        "cell_height": cell_height,
        "horizontal_gap": horizontal_gap,
        "vertical_gap": vertical_gap,
    }
    try:
        task_config = DEFAULT_LAYOUT_CONFIG.replace(**{k: v for k, v in overrides.items() if v is not None})
    except LayoutError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    try:
        epic = Epic.from_dict(json.loads(text))
    except json.JSONDecodeError as e:
        click.echo(f"error: invalid JSON: {e}", err=True)
        sys.exit(1)
    except DocumentError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    try:
        result = layout_epic(epic, task_config, DEFAULT_BATCH_LAYOUT_CONFIG)
    except LayoutError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    if fmt == "svg":
        rendered = SvgRenderer().render(epic, result)
    else:
        rendered = json.dumps(result.to_dict(), indent=2)

    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered)


if __name__ == "__main__":
    main()
