"""CLI for Fakestore Catalog."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import load_config
from .errors import CatalogError
from .log import configure_logging
from .pipeline import Pipeline
from .writer import OutputFormat

console = Console()
error_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def get_project_root() -> Path:
    """Get the project root directory (current working directory)."""
    return Path.cwd()


@click.command()
@click.version_option(version=__version__, prog_name="fakestore")
@click.option(
    "--format",
    "output_format",
    type=click.Choice([fmt.value for fmt in OutputFormat], case_sensitive=False),
    default=OutputFormat.JSON.value,
    help="Output format",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the output file (default: files/)",
)
@click.option("--base-url", default=None, help="Override the API base URL")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def main(output_format: str, output_dir: Path | None, base_url: str | None, verbose: bool) -> None:
    """Fakestore Catalog - fetch products, enrich them and save them grouped by category."""
    project_root = get_project_root()

    try:
        config = load_config(project_root)
    except (OSError, ValueError) as e:
        # pydantic ValidationError and json.JSONDecodeError are ValueErrors
        error_console.print(f"[red]Error:[/red] Invalid configuration: {e}")
        sys.exit(1)

    if base_url:
        config = config.model_copy(update={"base_url": base_url})

    try:
        configure_logging(project_root / config.log_file, verbose=verbose)
    except OSError as e:
        error_console.print(f"[red]Error:[/red] Cannot open log file {config.log_file}: {e}")
        sys.exit(1)

    output_dir = output_dir or project_root / config.output_dir

    try:
        with Pipeline(config, output_dir=output_dir) as pipeline:
            result = pipeline.run(output_format)
    except CatalogError as e:
        logger.error(f"An error occurred during the execution of the program: {e}")
        sys.exit(1)
    except Exception:
        logger.exception("An unexpected error occurred during the execution of the program.")
        sys.exit(1)

    table = Table(title="Catalog Written")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Output file", str(result.path))
    table.add_row("Format", result.output_format.value)
    table.add_row("Categories", str(result.category_count))
    table.add_row("Products", str(result.product_count))

    console.print(table)


if __name__ == "__main__":
    main()
