"""JSON and CSV output for grouped catalogs."""

import csv
import json
import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import TextIO

from .errors import InvalidFormatError, WriteError
from .models import PRODUCT_FIELDS, GroupedCatalog

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    JSON = "json"
    CSV = "csv"

    @classmethod
    def parse(cls, value: "str | OutputFormat") -> "OutputFormat":
        """Resolve a format name, raising InvalidFormatError if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidFormatError(str(value)) from None


def output_path(directory: Path, file_name: str, fmt: OutputFormat) -> Path:
    """Get the output file path for a format."""
    return directory / f"{file_name}.{fmt.value}"


@contextmanager
def _atomic_open(path: Path, newline: str | None = None) -> Iterator[TextIO]:
    """Open a temp file beside path, moving it into place on success."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline=newline) as f:
            yield f
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def write_json(catalog: GroupedCatalog, path: Path) -> None:
    """Write the catalog as an indented JSON object keyed by category."""
    data = {
        category: [product.to_record() for product in products]
        for category, products in catalog.items()
    }
    try:
        with _atomic_open(path) as f:
            json.dump(data, f, indent=2, ensure_ascii=False, allow_nan=False)
    except (OSError, ValueError) as e:
        # ValueError: a NaN or infinite value has no JSON form
        logger.error(f"Failed to save JSON file {path}: {e}")
        raise WriteError(f"Failed to save JSON file {path}: {e}", path) from e

    logger.info(f"JSON file saved to {path}")


def write_csv(catalog: GroupedCatalog, path: Path) -> None:
    """Write one header row, then one row per product in catalog order."""
    try:
        with _atomic_open(path, newline="") as f:
            writer = csv.DictWriter(f, fieldnames=PRODUCT_FIELDS)
            writer.writeheader()
            for products in catalog.values():
                for product in products:
                    writer.writerow(product.to_record())
    except OSError as e:
        logger.error(f"Failed to save CSV file {path}: {e}")
        raise WriteError(f"Failed to save CSV file {path}: {e}", path) from e

    logger.info(f"CSV file saved to {path}")


WRITERS = {
    OutputFormat.JSON: write_json,
    OutputFormat.CSV: write_csv,
}


def write_catalog(
    catalog: GroupedCatalog,
    directory: Path,
    file_name: str,
    fmt: "str | OutputFormat",
) -> Path:
    """Write the catalog in the requested format and return the file path."""
    fmt = OutputFormat.parse(fmt)
    path = output_path(directory, file_name, fmt)
    WRITERS[fmt](catalog, path)
    return path
