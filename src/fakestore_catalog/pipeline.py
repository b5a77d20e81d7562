"""Run orchestration: fetch, transform and write one catalog."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import httpx

from .cache import TTLCache
from .config import CatalogConfig
from .fetcher import ProductFetcher
from .models import GroupedCatalog
from .retry import RetryEvent
from .transformer import RandomSource, Transformer
from .writer import OutputFormat, write_catalog

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of a successful run."""

    path: Path
    output_format: OutputFormat
    catalog: GroupedCatalog

    @property
    def category_count(self) -> int:
        return len(self.catalog)

    @property
    def product_count(self) -> int:
        return sum(len(products) for products in self.catalog.values())


class Pipeline:
    """Owns the collaborators for one fetch -> transform -> write run."""

    def __init__(
        self,
        config: CatalogConfig,
        output_dir: Path | None = None,
        client: httpx.Client | None = None,
        cache: TTLCache | None = None,
        rng: RandomSource | None = None,
        sleep: Callable[[float], None] = time.sleep,
        on_retry: Callable[[RetryEvent], None] | None = None,
    ):
        self.config = config
        self.output_dir = output_dir or Path(config.output_dir)
        self._owns_client = client is None
        self.client = client or httpx.Client()
        self.cache = cache if cache is not None else TTLCache()
        self.fetcher = ProductFetcher(
            self.client,
            self.cache,
            config,
            sleep=sleep,
            on_retry=on_retry,
        )
        self.transformer = Transformer(config, rng)

    def run(self, output_format: "str | OutputFormat" = OutputFormat.JSON) -> RunResult:
        """
        Fetch, enrich, group and write the catalog.

        Raises:
            InvalidFormatError: Before any I/O if the format is unknown
            FetchError: If the products cannot be fetched
            WriteError: If the output file cannot be written
        """
        fmt = OutputFormat.parse(output_format)

        self.output_dir.mkdir(parents=True, exist_ok=True)

        products = self.fetcher.fetch_products()
        catalog = self.transformer.transform(products)
        path = write_catalog(catalog, self.output_dir, self.config.file_name, fmt)

        logger.info("Completed")
        return RunResult(path=path, output_format=fmt, catalog=catalog)

    def close(self) -> None:
        """Close the HTTP client if this pipeline created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "Pipeline":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
