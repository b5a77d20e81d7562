"""Product list fetching with retries and caching."""

import json
import logging
import time
from collections.abc import Callable

import httpx
from pydantic import ValidationError

from . import CACHE_KEY
from .cache import TTLCache
from .config import CatalogConfig
from .errors import FetchError
from .models import RawProduct
from .retry import RetryEvent, RetryState

logger = logging.getLogger(__name__)


def products_url(base_url: str) -> str:
    """Join the base URL and the products resource."""
    return f"{base_url.rstrip('/')}/products"


def parse_products(body: str) -> list[RawProduct]:
    """Parse a response body into raw products.

    Raises:
        FetchError: If the body is not a JSON array of objects
    """
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise FetchError(f"Failed to parse JSON response: {e}", reason="parse-error") from e

    if not isinstance(data, list):
        raise FetchError(
            f"Expected a JSON array of products, got {type(data).__name__}",
            reason="parse-error",
        )

    products = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise FetchError(
                f"Product at index {index} is not a JSON object",
                reason="parse-error",
            )
        try:
            products.append(RawProduct.model_validate(item))
        except ValidationError as e:
            raise FetchError(
                f"Product at index {index} has invalid fields: {e.error_count()} error(s)",
                reason="parse-error",
            ) from e
    return products


class ProductFetcher:
    """Fetches the product list, consulting the cache first."""

    def __init__(
        self,
        client: httpx.Client,
        cache: TTLCache,
        config: CatalogConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
        on_retry: Callable[[RetryEvent], None] | None = None,
    ):
        self.client = client
        self.cache = cache
        self.config = config or CatalogConfig()
        self.sleep = sleep
        self.on_retry = on_retry

    @property
    def url(self) -> str:
        return products_url(self.config.base_url)

    def fetch_products(self) -> list[RawProduct]:
        """
        Get all products, from cache when possible.

        Returns:
            List of raw products (possibly empty)

        Raises:
            FetchError: On exhausted retries, transport failure or unparseable body
        """
        cached = self.cache.get(CACHE_KEY)
        if cached is not None:
            logger.info("Products retrieved from cache")
            return cached

        response, attempts = self._get_with_retry()

        try:
            products = parse_products(response.text)
        except FetchError as e:
            e.attempts = attempts
            logger.error(f"GET {self.url} returned an unparseable body: {e}")
            raise

        self.cache.set(CACHE_KEY, products, self.config.cache_ttl)
        logger.info(f"GET products OK ({len(products)} products)")
        return products

    def _send(self) -> httpx.Response:
        # New request per attempt
        request = self.client.build_request(
            "GET", self.url, headers={"Accept": "application/json"}
        )
        return self.client.send(request)

    def _get_with_retry(self) -> tuple[httpx.Response, int]:
        """Send the request until it succeeds or attempts run out.

        Returns the successful response and the number of attempts used.
        """
        state = RetryState(max_attempts=self.config.retry_count)

        while True:
            status_code: int | None = None
            error: httpx.TransportError | None = None

            try:
                response = self._send()
            except httpx.TransportError as e:
                error = e
            else:
                if response.is_success:
                    return response, state.attempt
                status_code = response.status_code

            attempt = state.attempt
            delay = state.record_failure()

            if delay is None:
                if error is not None:
                    logger.error(f"HTTP request failed after {attempt} attempt(s): {error!r}")
                    raise FetchError(
                        f"Failed to fetch data from the API: {error}",
                        reason="transport-error",
                        attempts=attempt,
                    ) from error
                logger.error(
                    f"API request failed with status code {status_code} after {attempt} attempt(s)"
                )
                raise FetchError(
                    f"Failed to fetch data from the API. Status code: {status_code}",
                    reason="exhausted-retries",
                    status_code=status_code,
                    attempts=attempt,
                )

            if error is not None:
                logger.warning(f"Retry {attempt}: {error!r} after {delay:g} seconds.")
            else:
                logger.warning(f"Retry {attempt}: HTTP Status {status_code} after {delay:g} seconds.")
            if self.on_retry:
                self.on_retry(
                    RetryEvent(attempt=attempt, delay=delay, status_code=status_code, error=error)
                )
            self.sleep(delay)
