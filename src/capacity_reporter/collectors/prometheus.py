from typing import Dict, Any, List
from datetime import datetime
from urllib.parse import urlparse
import logging
import math

import requests
from prometheus_api_client import PrometheusConnect
from prometheus_api_client.exceptions import PrometheusApiClientException
from urllib3.util.retry import Retry

from .base import BaseCollector
from ..core.errors import (
    CollectorInitError,
    EmptyResultError,
    InvalidSampleValueError,
    QueryExecutionError,
    QueryTimeoutError,
    UnexpectedResponseShapeError,
)
from ..core.promql_queries import render_query

logger = logging.getLogger(__name__)

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


def extract_scalar(result: List[Any]) -> int:
    """Reduce an instant-query vector to the truncated value of its first sample.

    Args:
        result: The ``data.result`` list of an instant query response

    Returns:
        First sample value truncated toward zero

    Raises:
        UnexpectedResponseShapeError: If the result is not a vector
        EmptyResultError: If the vector has no samples
        InvalidSampleValueError: If the value is NaN, infinite or exceeds int64
    """
    # Vector samples are {"metric": {...}, "value": [ts, "v"]}; scalars and
    # strings arrive as a bare [ts, "v"] pair, matrices carry "values".
    if not isinstance(result, list) or not all(
        isinstance(sample, dict) and 'value' in sample for sample in result
    ):
        raise UnexpectedResponseShapeError(
            f"unexpected response shape, expected a vector but got {type(result).__name__}: {result!r}"
        )
    if len(result) == 0:
        raise EmptyResultError()

    pair = result[0]['value']
    if not isinstance(pair, (list, tuple)) or len(pair) != 2:
        raise UnexpectedResponseShapeError(f"malformed sample value: {pair!r}")
    try:
        value = float(pair[1])
    except (TypeError, ValueError) as e:
        raise UnexpectedResponseShapeError(f"sample value is not numeric: {pair[1]!r}") from e

    if not math.isfinite(value):
        raise InvalidSampleValueError(f"sample value {pair[1]} cannot be converted to an integer")
    truncated = int(value)
    if not INT64_MIN <= truncated <= INT64_MAX:
        raise InvalidSampleValueError(f"sample value {pair[1]} is outside the int64 range")
    return truncated


class PrometheusCollector(BaseCollector):
    """Instant-query client for a Thanos or Prometheus query API."""

    def __init__(self, config: Dict[str, Any]):
        """Initialize the collector.

        Args:
            config: Dictionary with ``url`` and optionally ``disable_ssl``

        Raises:
            CollectorInitError: If the URL is not an absolute http(s) address
        """
        super().__init__(config)
        url = config.get('url') or ""
        parsed = urlparse(url)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise CollectorInitError(f"invalid thanos query URL {url!r}")

        try:
            self.prom = PrometheusConnect(
                url=url,
                disable_ssl=config.get('disable_ssl', False),
                # Each query is attempted exactly once
                retry=Retry(total=0, read=False, raise_on_status=False),
            )
        except (TypeError, ValueError) as e:
            raise CollectorInitError(str(e)) from e
        logger.debug(f"Initialized PrometheusCollector with URL: {url}")

    def execute_query(self,
                      template: str,
                      cluster: str,
                      eval_time: datetime,
                      timeout: float) -> int:
        promql = render_query(template, cluster)
        logger.debug(f"Querying {promql} at {eval_time.isoformat()} (timeout {timeout:.3f}s)")
        try:
            result = self.prom.custom_query(
                query=promql,
                params={'time': eval_time.timestamp()},
                timeout=timeout,
            )
        except requests.Timeout as e:
            raise QueryTimeoutError(f"context deadline exceeded: {e}") from e
        except requests.RequestException as e:
            raise QueryExecutionError(str(e)) from e
        except PrometheusApiClientException as e:
            raise QueryExecutionError(str(e)) from e
        # Raised while reading data.result out of a 200 reply without that structure
        except (KeyError, TypeError) as e:
            raise UnexpectedResponseShapeError(
                f"unexpected response shape, missing data.result: {e!r}"
            ) from e

        logger.debug(f"Query returned {len(result) if isinstance(result, list) else 'non-list'} series")
        return extract_scalar(result)
