import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .collectors.base import BaseCollector
from .collectors.prometheus import PrometheusCollector
from .core.config import LOG_LEVELS, ReporterConfig, build_config
from .core.errors import CapacityReporterError, ConfigurationError
from .core.promql_queries import get_all_queries
from .core.utils import Deadline, parse_duration

logger = logging.getLogger(__name__)


class CapacityReporter:
    """Queries the four capacity metrics of a cluster and prints them."""

    def __init__(self, config: ReporterConfig, collector: Optional[BaseCollector] = None):
        self.config = config
        self.collector = collector

    def _init_collector(self) -> BaseCollector:
        return PrometheusCollector({
            'url': self.config.thanos_url,
            'disable_ssl': self.config.disable_ssl,
        })

    def run(self) -> Dict[str, int]:
        """Run every capacity query in order, printing each result as it arrives.

        The first failure propagates; lines already printed stay on stdout.

        Returns:
            Mapping of metric label to value
        """
        self.config.validate()
        if self.collector is None:
            self.collector = self._init_collector()

        eval_time = datetime.now(tz=timezone.utc)
        # One deadline bounds the whole run unless per-query timeouts are requested
        deadline = Deadline(self.config.timeout)

        results: Dict[str, int] = {}
        for label, template in get_all_queries().items():
            if self.config.per_query_timeout:
                deadline = Deadline(self.config.timeout)
            logger.debug(f"Querying {label} capacity for cluster {self.config.cluster}")
            value = self.collector.execute_query(
                template, self.config.cluster, eval_time, deadline.remaining()
            )
            results[label] = value
            print(f"{self.config.cluster} cluster {label}: {value}", flush=True)
        return results


def _duration(value: str):
    try:
        return parse_duration(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Report CPU, memory and storage capacity of a cluster from Thanos'
    )
    parser.add_argument('-cluster', '--cluster', default=None,
                        help='cluster name to fetch resource info')
    parser.add_argument('-thanos', '--thanos', default=None,
                        help='thanos query URL')
    parser.add_argument('-timeout', '--timeout', type=_duration, default=None,
                        help='timeout of the thanos queries, e.g. 10s or 1m (default 10s); '
                             'negative values need the -timeout=-1s form')
    parser.add_argument('-per-query-timeout', '--per-query-timeout', action='store_true',
                        help='give each query its own timeout instead of sharing one')
    parser.add_argument('--config', default=None, help='Path to a YAML configuration file')
    parser.add_argument('--log-level', type=str.upper, choices=LOG_LEVELS, default=None,
                        help='Logging level (default WARNING)')
    return parser.parse_args(argv)


def _report_error(message: str) -> None:
    sys.stderr.write(message)
    sys.stderr.flush()


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_arguments(argv)

    try:
        config = build_config(
            cluster=args.cluster,
            thanos=args.thanos,
            timeout=args.timeout,
            per_query_timeout=args.per_query_timeout,
            log_level=args.log_level,
            config_path=args.config,
        )
    except ConfigurationError as e:
        _report_error(str(e))
        return 1

    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    reporter = CapacityReporter(config)
    try:
        reporter.run()
    except ConfigurationError as e:
        _report_error(str(e))
        return 1
    except CapacityReporterError as e:
        logger.debug("Query run aborted", exc_info=True)
        _report_error(f"failed to query thanos: {e}")
        return 1
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == '__main__':
    cli()
