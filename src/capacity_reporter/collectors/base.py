from abc import ABC, abstractmethod
from typing import Dict, Any
from datetime import datetime


class BaseCollector(ABC):
    """Base class for capacity metric collectors."""

    def __init__(self, config: Dict[str, Any]):
        """Initialize the collector with configuration.

        Args:
            config: Collector-specific configuration dictionary
        """
        self.config = config

    @abstractmethod
    def execute_query(self,
                      template: str,
                      cluster: str,
                      eval_time: datetime,
                      timeout: float) -> int:
        """Run one instant query and reduce the result to an integer.

        Args:
            template: Query template with a single ``%s`` for the cluster
            cluster: Cluster name substituted into the template
            eval_time: Evaluation timestamp of the instant query
            timeout: Seconds the call may take

        Returns:
            Truncated value of the first sample

        Raises:
            QueryExecutionError: If the backend cannot answer the query
            ResultExtractionError: If the response cannot be reduced to a value
        """
        pass
