"""
Pytest configuration for capacity reporter tests.
"""

import sys
import os
import pytest

# Add the source directory to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(project_root, 'src'))

# Configure logging for tests
import logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def vector(*values, cluster='prod'):
    """Build an instant-query vector result with one sample per value."""
    return [
        {
            'metric': {'cluster': cluster},
            'value': [1700000000.0, str(v)]
        }
        for v in values
    ]


@pytest.fixture
def make_vector():
    """Factory for instant-query vector results."""
    return vector


@pytest.fixture
def test_config():
    """Provide a valid reporter configuration."""
    from capacity_reporter.core.config import ReporterConfig
    return ReporterConfig(cluster='prod', thanos_url='http://thanos.example:9090')
