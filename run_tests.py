#!/usr/bin/env python3
"""
Test runner for capacity reporter tests.
"""

import sys
import os
import subprocess
import argparse

TEST_PATHS = {
    'unit': ['tests/unit/', 'tests/test_promql_queries.py', 'tests/test_prometheus_collector.py'],
    'integration': ['tests/integration/'],
    'e2e': ['tests/e2e/'],
    'all': ['tests/'],
}


def run_tests(test_type='all', verbose=False):
    """Run tests based on type."""

    project_root = os.path.dirname(os.path.abspath(__file__))

    # Build pytest command
    cmd = [sys.executable, '-m', 'pytest']

    if verbose:
        cmd.append('-v')

    if test_type not in TEST_PATHS:
        print(f"Unknown test type: {test_type}")
        return False
    cmd.extend(TEST_PATHS[test_type])

    # Add coverage if available
    try:
        import pytest_cov  # noqa: F401
        cmd.extend(['--cov=capacity_reporter', '--cov-report=term'])
    except ImportError:
        print("Coverage not available, running tests without coverage")

    print(f"Running {test_type} tests...")
    print(f"Command: {' '.join(cmd)}")

    result = subprocess.run(cmd, cwd=project_root)
    return result.returncode == 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description='Run capacity reporter tests')
    parser.add_argument('--type', choices=list(TEST_PATHS),
                        default='all', help='Type of tests to run')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')

    args = parser.parse_args()

    success = run_tests(args.type, args.verbose)

    if success:
        print("✅ All tests passed!")
        sys.exit(0)
    else:
        print("❌ Some tests failed!")
        sys.exit(1)


if __name__ == '__main__':
    main()
