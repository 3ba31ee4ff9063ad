"""Utility Functions"""

from case_workflow_lib.utils.resilience import create_read_retry

__all__ = [
    "create_read_retry",
]
