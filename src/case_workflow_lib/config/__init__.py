"""Configuration Module

Environment-driven settings for the workflow client.
"""

from .settings import (
    WorkflowClientSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "WorkflowClientSettings",
    "get_settings",
    "reset_settings",
]
