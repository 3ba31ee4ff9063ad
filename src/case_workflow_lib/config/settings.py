"""Environment-driven settings for the workflow client.

Environment Variables:
    WORKFLOW_API_BASE_URL: Workflow API base URL (default: http://localhost:8000)
    WORKFLOW_API_TIMEOUT: Request timeout in seconds (default: 30)
    WORKFLOW_BULK_CAPABLE_ROLES: Comma-separated roles limited to VIEW and
        DIRECT_APPROVE (default: DIRECT_APPROVER)
    WORKFLOW_READ_RETRY_ATTEMPTS: Attempts for idempotent reads (default: 3)
"""

import logging
import os
from typing import Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 30.0
DEFAULT_BULK_CAPABLE_ROLES: Tuple[str, ...] = ("DIRECT_APPROVER",)
DEFAULT_READ_RETRY_ATTEMPTS = 3


def _parse_roles(roles_str: str) -> Tuple[str, ...]:
    """Parse a comma-separated role list.

    Example:
        >>> _parse_roles("direct_approver, QUALITY_LEAD")
        ('DIRECT_APPROVER', 'QUALITY_LEAD')
    """
    return tuple(role.strip().upper() for role in roles_str.split(",") if role.strip())


class WorkflowClientSettings:
    """Settings for the workflow client and transition orchestrator.

    Explicit constructor arguments win over environment variables, which win
    over defaults. Invalid values are logged and replaced with the default.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        bulk_capable_roles: Optional[Iterable[str]] = None,
        read_retry_attempts: Optional[int] = None,
    ):
        self.base_url = (base_url or os.getenv("WORKFLOW_API_BASE_URL", DEFAULT_BASE_URL)).rstrip("/")

        if timeout is None:
            timeout_str = os.getenv("WORKFLOW_API_TIMEOUT", str(DEFAULT_TIMEOUT))
            try:
                timeout = float(timeout_str)
            except ValueError:
                logger.warning(f"Invalid WORKFLOW_API_TIMEOUT '{timeout_str}', defaulting to {DEFAULT_TIMEOUT}")
                timeout = DEFAULT_TIMEOUT
        self.timeout = timeout

        if bulk_capable_roles is None:
            roles_str = os.getenv("WORKFLOW_BULK_CAPABLE_ROLES")
            bulk_capable_roles = _parse_roles(roles_str) if roles_str else DEFAULT_BULK_CAPABLE_ROLES
        self.bulk_capable_roles = tuple(role.upper() for role in bulk_capable_roles)

        if read_retry_attempts is None:
            attempts_str = os.getenv("WORKFLOW_READ_RETRY_ATTEMPTS", str(DEFAULT_READ_RETRY_ATTEMPTS))
            try:
                read_retry_attempts = int(attempts_str)
            except ValueError:
                logger.warning(
                    f"Invalid WORKFLOW_READ_RETRY_ATTEMPTS '{attempts_str}', "
                    f"defaulting to {DEFAULT_READ_RETRY_ATTEMPTS}"
                )
                read_retry_attempts = DEFAULT_READ_RETRY_ATTEMPTS
        self.read_retry_attempts = max(1, read_retry_attempts)

        logger.info(
            f"WorkflowClientSettings initialized: base_url={self.base_url}, "
            f"timeout={self.timeout}, bulk_capable_roles={list(self.bulk_capable_roles)}"
        )


# Singleton instance for global access
_settings_instance: Optional[WorkflowClientSettings] = None


def get_settings() -> WorkflowClientSettings:
    """Get or create the global WorkflowClientSettings instance."""
    global _settings_instance

    if _settings_instance is None:
        _settings_instance = WorkflowClientSettings()

    return _settings_instance


def reset_settings():
    """Reset the global settings instance.

    Used for testing or reconfiguration.
    """
    global _settings_instance
    _settings_instance = None
    logger.warning("WorkflowClientSettings instance reset")
