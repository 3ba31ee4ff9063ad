"""HTTP clients for the workflow API."""

from case_workflow_lib.clients.base import BaseServiceClient
from case_workflow_lib.clients.workflow_client import WorkflowServiceClient

__all__ = [
    "BaseServiceClient",
    "WorkflowServiceClient",
]
