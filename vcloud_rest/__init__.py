"""
vcloud-rest - VMware Cloud Director request invoker
Authenticated REST calls, API version negotiation and task polling
"""

__version__ = "0.1.0"

from .config import InvokerSettings
from .exceptions import (VCloudError, AuthenticationMissingError, RequestFailedError,
                         NoVersionsAvailableError, NoTaskToAwait, TaskFailedError,
                         TaskTimeoutError)
from .invoker import RequestInvoker, invoke
from .models import (ApiVersion, Credential, RequestSpec, TaskOutcome, TaskResult,
                     TaskStatus, VersionInfo)
from .session import SessionRegistry
from .tasks import TaskPoller
from .versions import get_highest_supported_version

__all__ = [
    "invoke",
    "get_highest_supported_version",
    "RequestInvoker",
    "TaskPoller",
    "InvokerSettings",
    "SessionRegistry",
    "ApiVersion",
    "Credential",
    "RequestSpec",
    "TaskOutcome",
    "TaskResult",
    "TaskStatus",
    "VersionInfo",
    "VCloudError",
    "AuthenticationMissingError",
    "RequestFailedError",
    "NoVersionsAvailableError",
    "NoTaskToAwait",
    "TaskFailedError",
    "TaskTimeoutError",
]
