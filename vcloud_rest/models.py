"""
Value types shared by the invoker, the version negotiator and the task poller
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

from .config import DEFAULT_ACCEPT, DEFAULT_API_TIMEOUT
from .exceptions import TaskFailedError, TaskTimeoutError

SESSION_HEADER = "x-vcloud-authorization"
JWT_HEADER = "X-VMWARE-VCLOUD-ACCESS-TOKEN"

_VERSION_RE = re.compile(r"^\d+(\.\d+)*$")

# Parsed response body: lxml element for XML, decoded JSON, or None when empty
Document = Any


class ApiVersion(str):
    """Dotted numeric API version such as ``34.0``"""

    def __new__(cls, value):
        text = str(value).strip()
        if not _VERSION_RE.match(text):
            raise ValueError(f"Invalid API version: {value!r}")
        return super().__new__(cls, text)


@dataclass(frozen=True)
class Credential:
    """Exactly one of a session id or a JWT"""
    session_id: Optional[str] = None
    jwt: Optional[str] = None

    def __post_init__(self):
        if bool(self.session_id) == bool(self.jwt):
            raise ValueError("Credential needs exactly one of session_id or jwt")

    @classmethod
    def from_tokens(cls, session_id: Optional[str] = None,
                    jwt: Optional[str] = None) -> Optional["Credential"]:
        """Pick the session id over the JWT; None when neither is set"""
        if session_id:
            return cls(session_id=session_id)
        if jwt:
            return cls(jwt=jwt)
        return None

    def header(self) -> Dict[str, str]:
        if self.session_id:
            return {SESSION_HEADER: self.session_id}
        return {JWT_HEADER: self.jwt}

    def __repr__(self):
        kind = "session_id" if self.session_id else "jwt"
        return f"Credential({kind}=***)"


@dataclass(frozen=True)
class RequestSpec:
    """A single request against the API.

    ``body`` and ``content_type`` travel together: both set or both unset.
    Empty strings count as unset.
    """
    uri: str
    method: str = "GET"
    content_type: Optional[str] = None
    body: Optional[str] = None
    api_timeout: float = DEFAULT_API_TIMEOUT
    accept: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "method", self.method.strip().upper())
        object.__setattr__(self, "content_type", self.content_type or None)
        object.__setattr__(self, "body", self.body or None)
        object.__setattr__(self, "accept", self.accept or None)

        parts = urlsplit(self.uri)
        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise ValueError(f"URI must be an absolute http(s) URL: {self.uri!r}")
        if (self.body is None) != (self.content_type is None):
            raise ValueError("body and content_type must be supplied together")
        if self.api_timeout <= 0:
            raise ValueError("api_timeout must be positive")

    @property
    def host(self) -> str:
        return urlsplit(self.uri).hostname

    @property
    def has_body(self) -> bool:
        return self.body is not None

    @property
    def accept_type(self) -> str:
        return self.accept or DEFAULT_ACCEPT


@dataclass(frozen=True)
class VersionInfo:
    """One entry of the /api/versions listing"""
    version: str
    deprecated: bool = False

    @property
    def number(self) -> float:
        return float(self.version)


class TaskStatus(Enum):
    """Status values reported by the server for a task"""
    QUEUED = "queued"
    PRE_RUNNING = "preRunning"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"
    CANCELED = "canceled"
    ABORTED = "aborted"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["TaskStatus"]:
        """Map a raw status string to a member, None if unrecognised"""
        for member in cls:
            if member.value == value:
                return member
        return None

    @property
    def is_terminal(self) -> bool:
        return self in (TaskStatus.SUCCESS, TaskStatus.ERROR,
                        TaskStatus.CANCELED, TaskStatus.ABORTED)


class TaskOutcome(Enum):
    """How waiting for a task ended"""
    SUCCESS = "success"
    ERROR = "error"
    CANCELED = "canceled"
    ABORTED = "aborted"
    TIMED_OUT = "timed_out"

    @classmethod
    def from_status(cls, status: TaskStatus) -> "TaskOutcome":
        return cls(status.value)


@dataclass
class TaskResult:
    """Result of waiting for a task. Truthy only when the task succeeded."""
    href: str
    outcome: TaskOutcome
    last_status: Optional[str] = None
    polls: int = 0
    error_message: Optional[str] = None
    operation: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is TaskOutcome.SUCCESS

    @property
    def timed_out(self) -> bool:
        return self.outcome is TaskOutcome.TIMED_OUT

    def __bool__(self):
        return self.succeeded

    def raise_for_outcome(self) -> None:
        """Raise TaskTimeoutError or TaskFailedError unless the task succeeded"""
        details = {'href': self.href, 'last_status': self.last_status, 'polls': self.polls}
        if self.timed_out:
            raise TaskTimeoutError(
                f"Task {self.href} still {self.last_status} after {self.polls} polls",
                code=self.outcome.value, details=details)
        if not self.succeeded:
            message = f"Task {self.href} ended with status {self.outcome.value}"
            if self.error_message:
                message += f": {self.error_message}"
            raise TaskFailedError(message, code=self.outcome.value, details=details)
