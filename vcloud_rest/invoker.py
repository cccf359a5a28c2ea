"""
Authenticated single-request invocation with optional wait for the resulting task
"""

import logging
import time
import warnings
from typing import Callable, Dict, Mapping, Optional, Union

import httpx

from .config import DEFAULT_API_TIMEOUT, DEFAULT_TASK_TIMEOUT, InvokerSettings
from .exceptions import AuthenticationMissingError, NoTaskToAwait
from .models import (ApiVersion, Credential, Document, RequestSpec, TaskResult,
                     SESSION_HEADER)
from .session import SessionRegistry
from .tasks import ProgressCallback, TaskPoller
from .transport import build_client, parse_document, send, task_href
from .versions import get_highest_supported_version

logger = logging.getLogger(__name__)


class RequestInvoker:
    """Sends one authenticated request to vCloud Director.

    Authentication is resolved in this order: an active session for the
    request host in ``sessions``, then the explicit credential. Without
    either, AuthenticationMissingError is raised before anything is sent.
    """

    def __init__(self, sessions: Optional[Mapping[str, str]] = None,
                 settings: Optional[InvokerSettings] = None,
                 transport: Optional[httpx.BaseTransport] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 progress: Optional[ProgressCallback] = None):
        if isinstance(sessions, SessionRegistry):
            self.sessions = sessions
        else:
            self.sessions = SessionRegistry(sessions)
        self.settings = settings or InvokerSettings()
        self.transport = transport
        self.sleep = sleep
        self.progress = progress

    def resolve_auth_header(self, spec: RequestSpec,
                            credential: Optional[Credential]) -> Dict[str, str]:
        token = self.sessions.token_for(spec.host)
        if token:
            logger.debug(f"Using active session for {spec.host}")
            return {SESSION_HEADER: token}
        if credential is not None:
            return credential.header()
        raise AuthenticationMissingError(
            f"No session for {spec.host} and no session id or JWT supplied",
            details={'uri': spec.uri})

    @staticmethod
    def build_headers(spec: RequestSpec, api_version: ApiVersion,
                      auth_header: Dict[str, str]) -> Dict[str, str]:
        headers = dict(auth_header)
        headers["Accept"] = f"{spec.accept_type};version={api_version}"
        if spec.has_body:
            headers["Content-Type"] = spec.content_type
        return headers

    def invoke(self, spec: RequestSpec, api_version: Optional[str] = None,
               credential: Optional[Credential] = None, wait_for_task: bool = False,
               task_timeout: Optional[float] = None,
               skip_cert_check: Optional[bool] = None) -> Union[Document, TaskResult]:
        """Send the request and return the parsed document.

        With ``wait_for_task`` and a task in the response, the task is polled
        and its TaskResult is returned instead of the document.
        """
        if skip_cert_check is None:
            skip_cert_check = self.settings.skip_cert_check
        if task_timeout is None:
            task_timeout = self.settings.task_timeout

        auth_header = self.resolve_auth_header(spec, credential)

        if api_version:
            version = ApiVersion(api_version)
        else:
            version = get_highest_supported_version(
                spec.uri, spec.api_timeout, skip_cert_check, self.transport)

        headers = self.build_headers(spec, version, auth_header)

        with build_client(spec.api_timeout, skip_cert_check, self.transport) as client:
            response = send(client, spec.method, spec.uri, headers, spec.body)
            document = parse_document(response)

            if not wait_for_task:
                return document

            href = task_href(document)
            if href is None:
                logger.warning(f"{spec.method} {spec.uri} returned no task to wait for")
                warnings.warn(f"{spec.method} {spec.uri} returned no task to wait for",
                              NoTaskToAwait, stacklevel=2)
                return document

            poll_headers = {k: v for k, v in headers.items() if k != "Content-Type"}
            poller = TaskPoller(client, poll_headers, self.settings.poll_interval,
                                self.sleep, self.progress)
            return poller.poll_until_done(href, task_timeout)


def invoke(uri: str, method: str = "GET", api_version: Optional[str] = None,
           content_type: Optional[str] = None, body: Optional[str] = None,
           api_timeout: float = DEFAULT_API_TIMEOUT, task_timeout: float = DEFAULT_TASK_TIMEOUT,
           wait_for_task: bool = False, session_id: Optional[str] = None,
           jwt: Optional[str] = None, accept: Optional[str] = None,
           skip_cert_check: bool = False,
           sessions: Optional[Mapping[str, str]] = None,
           transport: Optional[httpx.BaseTransport] = None) -> Union[Document, TaskResult]:
    """Invoke a vCloud Director API call in one go"""
    spec = RequestSpec(uri, method, content_type, body, api_timeout, accept)
    invoker = RequestInvoker(sessions=sessions, transport=transport)
    return invoker.invoke(spec, api_version, Credential.from_tokens(session_id, jwt),
                          wait_for_task, task_timeout, skip_cert_check)
