"""
HTTP client construction and response document helpers
"""

import logging
from typing import Any, Dict, Optional, Tuple

import httpx
from lxml import etree

from .exceptions import RequestFailedError
from .models import Document

logger = logging.getLogger(__name__)

TASK_JSON_TYPE = "application/vnd.vmware.vcloud.task+json"

_XML_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)


def build_client(timeout: float, skip_cert_check: bool = False,
                 transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    """Create the httpx client used for one invocation"""
    return httpx.Client(
        timeout=httpx.Timeout(timeout),
        verify=not skip_cert_check,
        follow_redirects=False,
        transport=transport,
    )


def send(client: httpx.Client, method: str, uri: str, headers: Dict[str, str],
         content: Optional[str] = None) -> httpx.Response:
    """Issue one request and turn transport or HTTP errors into RequestFailedError"""
    logger.debug(f"{method} {uri}")
    try:
        response = client.request(method, uri, headers=headers, content=content)
    except httpx.TimeoutException as e:
        raise RequestFailedError(f"Request to {uri} timed out: {e}",
                                 details={'uri': uri, 'method': method})
    except httpx.HTTPError as e:
        raise RequestFailedError(f"Request to {uri} failed: {e}",
                                 details={'uri': uri, 'method': method})

    if not response.is_success:
        details = {'uri': uri, 'method': method}
        details.update(error_details(response))
        message = details.get('message') or response.reason_phrase
        raise RequestFailedError(
            f"{method} {uri} returned {response.status_code}: {message}",
            code=response.status_code, details=details)
    return response


def local_name(element) -> str:
    return etree.QName(element).localname


def _is_json(response: httpx.Response) -> bool:
    return "json" in response.headers.get("content-type", "").lower()


def parse_document(response: httpx.Response) -> Document:
    """Parse a response body into an lxml element, decoded JSON or None"""
    if not response.content.strip():
        return None
    if _is_json(response):
        try:
            return response.json()
        except ValueError as e:
            raise RequestFailedError(f"Invalid JSON from {response.request.url}: {e}",
                                     details={'uri': str(response.request.url)})
    content_type = response.headers.get("content-type", "").lower()
    if "xml" in content_type or response.content.lstrip().startswith(b"<"):
        try:
            return etree.fromstring(response.content, _XML_PARSER)
        except etree.XMLSyntaxError as e:
            raise RequestFailedError(f"Invalid XML from {response.request.url}: {e}",
                                     details={'uri': str(response.request.url)})
    return response.text


def error_details(response: httpx.Response) -> Dict[str, Any]:
    """Pull majorErrorCode/minorErrorCode/message out of a vCloud Error body"""
    try:
        document = parse_document(response)
    except RequestFailedError:
        return {}

    if isinstance(document, dict):
        source = document
    elif document is not None and not isinstance(document, str) and local_name(document) == "Error":
        source = document.attrib
    else:
        return {}

    details = {}
    for key, name in (('major_error_code', 'majorErrorCode'),
                      ('minor_error_code', 'minorErrorCode'),
                      ('message', 'message')):
        if source.get(name) is not None:
            details[key] = source.get(name)
    return details


def _is_json_task(document: dict) -> bool:
    media_type = str(document.get("type") or "").split(";")[0].strip().lower()
    return media_type == TASK_JSON_TYPE and bool(document.get("href"))


def find_task(document: Document):
    """Return the task carried by a response document, or None.

    The task is either the document root, or the first entry of the
    entity's Tasks section.
    """
    if document is None or isinstance(document, str):
        return None

    if isinstance(document, dict):
        if _is_json_task(document):
            return document
        section = document.get("tasks")
        tasks = (section.get("task") or []) if isinstance(section, dict) else []
        for task in tasks:
            if isinstance(task, dict) and task.get("href"):
                return task
        return None

    if isinstance(document, list):
        return None

    if local_name(document) == "Task":
        return document
    for child in document:
        if isinstance(child.tag, str) and local_name(child) == "Tasks":
            for task in child:
                if isinstance(task.tag, str) and local_name(task) == "Task":
                    return task
    return None


def task_href(document: Document) -> Optional[str]:
    task = find_task(document)
    if task is None:
        return None
    return task.get("href")


def task_fields(task) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    """(status, error message, operation) of a task element or JSON object"""
    if isinstance(task, dict):
        error = task.get("error") or {}
        return task.get("status"), error.get("message"), task.get("operation")

    message = None
    for child in task:
        if isinstance(child.tag, str) and local_name(child) == "Error":
            message = child.get("message")
            break
    return task.get("status"), message, task.get("operation")
