"""
API version discovery against the unauthenticated /api/versions endpoint
"""

import logging
from typing import Iterable, List, Optional
from urllib.parse import urlsplit

import httpx

from .config import DEFAULT_ACCEPT, DEFAULT_API_TIMEOUT
from .exceptions import NoVersionsAvailableError
from .models import ApiVersion, Document, VersionInfo
from .transport import build_client, local_name, parse_document, send

logger = logging.getLogger(__name__)


def versions_url(host_or_uri: str) -> str:
    """https://{host}/api/versions for a bare host or any URI on the endpoint"""
    netloc = urlsplit(host_or_uri).netloc if "://" in host_or_uri else host_or_uri
    netloc = netloc.strip("/")
    if not netloc:
        raise ValueError(f"No host in {host_or_uri!r}")
    return f"https://{netloc}/api/versions"


def _is_true(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "false").strip().lower() == "true"


def parse_versions(document: Document) -> List[VersionInfo]:
    """Read VersionInfo entries from a versions document"""
    if isinstance(document, dict):
        return [
            VersionInfo(str(entry.get("version")), _is_true(entry.get("deprecated")))
            for entry in document.get("versionInfo", [])
            if entry.get("version")
        ]
    if document is None or isinstance(document, str):
        return []

    versions = []
    for element in document.iter():
        if not isinstance(element.tag, str) or local_name(element) != "VersionInfo":
            continue
        version = None
        for child in element:
            if isinstance(child.tag, str) and local_name(child) == "Version":
                version = (child.text or "").strip()
                break
        if not version:
            continue
        deprecated = _is_true(element.get("deprecated"))
        versions.append(VersionInfo(version, deprecated))
    return versions


def select_highest(versions: Iterable[VersionInfo]) -> ApiVersion:
    """Highest non-deprecated version, rendered as '{major}.0'"""
    supported = []
    for info in versions:
        if info.deprecated:
            continue
        try:
            supported.append(info.number)
        except ValueError:
            logger.warning(f"Ignoring unparseable API version {info.version!r}")
    if not supported:
        raise NoVersionsAvailableError("No non-deprecated API version available")
    return ApiVersion(f"{int(max(supported))}.0")


def get_highest_supported_version(host_or_uri: str, api_timeout: float = DEFAULT_API_TIMEOUT,
                                  skip_cert_check: bool = False,
                                  transport: Optional[httpx.BaseTransport] = None) -> ApiVersion:
    """Ask the endpoint which versions it supports and pick the highest one"""
    url = versions_url(host_or_uri)
    with build_client(api_timeout, skip_cert_check, transport) as client:
        response = send(client, "GET", url, {"Accept": DEFAULT_ACCEPT})
        document = parse_document(response)

    versions = parse_versions(document)
    try:
        version = select_highest(versions)
    except NoVersionsAvailableError as e:
        e.details['uri'] = url
        raise
    logger.debug(f"{url} offers {len(versions)} versions, using {version}")
    return version
