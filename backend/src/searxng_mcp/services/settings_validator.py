"""Security and format validation for SearXNG context server settings.

Every validator is a pure function of its input string: it returns the
(possibly normalised) value or raises a ``SettingsValidationError`` subclass.
No DNS lookups or network access happen here; the private host guard matches
canonical host literals only.
"""

from __future__ import annotations

import ipaddress
import re
import socket
import unicodedata
import urllib.parse

from ..core.exceptions import (
    EmbeddedCredentialsError,
    ForbiddenHostError,
    InvalidCharactersError,
    MalformedUrlError,
    PathTraversalError,
    SuspiciousPatternError,
    TooLongError,
    UnsupportedSchemeError,
)
from ..schemas.settings import SearxngSettings

USER_AGENT_MAX_LENGTH = 256
NO_PROXY_MAX_LENGTH = 1024

_ALLOWED_SCHEMES = ("http", "https")
_USER_AGENT_EXTRA_CHARS = frozenset(" /-_.()")
_NO_PROXY_EXTRA_CHARS = frozenset(".-*")

_FORBIDDEN_HOSTS = frozenset({"localhost", "0.0.0.0"})
_FORBIDDEN_HOST_PREFIXES = (
    "127.",
    "10.",
    "192.168.",
    # IPv6 loopback, unspecified and IPv4-mapped literals, then link-local
    "::",
    "fe80:",
)

# Decimal, octal, hex and shorthand IPv4 spellings ("2130706433", "0x7f.1")
_IPV4_LIKE = re.compile(r"^[0-9a-fx.]+$")


def _parse_http_url(value: str, field: str, label: str) -> urllib.parse.SplitResult:
    """Parse ``value`` and apply the scheme and credential checks shared by all URL fields."""
    if not value:
        raise MalformedUrlError(
            f"{label} cannot be empty. Please provide a valid http:// or https:// URL, e.g. 'https://searx.be'.",
            field=field,
            value=value,
        )
    try:
        parts = urllib.parse.urlsplit(value)
        # Accessing port validates the netloc (bad brackets, non-numeric port)
        _ = parts.port
    except ValueError as exc:
        raise MalformedUrlError(
            f"Invalid {label} format: '{value}' ({exc}). Please provide a valid http:// or https:// URL.",
            field=field,
            value=value,
        ) from exc

    if not parts.scheme:
        raise MalformedUrlError(
            f"Invalid {label} format: '{value}' is not an absolute URL. "
            "Please provide a valid http:// or https:// URL.",
            field=field,
            value=value,
        )
    scheme = parts.scheme.lower()
    if scheme not in _ALLOWED_SCHEMES:
        raise UnsupportedSchemeError(
            f"{label} must use http:// or https:// scheme. Got: {scheme}",
            field=field,
            value=value,
        )
    if parts.username is not None or parts.password is not None:
        host = parts.hostname or ""
        raise EmbeddedCredentialsError(
            f"{label} '{scheme}://***@{host}' has embedded credentials, which are not allowed. "
            "Use the auth_username and auth_password settings instead.",
            field=field,
            value=value,
        )
    if not parts.hostname:
        raise MalformedUrlError(
            f"Invalid {label} format: '{value}' has no host.",
            field=field,
            value=value,
        )
    return parts


def _reject_path_traversal(parts: urllib.parse.SplitResult, value: str, field: str, label: str) -> None:
    if ".." in parts.path:
        raise PathTraversalError(
            f"{label} path '{parts.path}' contains path traversal sequences (..) "
            "which are not allowed for security reasons.",
            field=field,
            value=value,
        )


def canonical_host(host: str) -> str:
    """Return the form of ``host`` a URL-parsing client would connect to.

    Percent-escapes are decoded, the host is NFKC-normalised and lowercased,
    IPv6 brackets and one trailing dot are removed. Non-ASCII names are IDNA
    encoded, IPv6 literals compressed and numeric IPv4 spellings rewritten
    as dotted quads.

    Raises:
        ValueError: If the host is not a valid IPv6 literal or IDNA name.

    """
    host = unicodedata.normalize("NFKC", urllib.parse.unquote(host)).strip().lower().strip("[]")
    if ":" in host:
        return ipaddress.IPv6Address(host).compressed
    if host.endswith("."):
        host = host[:-1]
    if not host.isascii():
        host = host.encode("idna").decode("ascii")
    if _IPV4_LIKE.match(host):
        try:
            return socket.inet_ntoa(socket.inet_aton(host))
        except OSError:
            pass
    return host


def _matches_forbidden(host: str) -> bool:
    if host in _FORBIDDEN_HOSTS or host.startswith(_FORBIDDEN_HOST_PREFIXES):
        return True
    if host.startswith("172."):
        second = host.split(".")[1]
        if second.isascii() and second.isdigit() and 16 <= int(second) <= 31:
            return True
    return False


def is_forbidden_host(host: str) -> bool:
    """Return True when ``host`` is a loopback or private address literal.

    Matching runs on ``canonical_host(host)``; 172.16.0.0/12 is checked on the
    second octet. A host that cannot be canonicalised counts as forbidden.
    """
    try:
        return _matches_forbidden(canonical_host(host))
    except ValueError:
        return True


def validate_url(value: str, *, strict_trailing_slash: bool = False, field: str = "searxng_url") -> str:
    """Validate the SearXNG instance URL.

    Args:
        value: Raw URL from the user's settings.
        strict_trailing_slash: Reject a trailing slash instead of stripping it.
        field: Settings field name reported on failure.

    Returns:
        The URL with any trailing slashes removed.

    Raises:
        MalformedUrlError, UnsupportedSchemeError, EmbeddedCredentialsError,
        ForbiddenHostError, PathTraversalError.

    """
    parts = _parse_http_url(value, field, "SearXNG URL")

    try:
        host = canonical_host(parts.hostname or "")
    except ValueError as exc:
        raise MalformedUrlError(
            f"Invalid SearXNG URL format: '{value}' has an invalid host ({exc}).",
            field=field,
            value=value,
        ) from exc
    if _matches_forbidden(host):
        raise ForbiddenHostError(
            f"Private/localhost URLs are not allowed for security reasons. Got: {host}. "
            "Please use a publicly accessible SearXNG instance.",
            field=field,
            value=value,
        )
    _reject_path_traversal(parts, value, field, "SearXNG URL")

    # Only slashes closing the path; a query or fragment may legitimately end in '/'
    if value.endswith("/") and not parts.query and not parts.fragment:
        trimmed = value.rstrip("/")
        if strict_trailing_slash:
            raise MalformedUrlError(
                f"Invalid SearXNG URL: '{value}'. URL should not end with a trailing slash. Use: '{trimmed}'",
                field=field,
                value=value,
            )
        return trimmed
    return value


def validate_user_agent(value: str) -> str:
    """Validate a custom User-Agent header value."""
    if len(value) > USER_AGENT_MAX_LENGTH:
        raise TooLongError(
            f"User-Agent exceeds maximum length of {USER_AGENT_MAX_LENGTH} characters. "
            f"Got: {len(value)} characters.",
            field="user_agent",
            value=value,
            max_length=USER_AGENT_MAX_LENGTH,
        )
    if not all((c.isascii() and c.isalnum()) or c in _USER_AGENT_EXTRA_CHARS for c in value):
        raise InvalidCharactersError(
            f"User-Agent '{value}' contains invalid characters. "
            "Only ASCII letters, digits and ' /-_.()' are allowed.",
            field="user_agent",
            value=value,
        )
    return value


def validate_proxy_url(value: str, *, field: str = "http_proxy") -> str:
    """Validate a proxy URL.

    Same scheme, credential and path checks as ``validate_url``, but private
    hosts are allowed because proxies usually live on the local network.
    """
    parts = _parse_http_url(value, field, "Proxy URL")
    _reject_path_traversal(parts, value, field, "Proxy URL")
    return value


def validate_no_proxy(value: str) -> str:
    """Validate a comma-separated NO_PROXY bypass list.

    Empty entries are ignored. Each entry is checked for '..' before its
    characters are checked against the hostname/pattern whitelist.
    """
    if len(value) > NO_PROXY_MAX_LENGTH:
        raise TooLongError(
            f"NO_PROXY list exceeds maximum length of {NO_PROXY_MAX_LENGTH} characters. "
            f"Got: {len(value)} characters.",
            field="no_proxy",
            value=value,
            max_length=NO_PROXY_MAX_LENGTH,
        )
    for entry in (part.strip() for part in value.split(",")):
        if not entry:
            continue
        if ".." in entry:
            raise SuspiciousPatternError(
                f"NO_PROXY hostname '{entry}' contains suspicious '..' sequence.",
                field="no_proxy",
                value=entry,
            )
        if not all(c.isalnum() or c in _NO_PROXY_EXTRA_CHARS for c in entry):
            raise InvalidCharactersError(
                f"Invalid hostname in NO_PROXY list: '{entry}'. Only alphanumeric characters and '.-*' are allowed.",
                field="no_proxy",
                value=entry,
            )
    return value


def validate_settings(settings: SearxngSettings, *, strict_trailing_slash: bool = False) -> SearxngSettings:
    """Run every field validator in order and return the normalised settings.

    Order: URL, user agent, HTTP proxy, HTTPS proxy, NO_PROXY. The first
    failure is raised unchanged. Validating the returned record again yields
    an equal record.
    """
    searxng_url = validate_url(settings.searxng_url, strict_trailing_slash=strict_trailing_slash)
    if settings.user_agent is not None:
        validate_user_agent(settings.user_agent)
    if settings.http_proxy is not None:
        validate_proxy_url(settings.http_proxy, field="http_proxy")
    if settings.https_proxy is not None:
        validate_proxy_url(settings.https_proxy, field="https_proxy")
    if settings.no_proxy is not None:
        validate_no_proxy(settings.no_proxy)

    if searxng_url == settings.searxng_url:
        return settings
    return settings.model_copy(update={"searxng_url": searxng_url})
