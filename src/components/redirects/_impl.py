"""
Redirect resolver - keeps requests on their configured origin.

Decides whether a request must be bounced to another host or scheme
before it is routed.

Key behaviors:
- Host mismatch is checked first and always wins
- HTTP -> HTTPS upgrade when the target origin is secure
- Never downgrades HTTPS to HTTP
- Destination path ends with a trailing slash, query kept verbatim
- Re-resolving the redirected request is always a no-op (no loops)
- Status is always 301 with a private, non-storable Cache-Control
"""

from __future__ import annotations

from urllib.parse import urlsplit

from .models import (
    RedirectDecision,
    RedirectRequest,
    RedirectTarget,
    SiteConfig,
    SiteUrl,
    TargetUrl,
)

# --- Constants ---

REDIRECT_STATUS_CODE = 301

PRIVATE_CACHE_CONTROL = (
    "no-cache, private, no-store, must-revalidate, max-stale=0, post-check=0, pre-check=0"
)
YEAR_CACHE_CONTROL = "public, max-age=31536000"

DEFAULT_PORTS = {"http": 80, "https": 443}


class SiteConfigError(ValueError):
    """Raised when a configured site URL cannot be used."""

    def __init__(self, message: str, field: str = "url") -> None:
        self.field = field
        super().__init__(message)


# --- Configuration Parsing ---


def parse_site_url(raw: str, field: str = "url") -> SiteUrl:
    """
    Parse a configured absolute URL into a SiteUrl.

    Raises SiteConfigError if the scheme, host or port is unusable.
    """
    if not raw or not raw.strip():
        raise SiteConfigError(f"{field} is required", field=field)

    parsed = urlsplit(raw.strip())
    scheme = parsed.scheme.lower()

    if scheme not in DEFAULT_PORTS:
        raise SiteConfigError(
            f"{field} must be an absolute http(s) URL, got {raw!r}", field=field
        )

    if not parsed.hostname:
        raise SiteConfigError(f"{field} has no host: {raw!r}", field=field)

    try:
        port = parsed.port
    except ValueError as e:
        raise SiteConfigError(f"{field} has an invalid port: {raw!r}", field=field) from e

    if parsed.query or parsed.fragment:
        raise SiteConfigError(
            f"{field} must not carry a query or fragment: {raw!r}", field=field
        )

    if port == DEFAULT_PORTS[scheme]:
        port = None

    return SiteUrl(
        scheme=scheme,
        host=parsed.hostname,
        port=port,
        path=parsed.path.rstrip("/"),
    )


def build_site_config(url: str, admin_url: str | None = None) -> SiteConfig:
    """Build a SiteConfig snapshot from raw configured URLs."""
    site = parse_site_url(url, field="url")
    admin = parse_site_url(admin_url, field="admin.url") if admin_url else None
    return SiteConfig(url=site, admin_url=admin)


# --- Request Helpers ---


def normalize_host(host: str | None, scheme: str = "http") -> str | None:
    """
    Normalize a Host header for comparison.

    Lowercases, strips stray trailing slashes, brackets a bare IPv6 literal
    and drops the port when it is the default for the scheme. Returns None
    for a missing or blank host.
    """
    if host is None:
        return None

    value = host.strip().rstrip("/").lower()
    if not value:
        return None

    if not value.startswith("[") and value.count(":") > 1:
        # bare IPv6 literal, no port part
        return f"[{value}]"

    default_port = DEFAULT_PORTS.get(scheme)
    name, sep, port = value.rpartition(":")
    if sep and port.isdigit() and int(port) == default_port:
        return name

    return value


def split_original_url(original_url: str) -> tuple[str, str]:
    """
    Split a raw request target into (path, query).

    The path always starts with "/"; anything else is treated as an opaque
    segment.
    """
    path, _, query = (original_url or "").partition("?")
    path = path.split("#", 1)[0]

    if not path:
        path = "/"
    elif not path.startswith("/"):
        path = "/" + path

    return path, query


def build_redirect_path(prefix: str, path: str) -> str:
    """Join the target prefix and request path, ending with one slash."""
    if prefix and not (path == prefix or path.startswith(prefix + "/")):
        path = prefix + path

    if not path.endswith("/"):
        path += "/"

    return path


def build_redirect_location(scheme: str, netloc: str, original_url: str, prefix: str = "") -> str:
    """Build the absolute Location for a redirect."""
    path, query = split_original_url(original_url)
    location = f"{scheme}://{netloc}{build_redirect_path(prefix, path)}"

    if query:
        location = f"{location}?{query}"

    return location


# --- Target Selection ---


def resolve_target_url(request: RedirectRequest, config: SiteConfig) -> TargetUrl:
    """
    Work out where a request should be served.

    The blog never forces a host: only its scheme applies. The admin area
    forces its own host, but only when an admin URL on another host is
    configured.
    """
    if request.target is RedirectTarget.ADMIN:
        site = config.admin
        pin_host = config.has_distinct_admin
    else:
        site = config.url
        pin_host = False

    request_host = normalize_host(request.host, "https" if request.secure else "http")

    if pin_host or request_host is None:
        netloc = site.netloc
    else:
        netloc = request_host

    return TargetUrl(scheme=site.scheme, netloc=netloc, prefix=site.path)


# --- Resolver ---


def resolve_redirect(
    request: RedirectRequest,
    config: SiteConfig,
) -> RedirectDecision | None:
    """
    Decide whether a request must be redirected.

    Returns None when the request is already on the right host and scheme.
    """
    target = resolve_target_url(request, config)
    request_host = normalize_host(request.host, "https" if request.secure else "http")

    if request_host != target.netloc:
        location = build_redirect_location(
            target.scheme, target.netloc, request.original_url, target.prefix
        )
    elif target.scheme == "https" and not request.secure:
        # admin upgrades land on the configured admin origin
        netloc = config.admin.netloc if request.target is RedirectTarget.ADMIN else target.netloc
        location = build_redirect_location("https", netloc, request.original_url, target.prefix)
    else:
        return None

    return RedirectDecision(
        status_code=REDIRECT_STATUS_CODE,
        location=location,
        cache_control=PRIVATE_CACHE_CONTROL,
    )
