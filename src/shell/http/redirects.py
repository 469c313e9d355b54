"""
Redirect middleware - applies origin and legacy redirects before routing.

Every inbound request passes through here before any route:
- AdminContextMiddleware flags requests for the admin area
- UrlRedirectMiddleware checks legacy aliases, then resolves the request
  against the blog or admin origin and either answers with a 301 or hands
  the request on untouched

Configuration is read once per request from a provider, so a request
always sees one consistent snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from starlette.applications import Starlette
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp, Receive, Scope, Send

from src.components.redirects import (
    DEFAULT_ADMIN_PATH,
    LegacyRedirectInput,
    RedirectDecision,
    RedirectRequest,
    RedirectTarget,
    ResolveRedirectInput,
    RulesPort,
    SiteConfig,
    normalize_admin_path,
    normalize_host,
    run_legacy,
    run_resolve,
)

logger = logging.getLogger(__name__)


# --- Settings ---


@dataclass(frozen=True)
class RedirectSettings:
    """Everything the middleware needs for one request."""

    config: SiteConfig
    rules: RulesPort | None = None
    trust_forwarded_headers: bool = False

    @property
    def admin_path(self) -> str:
        if self.rules is None:
            return DEFAULT_ADMIN_PATH
        return normalize_admin_path(self.rules.get_admin_path())


RedirectSettingsProvider = Callable[[], RedirectSettings]


# --- Request Mapping ---


def _first_value(header: str) -> str:
    """First entry of a comma-separated proxy header."""
    return header.split(",", 1)[0].strip()


def _ascii_target(raw: bytes) -> str:
    """Raw request target as ASCII, with any non-ASCII byte percent-encoded."""
    return "".join(chr(byte) if byte < 0x80 else f"%{byte:02X}" for byte in raw)


def build_redirect_request(
    request: Request,
    trust_forwarded_headers: bool = False,
) -> RedirectRequest:
    """
    Describe a Starlette request for the resolver.

    Path and query are taken raw so percent-encoding survives the redirect.
    Unencoded non-ASCII bytes are percent-encoded once, byte for byte.
    """
    host = request.headers.get("host")
    secure = request.url.scheme == "https"

    if trust_forwarded_headers:
        forwarded_host = request.headers.get("x-forwarded-host")
        if forwarded_host:
            host = _first_value(forwarded_host)
        forwarded_proto = request.headers.get("x-forwarded-proto")
        if forwarded_proto:
            secure = _first_value(forwarded_proto).lower() == "https"

    raw_path = request.scope.get("raw_path") or request.url.path.encode("utf-8")
    original_url = _ascii_target(raw_path.split(b"?", 1)[0])

    query = _ascii_target(request.scope.get("query_string", b""))
    if query:
        original_url = f"{original_url}?{query}"

    is_admin = bool(getattr(request.state, "is_admin", False))

    return RedirectRequest(
        host=host,
        original_url=original_url,
        secure=secure,
        target=RedirectTarget.ADMIN if is_admin else RedirectTarget.BLOG,
    )


def build_redirect_response(decision: RedirectDecision) -> Response:
    """Turn a decision into a redirect response."""
    return RedirectResponse(
        url=decision.location,
        status_code=decision.status_code,
        headers={"Cache-Control": decision.cache_control},
    )


# --- Middleware ---


class AdminContextMiddleware:
    """
    Flags admin-area requests on request.state.is_admin.

    The admin area is <public subdirectory><admin path>, e.g. /blog/admin/.
    On the admin host it is also <admin subdirectory><admin path>, which is
    where admin redirects land when the admin URL has its own subdirectory.
    """

    def __init__(self, app: ASGIApp, settings_provider: RedirectSettingsProvider) -> None:
        self.app = app
        self._settings_provider = settings_provider

    def is_admin_path(self, path: str, settings: RedirectSettings, host: str | None = None) -> bool:
        config = settings.config
        roots = [config.url.path + settings.admin_path]
        if host is not None and host == config.admin.netloc:
            roots.append(config.admin.path + settings.admin_path)

        return any(path.startswith(root) or path == root.rstrip("/") for root in roots)

    def request_host(self, scope: Scope, settings: RedirectSettings) -> str | None:
        headers = Headers(scope=scope)
        host = headers.get("host")
        scheme = scope.get("scheme", "http")

        if settings.trust_forwarded_headers:
            forwarded_host = headers.get("x-forwarded-host")
            if forwarded_host:
                host = _first_value(forwarded_host)
            forwarded_proto = headers.get("x-forwarded-proto")
            if forwarded_proto:
                scheme = _first_value(forwarded_proto).lower()

        return normalize_host(host, scheme)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            settings = self._settings_provider()
            host = self.request_host(scope, settings)
            if self.is_admin_path(scope.get("path", ""), settings, host):
                scope.setdefault("state", {})["is_admin"] = True

        await self.app(scope, receive, send)


class UrlRedirectMiddleware(BaseHTTPMiddleware):
    """Answers with a 301 when a request is on the wrong origin or a legacy path."""

    def __init__(self, app: ASGIApp, settings_provider: RedirectSettingsProvider) -> None:
        super().__init__(app)
        self._settings_provider = settings_provider

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        settings = self._settings_provider()
        redirect_request = build_redirect_request(request, settings.trust_forwarded_headers)

        legacy = run_legacy(
            LegacyRedirectInput(path=redirect_request.original_url),
            config=settings.config,
            rules=settings.rules,
        )
        decision = legacy.decision

        if decision is None:
            resolved = run_resolve(
                ResolveRedirectInput(request=redirect_request),
                config=settings.config,
            )
            decision = resolved.decision

        if decision is None:
            return await call_next(request)

        logger.debug(
            "Redirecting %s request %s%s -> %s",
            redirect_request.target.value,
            redirect_request.host,
            redirect_request.original_url,
            decision.location,
        )
        return build_redirect_response(decision)


def install_redirect_middleware(app: Starlette, settings_provider: RedirectSettingsProvider) -> None:
    """
    Add both middlewares in the right order.

    Starlette runs the last added middleware first, so the admin flag is set
    before redirects are resolved.
    """
    app.add_middleware(UrlRedirectMiddleware, settings_provider=settings_provider)
    app.add_middleware(AdminContextMiddleware, settings_provider=settings_provider)
