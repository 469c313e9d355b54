"""
Redirects component input/output models.

Site origins, request descriptors and redirect decisions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# --- Validation Error ---


@dataclass(frozen=True)
class RedirectValidationError:
    """Redirect configuration error."""

    code: str
    message: str
    field: str | None = None


# --- Site Configuration ---


@dataclass(frozen=True)
class SiteUrl:
    """A configured origin plus optional subdirectory prefix."""

    scheme: str
    host: str
    port: int | None = None
    path: str = ""  # e.g. "/blog", never a trailing slash

    @property
    def netloc(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        if self.port is None:
            return host
        return f"{host}:{self.port}"

    @property
    def origin(self) -> str:
        return f"{self.scheme}://{self.netloc}"

    @property
    def is_secure(self) -> bool:
        return self.scheme == "https"

    def __str__(self) -> str:
        return f"{self.origin}{self.path}/"


@dataclass(frozen=True)
class SiteConfig:
    """
    Public and admin origins.

    admin_url is optional; without it the admin area is served from the
    public URL.
    """

    url: SiteUrl
    admin_url: SiteUrl | None = None

    @property
    def admin(self) -> SiteUrl:
        return self.admin_url or self.url

    @property
    def has_distinct_admin(self) -> bool:
        """True only when the admin area lives on another host or port."""
        return self.admin.netloc != self.url.netloc


# --- Request / Decision ---


class RedirectTarget(str, Enum):
    """Which origin a request should be served from."""

    BLOG = "blog"
    ADMIN = "admin"


@dataclass(frozen=True)
class RedirectRequest:
    """Request fields the resolver looks at."""

    host: str | None
    original_url: str  # raw path + "?query", as received
    secure: bool = False
    target: RedirectTarget = RedirectTarget.BLOG


@dataclass(frozen=True)
class TargetUrl:
    """Where a class of request should be served."""

    scheme: str
    netloc: str
    prefix: str = ""


@dataclass(frozen=True)
class RedirectDecision:
    """A redirect to issue instead of handling the request."""

    status_code: int
    location: str
    cache_control: str


@dataclass(frozen=True)
class LegacyAlias:
    """Fixed historical path kept alive by a permanent redirect."""

    source: str
    target: str


# --- Input Models ---


@dataclass(frozen=True)
class ResolveRedirectInput:
    """Input for resolving a request against the configured origins."""

    request: RedirectRequest


@dataclass(frozen=True)
class LegacyRedirectInput:
    """Input for looking up a legacy alias."""

    path: str


@dataclass(frozen=True)
class LoadSiteConfigInput:
    """Input for building a site configuration snapshot."""

    url: str
    admin_url: str | None = None


# --- Output Models ---


@dataclass(frozen=True)
class ResolveOutput:
    """Output for resolve operations. decision is None for pass-through."""

    decision: RedirectDecision | None
    errors: list[RedirectValidationError] = field(default_factory=list)
    success: bool = True

    @property
    def should_redirect(self) -> bool:
        return self.decision is not None


@dataclass(frozen=True)
class SiteConfigOutput:
    """Output for configuration loading."""

    config: SiteConfig | None
    errors: list[RedirectValidationError] = field(default_factory=list)
    success: bool = True
