"""
Redirects component - origin (host/scheme) and legacy path redirects.
"""

from ._impl import (
    DEFAULT_PORTS,
    PRIVATE_CACHE_CONTROL,
    REDIRECT_STATUS_CODE,
    YEAR_CACHE_CONTROL,
    SiteConfigError,
    build_redirect_location,
    build_redirect_path,
    build_site_config,
    normalize_host,
    parse_site_url,
    resolve_redirect,
    resolve_target_url,
    split_original_url,
)
from ._legacy import (
    DEFAULT_ADMIN_PATH,
    DEFAULT_LEGACY_ALIASES,
    LegacyAliasTable,
    normalize_admin_path,
)
from .component import run, run_legacy, run_load_config, run_resolve
from .models import (
    LegacyAlias,
    LegacyRedirectInput,
    LoadSiteConfigInput,
    RedirectDecision,
    RedirectRequest,
    RedirectTarget,
    RedirectValidationError,
    ResolveOutput,
    ResolveRedirectInput,
    SiteConfig,
    SiteConfigOutput,
    SiteUrl,
    TargetUrl,
)
from .ports import RulesPort, SiteConfigPort

__all__ = [
    # Entry points
    "run",
    "run_legacy",
    "run_load_config",
    "run_resolve",
    # Input models
    "LegacyRedirectInput",
    "LoadSiteConfigInput",
    "ResolveRedirectInput",
    # Output models
    "RedirectValidationError",
    "ResolveOutput",
    "SiteConfigOutput",
    # Domain models
    "LegacyAlias",
    "RedirectDecision",
    "RedirectRequest",
    "RedirectTarget",
    "SiteConfig",
    "SiteUrl",
    "TargetUrl",
    # Ports
    "RulesPort",
    "SiteConfigPort",
    # _impl re-exports
    "DEFAULT_PORTS",
    "PRIVATE_CACHE_CONTROL",
    "REDIRECT_STATUS_CODE",
    "YEAR_CACHE_CONTROL",
    "SiteConfigError",
    "build_redirect_location",
    "build_redirect_path",
    "build_site_config",
    "normalize_host",
    "parse_site_url",
    "resolve_redirect",
    "resolve_target_url",
    "split_original_url",
    # _legacy re-exports
    "DEFAULT_ADMIN_PATH",
    "DEFAULT_LEGACY_ALIASES",
    "LegacyAliasTable",
    "normalize_admin_path",
]
