"""
Redirects component - origin and legacy redirects.

Keeps every request on its configured origin (public blog or admin area)
and keeps historical paths working.

Invariants:
- I1: Redirect status is always 301
- I2: Resolving an already-matching request is a no-op
- I3: Resolving the request a redirect produces is a no-op (no loops)
- I4: Query strings are carried over verbatim
- I5: Malformed site URLs fail at load time, never per request
"""

from __future__ import annotations

from ._impl import SiteConfigError, build_site_config, resolve_redirect
from ._legacy import LegacyAliasTable
from .models import (
    LegacyRedirectInput,
    LoadSiteConfigInput,
    RedirectValidationError,
    ResolveOutput,
    ResolveRedirectInput,
    SiteConfig,
    SiteConfigOutput,
)
from .ports import RulesPort, SiteConfigPort


def _build_table(rules: RulesPort | None, config: SiteConfig | None) -> LegacyAliasTable:
    """Build the legacy alias table from the rules port."""
    prefix = config.url.path if config is not None else ""
    if rules is None:
        return LegacyAliasTable(prefix=prefix)

    return LegacyAliasTable(
        aliases=rules.get_legacy_aliases(),
        admin_path=rules.get_admin_path(),
        prefix=prefix,
    )


# --- Component Entry Points ---


def run_load_config(
    inp: LoadSiteConfigInput | None = None,
    *,
    source: SiteConfigPort | None = None,
) -> SiteConfigOutput:
    """
    Build a site configuration snapshot.

    Args:
        inp: Raw URLs. Used when given, otherwise read from source.
        source: Optional configuration port.

    Returns:
        SiteConfigOutput with the config or errors.
    """
    if inp is None:
        if source is None:
            return SiteConfigOutput(
                config=None,
                errors=[
                    RedirectValidationError(
                        code="invalid_input",
                        message="Either input URLs or a config source must be provided",
                    )
                ],
                success=False,
            )
        inp = LoadSiteConfigInput(url=source.get_site_url(), admin_url=source.get_admin_url())

    try:
        config = build_site_config(inp.url, inp.admin_url)
    except SiteConfigError as e:
        return SiteConfigOutput(
            config=None,
            errors=[
                RedirectValidationError(code="invalid_site_url", message=str(e), field=e.field)
            ],
            success=False,
        )

    return SiteConfigOutput(config=config)


def run_resolve(inp: ResolveRedirectInput, *, config: SiteConfig) -> ResolveOutput:
    """
    Resolve a request against the configured origins.

    Args:
        inp: Input containing the request descriptor.
        config: Site configuration snapshot for this request.

    Returns:
        ResolveOutput with a decision, or None to pass through.
    """
    return ResolveOutput(decision=resolve_redirect(inp.request, config))


def run_legacy(
    inp: LegacyRedirectInput,
    *,
    config: SiteConfig | None = None,
    rules: RulesPort | None = None,
) -> ResolveOutput:
    """
    Look up a legacy alias.

    Args:
        inp: Input containing the request path.
        config: Optional site configuration (for the subdirectory prefix).
        rules: Optional rules port for the alias table.

    Returns:
        ResolveOutput with a long-cached decision, or None.
    """
    table = _build_table(rules, config)
    return ResolveOutput(decision=table.resolve(inp.path))


def run(
    inp: ResolveRedirectInput | LegacyRedirectInput,
    *,
    config: SiteConfig,
    rules: RulesPort | None = None,
) -> ResolveOutput:
    """
    Main entry point for the redirects component.

    Dispatches to the appropriate handler based on input type.
    """
    if isinstance(inp, ResolveRedirectInput):
        return run_resolve(inp, config=config)
    if isinstance(inp, LegacyRedirectInput):
        return run_legacy(inp, config=config, rules=rules)

    raise ValueError(f"Unknown input type: {type(inp)}")
