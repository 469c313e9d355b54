"""
Legacy aliases - historical paths kept alive with permanent redirects.

Exact-path table, checked before origin resolution. Targets may use the
{admin} placeholder for the admin entry path.
"""

from __future__ import annotations

from collections.abc import Mapping

from ._impl import REDIRECT_STATUS_CODE, YEAR_CACHE_CONTROL, split_original_url
from .models import LegacyAlias, RedirectDecision

DEFAULT_ADMIN_PATH = "/admin/"

DEFAULT_LEGACY_ALIASES: dict[str, str] = {
    "/logout/": "{admin}#/signout/",
    "/signout/": "{admin}#/signout/",
    "/signup/": "{admin}#/signup/",
    "/signin/": "{admin}",
    "/login/": "{admin}",
}


def normalize_admin_path(admin_path: str) -> str:
    """Ensure the admin path has exactly one leading and trailing slash."""
    stripped = admin_path.strip().strip("/")
    return f"/{stripped}/" if stripped else "/"


class LegacyAliasTable:
    """
    Static source -> destination table.

    Besides the configured aliases, the admin path in any other letter case
    or without its trailing slash also points at the admin path.
    """

    def __init__(
        self,
        aliases: Mapping[str, str] | None = None,
        admin_path: str = DEFAULT_ADMIN_PATH,
        prefix: str = "",
    ) -> None:
        self._admin_path = normalize_admin_path(admin_path)
        self._prefix = prefix.rstrip("/")
        source = DEFAULT_LEGACY_ALIASES if aliases is None else aliases
        self._aliases = {
            path: LegacyAlias(source=path, target=target.format(admin=self._admin_path))
            for path, target in source.items()
        }

    @property
    def admin_path(self) -> str:
        return self._admin_path

    @property
    def aliases(self) -> tuple[LegacyAlias, ...]:
        return tuple(self._aliases.values())

    def match(self, path: str) -> LegacyAlias | None:
        """Find the alias for a request path (query ignored)."""
        request_path, _ = split_original_url(path)

        if self._prefix:
            if not request_path.startswith(self._prefix + "/"):
                return None
            request_path = request_path[len(self._prefix) :]

        alias = self._aliases.get(request_path)
        if alias is not None:
            return alias

        if request_path == self._admin_path:
            return None

        admin = self._admin_path
        if request_path.lower() in (admin.lower(), admin.rstrip("/").lower()):
            return LegacyAlias(source=request_path, target=admin)

        return None

    def resolve(self, path: str) -> RedirectDecision | None:
        """Return a permanent, long-cached redirect for a legacy path."""
        alias = self.match(path)
        if alias is None:
            return None

        return RedirectDecision(
            status_code=REDIRECT_STATUS_CODE,
            location=f"{self._prefix}{alias.target}",
            cache_control=YEAR_CACHE_CONTROL,
        )
