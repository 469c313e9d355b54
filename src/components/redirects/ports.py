"""
Redirects component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class SiteConfigPort(Protocol):
    """Source of the configured site origins."""

    def get_site_url(self) -> str:
        """Get the public (blog) URL."""
        ...

    def get_admin_url(self) -> str | None:
        """Get the admin URL, or None when the admin shares the public URL."""
        ...


class RulesPort(Protocol):
    """Port for redirect rules configuration."""

    def get_admin_path(self) -> str:
        """Get the admin entry path, e.g. "/admin/"."""
        ...

    def get_legacy_aliases(self) -> dict[str, str]:
        """Get legacy source -> target mappings (targets may use {admin})."""
        ...
