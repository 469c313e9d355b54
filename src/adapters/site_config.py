from collections.abc import Mapping

from src.rules.models import Rules


class RulesSiteConfig:
    """
    Site origins and redirect rules from rules.yaml.

    Environment values (LAB_SITE_URL, LAB_ADMIN_URL) win over the file.
    An empty LAB_ADMIN_URL clears a configured admin URL.
    """

    def __init__(self, rules: Rules, environ: Mapping[str, str] | None = None) -> None:
        self._rules = rules
        self._environ = environ or {}

    def get_site_url(self) -> str:
        return self._environ.get("LAB_SITE_URL") or self._rules.site.url

    def get_admin_url(self) -> str | None:
        if "LAB_ADMIN_URL" in self._environ:
            return self._environ["LAB_ADMIN_URL"] or None
        return self._rules.site.admin.url

    def get_admin_path(self) -> str:
        return self._rules.redirects.admin_path

    def get_legacy_aliases(self) -> dict[str, str]:
        return dict(self._rules.redirects.legacy_aliases)

    def trust_forwarded_headers(self) -> bool:
        raw = self._environ.get("LAB_TRUST_PROXY")
        if raw is None:
            return self._rules.proxy.trust_forwarded_headers
        return raw.strip().lower() in ("1", "true", "yes", "on")
