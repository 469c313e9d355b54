"""
Integration tests for the assembled API app.

Configuration comes from a temp rules.yaml plus environment overrides,
exactly as in production.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.adapters.site_config import RulesSiteConfig
from src.api.deps import get_redirect_settings, get_site_config
from src.api.main import app
from src.app_shell.config import validate_site_config
from src.components.redirects import PRIVATE_CACHE_CONTROL, YEAR_CACHE_CONTROL, SiteConfigError
from src.rules.models import Rules


@pytest.fixture
def configure(
    monkeypatch: pytest.MonkeyPatch,
    write_rules: Callable[[dict], Path],
    clean_deps: None,
) -> Iterator[Callable[..., None]]:
    """Point the app at a rules file and environment."""
    for name in ("LAB_SITE_URL", "LAB_ADMIN_URL", "LAB_TRUST_PROXY"):
        monkeypatch.delenv(name, raising=False)

    def _configure(url: str, admin_url: str | None = None, **env: str) -> None:
        path = write_rules({"site": {"url": url, "admin": {"url": admin_url}}})
        monkeypatch.setenv("LAB_RULES_PATH", str(path))
        for name, value in env.items():
            monkeypatch.setenv(name, value)

    yield _configure


class TestAppRedirects:
    def test_health_passes_through(self, configure: Callable[..., None]) -> None:
        configure("http://localhost:2368")

        with TestClient(app, base_url="http://localhost:2368", follow_redirects=False) as client:
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "api"}

    def test_https_site_upgrades(self, configure: Callable[..., None]) -> None:
        configure("https://localhost:2390")

        with TestClient(app, base_url="http://localhost:2390", follow_redirects=False) as client:
            response = client.get("/health")

        assert response.status_code == 301
        assert response.headers["location"] == "https://localhost:2390/health/"
        assert response.headers["cache-control"] == PRIVATE_CACHE_CONTROL

    def test_admin_behind_proxy(self, configure: Callable[..., None]) -> None:
        configure("https://localhost:2390", LAB_TRUST_PROXY="1")

        with TestClient(app, base_url="http://localhost:2390", follow_redirects=False) as client:
            insecure = client.get("/admin/")
            proxied = client.get("/admin/", headers={"X-Forwarded-Proto": "https"})

        assert insecure.status_code == 301
        assert insecure.headers["location"] == "https://localhost:2390/admin/"
        # no admin route exists, so routing answers 404 after the middleware
        assert proxied.status_code == 404

    def test_env_admin_url(self, configure: Callable[..., None]) -> None:
        configure("http://default.com", LAB_ADMIN_URL="https://admin.default.com")

        with TestClient(app, base_url="http://default.com", follow_redirects=False) as client:
            response = client.get("/admin/settings?tab=general")

        assert response.status_code == 301
        assert response.headers["location"] == "https://admin.default.com/admin/settings/?tab=general"

    def test_legacy_alias(self, configure: Callable[..., None]) -> None:
        configure("http://default.com")

        with TestClient(app, base_url="http://default.com", follow_redirects=False) as client:
            response = client.get("/signout/")

        assert response.status_code == 301
        assert response.headers["location"] == "/admin/#/signout/"
        assert response.headers["cache-control"] == YEAR_CACHE_CONTROL


class TestStartupValidation:
    def test_malformed_url_raises_from_provider(self, configure: Callable[..., None]) -> None:
        configure("not-a-url")

        with pytest.raises(SiteConfigError):
            get_site_config()

        with pytest.raises(SiteConfigError):
            get_redirect_settings()

    def test_validate_exits_on_bad_config(self, caplog: pytest.LogCaptureFixture) -> None:
        rules = Rules.model_validate({"site": {"url": "https://default.com"}})
        source = RulesSiteConfig(rules, environ={"LAB_ADMIN_URL": "ftp://admin"})

        with caplog.at_level(logging.CRITICAL), pytest.raises(SystemExit):
            validate_site_config(source)

        assert "admin.url" in caplog.text

    def test_validate_returns_config(self) -> None:
        rules = Rules.model_validate({"site": {"url": "https://default.com/blog"}})

        config = validate_site_config(RulesSiteConfig(rules))

        assert config.url.path == "/blog"
