from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import yaml

from src.components.redirects import RedirectRequest, RedirectTarget, SiteConfig, build_site_config


@pytest.fixture
def make_config() -> Callable[..., SiteConfig]:
    """Build a SiteConfig from raw URLs."""

    def _make(url: str, admin_url: str | None = None) -> SiteConfig:
        return build_site_config(url, admin_url)

    return _make


@pytest.fixture
def make_request() -> Callable[..., RedirectRequest]:
    """Build a RedirectRequest with blog defaults."""

    def _make(
        host: str | None,
        original_url: str = "/",
        secure: bool = False,
        admin: bool = False,
    ) -> RedirectRequest:
        return RedirectRequest(
            host=host,
            original_url=original_url,
            secure=secure,
            target=RedirectTarget.ADMIN if admin else RedirectTarget.BLOG,
        )

    return _make


@pytest.fixture
def write_rules(tmp_path: Path) -> Callable[[dict], Path]:
    """Write a rules.yaml into a temp dir and return its path."""

    def _write(data: dict) -> Path:
        path = tmp_path / "rules.yaml"
        with open(path, "w") as f:
            yaml.safe_dump(data, f)
        return path

    return _write


@pytest.fixture
def clean_deps() -> Iterator[None]:
    """Reset cached settings around a test that swaps configuration."""
    from src.api.deps import reset_caches

    reset_caches()
    yield
    reset_caches()
