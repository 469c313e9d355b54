import os
from functools import lru_cache
from pathlib import Path

from src.adapters.site_config import RulesSiteConfig
from src.components.redirects import SiteConfig, SiteConfigError, run_load_config
from src.rules.loader import load_rules
from src.rules.models import Rules
from src.shell.http.redirects import RedirectSettings


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(os.environ.get("LAB_RULES_PATH", self.base_dir / "rules.yaml"))


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    return load_rules(get_settings().rules_path)


def get_site_config_source() -> RulesSiteConfig:
    return RulesSiteConfig(get_rules(), environ=os.environ)


# --- Redirects ---
@lru_cache
def get_site_config() -> SiteConfig:
    """Site origins, parsed once. Raises SiteConfigError if malformed."""
    result = run_load_config(source=get_site_config_source())
    if result.config is None:
        error = result.errors[0]
        raise SiteConfigError(error.message, field=error.field or "url")
    return result.config


@lru_cache
def get_redirect_settings() -> RedirectSettings:
    source = get_site_config_source()
    return RedirectSettings(
        config=get_site_config(),
        rules=source,
        trust_forwarded_headers=source.trust_forwarded_headers(),
    )


def reset_caches() -> None:
    """Forget cached settings so configuration can be swapped between requests."""
    get_redirect_settings.cache_clear()
    get_site_config.cache_clear()
    get_rules.cache_clear()
    get_settings.cache_clear()
