from pydantic import BaseModel, Field


class AdminSiteRules(BaseModel):
    url: str | None = None


class SiteRules(BaseModel):
    url: str
    admin: AdminSiteRules = Field(default_factory=AdminSiteRules)


class RedirectRules(BaseModel):
    admin_path: str = "/admin/"
    legacy_aliases: dict[str, str] = Field(
        default_factory=lambda: {
            "/logout/": "{admin}#/signout/",
            "/signout/": "{admin}#/signout/",
            "/signup/": "{admin}#/signup/",
            "/signin/": "{admin}",
            "/login/": "{admin}",
        }
    )


class ProxyRules(BaseModel):
    # Honour X-Forwarded-Proto / X-Forwarded-Host from a reverse proxy
    trust_forwarded_headers: bool = False


class Rules(BaseModel):
    site: SiteRules
    redirects: RedirectRules = Field(default_factory=RedirectRules)
    proxy: ProxyRules = Field(default_factory=ProxyRules)
