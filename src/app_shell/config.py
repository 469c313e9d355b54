import logging
import sys

from src.components.redirects import SiteConfig, SiteConfigPort, run_load_config

logger = logging.getLogger(__name__)


def validate_site_config(source: SiteConfigPort) -> SiteConfig:
    """
    Validate the configured site origins before startup.
    Exits the process if either URL is malformed.
    """
    result = run_load_config(source=source)

    if result.config is None:
        for error in result.errors:
            logger.critical("Invalid site configuration (%s): %s", error.field, error.message)
        sys.exit(1)

    config = result.config
    logger.info("Site URL: %s", config.url)
    if config.has_distinct_admin:
        logger.info("Admin URL: %s", config.admin)

    return config
