"""Settings record and loading.

This package provides:
- Settings: typed record decoded from config.hjson, with derived helpers
- loader: config location, file reading and validation
- regexes: slur and webfinger regex builders
"""

from lemmy_settings.settings.loader import (
    get_config_location,
    load_settings,
    parse_settings,
    read_config_file,
)
from lemmy_settings.settings.models import (
    CaptchaConfig,
    DatabaseConfig,
    EmailConfig,
    FederationConfig,
    RateLimitConfig,
    Settings,
    SetupConfig,
)

__all__ = [
    "CaptchaConfig",
    "DatabaseConfig",
    "EmailConfig",
    "FederationConfig",
    "RateLimitConfig",
    "Settings",
    "SetupConfig",
    "get_config_location",
    "load_settings",
    "parse_settings",
    "read_config_file",
]
