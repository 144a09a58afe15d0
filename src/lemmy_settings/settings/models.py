"""Typed settings record decoded from config.hjson."""

from __future__ import annotations

import os
import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lemmy_settings.constants import DATABASE_URL_ENV, UNSET_HOSTNAME
from lemmy_settings.errors import HostnameFormatError
from lemmy_settings.settings.regexes import build_slur_regex


class DatabaseConfig(BaseModel):
    """Connection parameters for the PostgreSQL database."""

    user: str = Field(..., description="Username to connect to postgres")
    password: str = Field(..., description="Password to connect to postgres")
    host: str = Field(..., description="Host where postgres is running")
    port: int = Field(..., ge=1, le=65535, description="Port where postgres can be accessed")
    database: str = Field(..., description="Name of the postgres database for lemmy")
    pool_size: int = Field(5, gt=0, description="Maximum number of active sql connections")


class RateLimitConfig(BaseModel):
    """Per-IP action limits: `<action>` actions allowed per `<action>_per_second`."""

    # `register` would shadow BaseModel.register, so it is read through an alias
    model_config = ConfigDict(populate_by_name=True)

    message: int = Field(180, ge=0)
    message_per_second: int = Field(60, gt=0)
    post: int = Field(6, ge=0)
    post_per_second: int = Field(600, gt=0)
    register_: int = Field(3, ge=0, alias="register")
    register_per_second: int = Field(3600, gt=0)
    image: int = Field(6, ge=0)
    image_per_second: int = Field(3600, gt=0)


class FederationConfig(BaseModel):
    """Settings related to activitypub federation."""

    enabled: bool = Field(False, description="Whether to enable activitypub federation")
    allowed_instances: list[str] | None = Field(
        None, description="Allowlist for sending/receiving activities"
    )
    blocked_instances: list[str] | None = Field(
        None, description="Instances which never receive or send activities"
    )
    strict_allowlist: bool = Field(
        True, description="Only accept remote content from allowed instances"
    )

    @model_validator(mode="after")
    def check_allow_or_block(self) -> FederationConfig:
        if self.allowed_instances and self.blocked_instances:
            raise ValueError("allowed_instances and blocked_instances cannot both be set")
        return self


class CaptchaConfig(BaseModel):
    """Captcha shown on the signup form."""

    enabled: bool = True
    difficulty: Literal["easy", "medium", "hard"] = "medium"


class EmailConfig(BaseModel):
    """Outgoing mail server, used for password resets and notifications."""

    smtp_server: str = Field(..., description="Hostname and port of the smtp server")
    smtp_login: str | None = None
    smtp_password: str | None = None
    smtp_from_address: str = Field(..., description="Address to send emails from")
    use_tls: bool = True


class SetupConfig(BaseModel):
    """Admin account and site created on first start."""

    admin_username: str
    admin_password: str
    admin_email: str | None = None
    site_name: str


class Settings(BaseModel):
    """Server settings read from the config file.

    Only `database` is required by the schema. `hostname` defaults to the
    `"unset"` placeholder, which the loader rejects, so in practice it must
    be present as well.
    """

    # Instance identity
    hostname: str = Field(
        UNSET_HOSTNAME,
        description="Domain name of the instance, optionally with :port (mandatory)",
    )
    bind: str = Field("0.0.0.0", description="Address where lemmy should listen")
    port: int = Field(8536, ge=1, le=65535, description="Port where lemmy should listen")
    tls_enabled: bool = Field(True, description="Whether the site is available over TLS")
    jwt_secret: str = Field("changeme", description="Secret used to sign login tokens")

    # Companion services
    pictrs_url: str = Field("http://pictrs:8080", description="Address of the pict-rs server")
    iframely_url: str = Field("http://iframely", description="Address of the iframely server")

    # Content rules
    additional_slurs: str | None = Field(
        None, description="Regex alternation appended to the built-in slur filter"
    )
    actor_name_max_length: int = Field(
        20, gt=0, description="Maximum length of user and community names"
    )

    # Nested blocks
    database: DatabaseConfig
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    federation: FederationConfig = Field(default_factory=FederationConfig)
    captcha: CaptchaConfig = Field(default_factory=CaptchaConfig)
    email: EmailConfig | None = None
    setup: SetupConfig | None = None

    # ---- derived values ----
    def get_database_url(self) -> str:
        """Build the postgres connection URL from the database block.

        Values are inserted as-is, without URL escaping.
        """
        conf = self.database
        return (
            f"postgres://{conf.user}:{conf.password}@{conf.host}:{conf.port}/{conf.database}"
        )

    def resolve_database_url(self) -> str:
        """Return `LEMMY_DATABASE_URL` if set, else the URL from the config file."""
        return os.environ.get(DATABASE_URL_ENV) or self.get_database_url()

    def get_protocol_string(self) -> str:
        """Returns either "http" or "https", depending on tls_enabled."""
        return "https" if self.tls_enabled else "http"

    def get_protocol_and_hostname(self) -> str:
        """Returns something like `http://localhost` or `https://lemmy.ml`."""
        return f"{self.get_protocol_string()}://{self.hostname}"

    def get_hostname_without_port(self) -> str:
        """Strip the port from hostnames like `lemmy-alpha:8541`.

        Federation test setups run several instances on one host, each on
        its own port. In production the hostname carries no port and is
        returned unchanged.

        Raises:
            HostnameFormatError: If nothing precedes the first colon
        """
        host = self.hostname.split(":")[0]
        if not host:
            raise HostnameFormatError(self.hostname)
        return host

    def slur_regex(self) -> re.Pattern[str]:
        """Compile the case-insensitive slur filter for these settings.

        Built fresh on every call so it always reflects `additional_slurs`.

        Raises:
            RegexCompileError: If `additional_slurs` breaks the pattern
        """
        return build_slur_regex(self.additional_slurs)
