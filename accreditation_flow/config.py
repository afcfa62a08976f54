# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Environment-driven configuration for Accreditation Flow."""

import os
from dataclasses import dataclass
from typing import Optional

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class DatabaseConfig:
    """Relational store settings.

    Attributes:
        url: SQLAlchemy database URL.
        echo: Log every SQL statement.
    """

    url: str = "sqlite:///./accreditation_flow.db"
    echo: bool = False

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        """Load configuration from DATABASE_URL and DATABASE_ECHO."""
        return cls(
            url=os.getenv("DATABASE_URL", cls.url),
            echo=_env_flag("DATABASE_ECHO", "false"),
        )


@dataclass(frozen=True)
class SiteConfig:
    """Site topology settings.

    Attributes:
        timezone: IANA time zone defining the site's calendar days.
        zones_file: Optional YAML file overriding the built-in zone table.
    """

    timezone: str = "Europe/Paris"
    zones_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "SiteConfig":
        """Load configuration from SITE_TIMEZONE and ZONES_FILE."""
        return cls(
            timezone=os.getenv("SITE_TIMEZONE", cls.timezone),
            zones_file=os.getenv("ZONES_FILE") or None,
        )


@dataclass(frozen=True)
class AuthConfig:
    """Bearer token verification settings.

    Attributes:
        enabled: Reject requests without a valid token.
        secret: Key used to verify token signatures.
        algorithm: Signature algorithm.
        audience: Expected ``aud`` claim, unchecked when None.
        issuer: Expected ``iss`` claim, unchecked when None.
    """

    enabled: bool = True
    secret: str = ""
    algorithm: str = "HS256"
    audience: Optional[str] = None
    issuer: Optional[str] = None

    @classmethod
    def from_env(cls) -> "AuthConfig":
        """Load configuration from AUTH_* environment variables."""
        return cls(
            enabled=_env_flag("AUTH_ENABLED", "true"),
            secret=os.getenv("AUTH_JWT_SECRET", ""),
            algorithm=os.getenv("AUTH_JWT_ALGORITHM", cls.algorithm),
            audience=os.getenv("AUTH_JWT_AUDIENCE") or None,
            issuer=os.getenv("AUTH_JWT_ISSUER") or None,
        )


@dataclass(frozen=True)
class Settings:
    """Aggregated application settings."""

    database: DatabaseConfig
    site: SiteConfig
    auth: AuthConfig
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load every configuration section from the environment."""
        return cls(
            database=DatabaseConfig.from_env(),
            site=SiteConfig.from_env(),
            auth=AuthConfig.from_env(),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
        )
