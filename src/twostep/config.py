"""Central configuration loaded from environment variables and YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from twostep.errors import ConfigError

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Login credentials + sender account
    auth_config_file: Path = Field(default_factory=lambda: CONFIG_DIR / "auth.yaml")

    # SMTP
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465

    # Twilio
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_phone_number: str = ""

    log_level: str = "INFO"


class AuthConfig(BaseModel):
    """The accepted login pair and the account that sends passcode emails.

    Frozen after load so concurrent flows can share one instance.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    correct_identity: str
    correct_secret: str
    sender_identity: str
    sender_secret: str

    @field_validator("*", mode="before")
    @classmethod
    def _required(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("is missing")
        if not isinstance(value, str):
            # YAML turns unquoted 012345 or on into int/bool
            raise ValueError("must be a string (quote it in YAML)")
        value = value.strip()
        if not value:
            raise ValueError("is empty")
        return value


def _describe(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        key = ".".join(str(p) for p in err["loc"]) or "<root>"
        if err["type"] == "missing":
            problems.append(f"'{key}' is missing")
        else:
            problems.append(f"'{key}' {err['msg'].removeprefix('Value error, ')}")
    return "; ".join(problems)


def load_auth_config(path: Path | str | None = None) -> AuthConfig:
    """Load the login/sender config from YAML.

    Raises ConfigError if the file is absent or a required key is missing or empty.
    """
    path = Path(path) if path is not None else settings.auth_config_file
    if not path.exists():
        raise ConfigError(f"Auth config not found: {path}")
    with open(path) as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ConfigError(f"Auth config must be a mapping of keys to values: {path}")
    try:
        return AuthConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid auth config {path}: {_describe(e)}") from e


settings = Settings()
