# config.py — process-wide settings, loaded once from the environment (.env supported).
import os
from dataclasses import dataclass
from typing import List, Mapping, Optional
from dotenv import load_dotenv

DEFAULT_PORT = 3000


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Credentials:
    username: Optional[str]
    password: Optional[str]

    @property
    def configured(self) -> bool:
        return bool(self.username and self.password)


@dataclass(frozen=True)
class Settings:
    credentials: Credentials
    secret_message: str = ""
    port: int = DEFAULT_PORT
    realm: Optional[str] = None
    log_level: str = "INFO"

    def warnings(self) -> List[str]:
        msg = []
        if not self.credentials.username: msg.append("USERNAME missing")
        if not self.credentials.password: msg.append("PASSWORD missing")
        if not self.secret_message: msg.append("SECRET_MESSAGE missing")
        return msg


def _port(raw: Optional[str]) -> int:
    raw = (raw or "").strip()
    if not raw:
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        raise ConfigError(f"PORT must be an integer, got {raw!r}")
    return port or DEFAULT_PORT


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from `environ`, or from os.environ after loading .env."""
    if environ is None:
        load_dotenv()
        environ = os.environ
    return Settings(
        credentials=Credentials(environ.get("USERNAME", ""), environ.get("PASSWORD", "")),
        secret_message=environ.get("SECRET_MESSAGE", ""),
        port=_port(environ.get("PORT")),
        realm=(environ.get("AUTH_REALM") or "").strip() or None,
        log_level=(environ.get("LOG_LEVEL") or "INFO").strip().upper(),
    )
