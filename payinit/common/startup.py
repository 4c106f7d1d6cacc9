"""Startup-time helpers for safe config logging."""

import os
from urllib.parse import urlsplit

from payinit.common.logging import logger


def _redact_dsn(value: str) -> str:
    """Hide the password component of a database URL."""

    parts = urlsplit(value)
    if parts.password is None:
        return value
    netloc = parts.netloc.replace(f":{parts.password}@", ":<redacted>@", 1)
    return parts._replace(netloc=netloc).geturl()


def _safe_env(name: str) -> str:
    """Return env value with simple redaction for secret-like variable names."""

    value = os.getenv(name)
    if value is None:
        return "<unset>"
    if any(secret in name for secret in ["KEY", "SECRET", "PASSWORD", "TOKEN"]):
        return "<redacted>"
    if name.endswith("_URL") or name.endswith("_DSN"):
        return _redact_dsn(value)
    return value


def log_startup_config(service_name: str, keys: list[str]) -> None:
    """Log selected startup config keys for quick troubleshooting."""

    config = {"service": service_name}
    for key in keys:
        config[key] = _safe_env(key)
    logger.info("startup_config=%s", config)
