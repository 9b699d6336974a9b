"""Runtime settings read from the environment.

Values may also come from a ``.env`` file in the working directory, which is
loaded (without overriding variables already set) the first time
``Settings.from_env`` runs.  All variables share the ``RSSHUB_MCP_`` prefix.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from rsshub_mcp.main.tools.catalog_client import (
    DEFAULT_NAMESPACES_TTL_SECS,
    DEFAULT_RADAR_RULES_TTL_SECS,
)
from rsshub_mcp.main.tools.fetcher import (
    DEFAULT_HOST,
    DEFAULT_RETRIES,
    DEFAULT_RETRY_BACKOFF_MS,
    DEFAULT_TIMEOUT,
)

ENV_PREFIX = "RSSHUB_MCP_"
TRANSPORTS = ("stdio", "http")


def _get_int(env: Mapping[str, str], name: str, default: int, minimum: int = 0) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}")
    if value < minimum:
        raise ValueError(f"{ENV_PREFIX}{name} must be >= {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    host: str = DEFAULT_HOST
    timeout: int = int(DEFAULT_TIMEOUT)
    retries: int = DEFAULT_RETRIES
    retry_backoff_ms: int = DEFAULT_RETRY_BACKOFF_MS
    namespaces_ttl_secs: int = DEFAULT_NAMESPACES_TTL_SECS
    radar_rules_ttl_secs: int = DEFAULT_RADAR_RULES_TTL_SECS
    transport: str = "stdio"
    server_host: str = "127.0.0.1"
    server_port: int = 8000

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from *env* (defaults to ``os.environ`` plus ``.env``).

        Raises ``ValueError`` for malformed values; a server cannot start with
        a broken configuration.
        """
        if env is None:
            load_dotenv()
            env = os.environ

        host = (env.get(ENV_PREFIX + "HOST") or DEFAULT_HOST).strip().rstrip("/")
        if not host.startswith(("http://", "https://")):
            raise ValueError(f"{ENV_PREFIX}HOST must be an http(s) URL, got {host!r}")

        transport = (env.get(ENV_PREFIX + "TRANSPORT") or "stdio").strip().lower()
        if transport not in TRANSPORTS:
            raise ValueError(f"{ENV_PREFIX}TRANSPORT must be one of {TRANSPORTS}, got {transport!r}")

        return cls(
            host=host,
            timeout=_get_int(env, "TIMEOUT", int(DEFAULT_TIMEOUT), minimum=1),
            retries=_get_int(env, "RETRIES", DEFAULT_RETRIES, minimum=1),
            retry_backoff_ms=_get_int(env, "RETRY_BACKOFF_MS", DEFAULT_RETRY_BACKOFF_MS),
            namespaces_ttl_secs=_get_int(env, "NAMESPACES_TTL_SECS", DEFAULT_NAMESPACES_TTL_SECS),
            radar_rules_ttl_secs=_get_int(env, "RADAR_RULES_TTL_SECS", DEFAULT_RADAR_RULES_TTL_SECS),
            transport=transport,
            server_host=(env.get(ENV_PREFIX + "SERVER_HOST") or "127.0.0.1").strip(),
            server_port=_get_int(env, "SERVER_PORT", 8000, minimum=1),
        )
