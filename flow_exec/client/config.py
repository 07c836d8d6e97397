"""Configuration and credentials for the flow execution client."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from typing import ClassVar, Union

from flow_exec.errors import ConfigurationError

DEFAULT_ROUTE = "{project_id}/{flow_id}"
DEFAULT_TIMEOUT = 120.0


@dataclass(frozen=True)
class ApiKeyCredential:
    """Long-lived API key. Fixed for the lifetime of the client."""

    kind: ClassVar[str] = "api_key"

    api_key: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigurationError("api_key must be a non-empty string")

    @property
    def secret(self) -> str:
        return self.api_key

    def authorization_header(self) -> str:
        return f"Bearer {self.api_key}"


@dataclass(frozen=True)
class AccessTokenCredential:
    """Short-lived access token. May be rotated through FlowClient.update_access_token."""

    kind: ClassVar[str] = "access_token"

    access_token: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.access_token:
            raise ConfigurationError("access_token must be a non-empty string")

    @property
    def secret(self) -> str:
        return self.access_token

    def authorization_header(self) -> str:
        return f"Bearer {self.access_token}"


Credential = Union[ApiKeyCredential, AccessTokenCredential]


def select_credential(api_key: str | None, access_token: str | None) -> Credential:
    """Pick the single credential variant, rejecting both-or-neither."""
    if api_key and access_token:
        raise ConfigurationError("api_key and access_token are mutually exclusive; supply exactly one")
    if api_key:
        return ApiKeyCredential(api_key)
    if access_token:
        return AccessTokenCredential(access_token)
    raise ConfigurationError("one of api_key or access_token is required")


@dataclass(frozen=True)
class ClientConfig:
    """Immutable connection settings for a FlowClient."""

    endpoint: str
    project_id: str
    credential: Credential
    timeout: float = DEFAULT_TIMEOUT
    route: str = DEFAULT_ROUTE
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if not self.endpoint or not self.endpoint.strip():
            raise ConfigurationError("endpoint is required")
        if not self.project_id or not self.project_id.strip():
            raise ConfigurationError("project_id is required")
        if not isinstance(self.credential, (ApiKeyCredential, AccessTokenCredential)):
            raise ConfigurationError(f"unsupported credential type: {type(self.credential).__name__}")
        if not (self.timeout > 0 and math.isfinite(self.timeout)):
            raise ConfigurationError(f"timeout must be a positive finite number, got {self.timeout!r}")
        if "{flow_id}" not in self.route:
            raise ConfigurationError("route must contain a {flow_id} placeholder")
        level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigurationError(f"unknown log level: {self.log_level!r}")
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "endpoint", self.endpoint.rstrip("/"))
        object.__setattr__(self, "log_level", level)

    @classmethod
    def create(
        cls,
        endpoint: str,
        project_id: str,
        api_key: str | None = None,
        access_token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        route: str = DEFAULT_ROUTE,
        log_level: str = "WARNING",
    ) -> ClientConfig:
        return cls(
            endpoint=endpoint,
            project_id=project_id,
            credential=select_credential(api_key, access_token),
            timeout=timeout,
            route=route,
            log_level=log_level,
        )

    @classmethod
    def from_env(cls) -> ClientConfig:
        raw_timeout = os.getenv("FLOW_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(f"FLOW_TIMEOUT must be a number, got {raw_timeout!r}") from None
        return cls.create(
            endpoint=os.getenv("FLOW_ENDPOINT", ""),
            project_id=os.getenv("FLOW_PROJECT_ID", ""),
            api_key=os.getenv("FLOW_API_KEY") or None,
            access_token=os.getenv("FLOW_ACCESS_TOKEN") or None,
            timeout=timeout,
            route=os.getenv("FLOW_ROUTE", DEFAULT_ROUTE),
            log_level=os.getenv("FLOW_LOG_LEVEL", "WARNING"),
        )

    def url_for(self, path: str) -> str:
        return f"{self.endpoint}/{path.lstrip('/')}"

