"""Client configuration for the itBit SDK."""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .api.error import ConfigurationError

# Public and private REST base URLs
DEFAULT_SERVER_V1 = "https://api.itbit.com/v1"
DEFAULT_SERVER_V2 = "https://www.itbit.com/api/v2"

# Per-request timeout in milliseconds
DEFAULT_TIMEOUT_MS = 5000

DEFAULT_USER_AGENT = "itBit python client"

ENV_API_KEY = "ITBIT_API_KEY"
ENV_API_SECRET = "ITBIT_API_SECRET"
ENV_SERVER_V1 = "ITBIT_SERVER_V1"
ENV_SERVER_V2 = "ITBIT_SERVER_V2"
ENV_TIMEOUT_MS = "ITBIT_TIMEOUT_MS"


@dataclass(frozen=True, repr=False)
class ClientConfig:
    """Immutable settings for an :class:`ItbitApiClient`.

    Key and secret are only required for private endpoints.
    """

    key: Optional[str] = None
    secret: Optional[str] = None
    server_v1: str = DEFAULT_SERVER_V1
    server_v2: str = DEFAULT_SERVER_V2
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if isinstance(self.timeout_ms, bool) or not isinstance(self.timeout_ms, int):
            raise ConfigurationError(f"timeout_ms must be an integer, got {self.timeout_ms!r}")
        if self.timeout_ms <= 0:
            raise ConfigurationError(f"timeout_ms must be positive, got {self.timeout_ms}")
        if not self.server_v1 or not self.server_v2:
            raise ConfigurationError("server URLs cannot be empty")
        # frozen dataclass, so bypass __setattr__
        object.__setattr__(self, "server_v1", self.server_v1.rstrip("/"))
        object.__setattr__(self, "server_v2", self.server_v2.rstrip("/"))

    @property
    def has_credentials(self) -> bool:
        """True when both key and secret are set."""
        return bool(self.key) and bool(self.secret)

    @property
    def timeout_secs(self) -> float:
        return self.timeout_ms / 1000.0

    def with_overrides(self, **overrides: Optional[object]) -> "ClientConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Load configuration from ``ITBIT_*`` environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Raises:
            ConfigurationError: If ``ITBIT_TIMEOUT_MS`` is not a positive integer
        """
        env = os.environ if environ is None else environ

        timeout_ms = DEFAULT_TIMEOUT_MS
        raw_timeout = env.get(ENV_TIMEOUT_MS)
        if raw_timeout:
            try:
                timeout_ms = int(raw_timeout)
            except ValueError:
                raise ConfigurationError(
                    f"{ENV_TIMEOUT_MS} must be an integer, got {raw_timeout!r}"
                )

        return cls(
            key=env.get(ENV_API_KEY) or None,
            secret=env.get(ENV_API_SECRET) or None,
            server_v1=env.get(ENV_SERVER_V1) or DEFAULT_SERVER_V1,
            server_v2=env.get(ENV_SERVER_V2) or DEFAULT_SERVER_V2,
            timeout_ms=timeout_ms,
        )

    def __repr__(self) -> str:
        # Never expose the secret
        secret = "***" if self.secret else None
        return (
            f"ClientConfig(key={self.key!r}, secret={secret!r}, "
            f"server_v1={self.server_v1!r}, server_v2={self.server_v2!r}, "
            f"timeout_ms={self.timeout_ms}, user_agent={self.user_agent!r})"
        )
