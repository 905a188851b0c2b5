"""Runtime settings for the gate engine and key generation."""
import os
from dataclasses import dataclass, replace
from typing import Optional

from .constants import DEFAULT_WORKERS, WORD_SIZE
from .errors import ConfigurationError

BACKENDS = ("clear", "jaxite", "concrete")
CARRY_STRATEGIES = ("ripple", "prefix")

ENV_PREFIX = "FHE_SHA256_"


@dataclass(frozen=True)
class EngineConfig:
    backend: str = "clear"
    workers: int = DEFAULT_WORKERS
    carry: str = "ripple"
    seed: Optional[int] = None
    key_cache: Optional[str] = None

    @classmethod
    def from_env(cls, environ=None) -> "EngineConfig":
        """Build a config from FHE_SHA256_* variables, falling back to defaults."""
        environ = os.environ if environ is None else environ
        config = cls()
        overrides = {}
        for name, cast in (("backend", str), ("workers", int), ("carry", str),
                           ("seed", int), ("key_cache", str)):
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is None or raw == "":
                continue
            try:
                overrides[name] = cast(raw)
            except ValueError as exc:
                raise ConfigurationError(f"{ENV_PREFIX}{name.upper()}={raw!r} is not a valid {cast.__name__}") from exc
        return replace(config, **overrides).validate()

    def with_overrides(self, **overrides) -> "EngineConfig":
        """Copy with the non-None keyword arguments applied."""
        overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **overrides).validate()

    def validate(self) -> "EngineConfig":
        if self.backend not in BACKENDS:
            raise ConfigurationError(f"unknown backend {self.backend!r}, expected one of {', '.join(BACKENDS)}")
        if self.carry not in CARRY_STRATEGIES:
            raise ConfigurationError(f"unknown carry strategy {self.carry!r}, expected one of {', '.join(CARRY_STRATEGIES)}")
        # Chunks must tile the word evenly
        if self.workers < 1 or WORD_SIZE % self.workers:
            raise ConfigurationError(f"workers must be a divisor of {WORD_SIZE}, got {self.workers}")
        return self
