"""Boolean FHE backends and key generation."""
import importlib
import logging
import time

from ..config import BACKENDS, EngineConfig
from ..errors import ConfigurationError
from .base import (
    TRIVIAL_FALSE,
    TRIVIAL_TRUE,
    ClientKey,
    KeyPair,
    ServerKey,
    TrivialBit,
    trivial_bit,
)

logger = logging.getLogger(__name__)

_MODULES = {
    "clear": ".clear",
    "jaxite": ".jaxite_backend",
    "concrete": ".concrete_backend",
}
_DISTRIBUTIONS = {"jaxite": "jaxite", "concrete": "concrete-python"}


def load_backend(name):
    if name not in BACKENDS:
        raise ConfigurationError(f"unknown backend {name!r}")
    try:
        return importlib.import_module(_MODULES[name], __name__)
    except ImportError as exc:
        raise ConfigurationError(
            f"backend {name!r} needs the {_DISTRIBUTIONS[name]!r} package: pip install fhe-sha256[{name}]"
        ) from exc


def generate_keys(config=None) -> KeyPair:
    """Generate a client/server key pair for the configured backend."""
    config = (config or EngineConfig()).validate()
    backend = load_backend(config.backend)
    start = time.perf_counter()
    keys = backend.generate_keys(config)
    logger.info("generated %s keys in %.2fs", config.backend, time.perf_counter() - start)
    return keys


__all__ = [
    "TRIVIAL_FALSE",
    "TRIVIAL_TRUE",
    "ClientKey",
    "KeyPair",
    "ServerKey",
    "TrivialBit",
    "generate_keys",
    "load_backend",
    "trivial_bit",
]
