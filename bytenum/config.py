"""
Runtime configuration for `bytenum`.

Settings come from, in order of precedence: an explicit `BigIntConfig`, a
YAML file (`load_config`), or `BYTENUM_*` environment variables
(`config_from_env`). The process-wide active config is resolved lazily by
`get_config()` and can be swapped with `set_config()`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml

NEGATIVE_SQRT_POLICIES = ("zero", "raise")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class BigIntConfig:
    # What `sqrt()` does with a negative value when the sign is not ignored:
    # - "zero": return 0,
    # - "raise": raise NegativeSquareRootError.
    negative_sqrt_policy: str = "zero"

    # Primality tests on values longer than this many bytes log a warning.
    prime_warn_bytes: int = 8

    # Only the CLI applies this; the library never configures logging handlers.
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.negative_sqrt_policy not in NEGATIVE_SQRT_POLICIES:
            raise ValueError(
                f"negative_sqrt_policy must be one of {NEGATIVE_SQRT_POLICIES}: {self.negative_sqrt_policy!r}"
            )
        if not isinstance(self.prime_warn_bytes, int) or isinstance(self.prime_warn_bytes, bool):
            raise TypeError("prime_warn_bytes must be an int")
        if self.prime_warn_bytes < 0:
            raise ValueError(f"prime_warn_bytes must be non-negative: {self.prime_warn_bytes}")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}: {self.log_level!r}")

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


def _env_int(name: str, default: int, *, lo: int, hi: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError:
        return int(default)
    if v < lo:
        return int(lo)
    if v > hi:
        return int(hi)
    return int(v)


def _env_choice(name: str, default: str, choices: tuple[str, ...], *, upper: bool = False) -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    v = v.upper() if upper else v.lower()
    return v if v in choices else default


def config_from_env() -> BigIntConfig:
    return BigIntConfig(
        negative_sqrt_policy=_env_choice("BYTENUM_NEGATIVE_SQRT_POLICY", "zero", NEGATIVE_SQRT_POLICIES),
        prime_warn_bytes=_env_int("BYTENUM_PRIME_WARN_BYTES", 8, lo=0, hi=1 << 20),
        log_level=_env_choice("BYTENUM_LOG_LEVEL", "WARNING", LOG_LEVELS, upper=True),
    )


def config_from_mapping(obj: Mapping[str, Any], *, base: BigIntConfig | None = None) -> BigIntConfig:
    """Overlay the known keys of `obj` on `base` (defaults when omitted)."""
    base = base or BigIntConfig()
    known = {f.name for f in fields(BigIntConfig)}
    unknown = sorted(set(obj) - known)
    if unknown:
        raise ValueError(f"unknown config keys: {unknown}")
    values = {f.name: getattr(base, f.name) for f in fields(BigIntConfig)}
    values.update(obj)
    if isinstance(values["log_level"], str):
        values["log_level"] = values["log_level"].upper()
    return BigIntConfig(**values)


def load_config(path: str | Path) -> BigIntConfig:
    """
    Load a YAML config file, e.g.::

        negative_sqrt_policy: raise
        prime_warn_bytes: 16

    Keys left out fall back to the environment, then to the defaults.
    """
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if obj is None:
        obj = {}
    if not isinstance(obj, Mapping):
        raise TypeError("config YAML must be a mapping")
    return config_from_mapping(obj, base=config_from_env())


@lru_cache(maxsize=1)
def _default_config() -> BigIntConfig:
    return config_from_env()


_active: BigIntConfig | None = None


def get_config() -> BigIntConfig:
    return _active if _active is not None else _default_config()


def set_config(config: BigIntConfig | None) -> None:
    """Replace the active config; `None` goes back to the environment defaults."""
    global _active
    if config is not None and not isinstance(config, BigIntConfig):
        raise TypeError("config must be a BigIntConfig")
    _active = config
