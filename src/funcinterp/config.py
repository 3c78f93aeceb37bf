"""Interpreter configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from funcinterp.expressions.parser import DEFAULT_INTEGER_BITS, DEFAULT_MAX_DEPTH

ENV_PREFIX = "FUNCINTERP_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {name}: {value!r}")


def _parse_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid integer for {name}: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid integer for {name}: {value!r}") from None


@dataclass
class InterpreterConfig:
    """Settings for an interpreter session.

    Attributes:
        integer_bits: Width of the signed integers used for literals and
            arithmetic (results wrap around on overflow)
        max_depth: Maximum nesting depth of function calls
        strict: Reject value tokens that are neither integers nor function
            names instead of dropping them
        log_level: Level the CLI configures logging with
    """

    integer_bits: int = DEFAULT_INTEGER_BITS
    max_depth: int = DEFAULT_MAX_DEPTH
    strict: bool = False
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.integer_bits < 2:
            raise ValueError(f"integer_bits must be at least 2, got {self.integer_bits}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")
        level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")
        self.log_level = level

    @classmethod
    def from_mapping(cls, data: dict[str, Any], base: InterpreterConfig | None = None) -> InterpreterConfig:
        """Overlay a mapping of settings on `base` (or the defaults).

        Raises:
            ValueError: For unknown keys or values of the wrong type.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

        values: dict[str, Any] = {}
        for key, value in data.items():
            if key in ("integer_bits", "max_depth"):
                values[key] = _parse_int(value, key)
            elif key == "strict":
                values[key] = _parse_bool(value, key)
            else:
                values[key] = str(value)

        return replace(base or cls(), **values)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> InterpreterConfig:
        """Create config from environment variables.

        Resolution order:
        1. FUNCINTERP_INTEGER_BITS, FUNCINTERP_MAX_DEPTH, FUNCINTERP_STRICT,
           FUNCINTERP_LOG_LEVEL
        2. Defaults
        """
        environ = os.environ if environ is None else environ
        data = {}
        for f in fields(cls):
            value = environ.get(ENV_PREFIX + f.name.upper())
            if value is not None:
                data[f.name] = value
        return cls.from_mapping(data)

    @classmethod
    def from_yaml(cls, path: Path, environ: dict[str, str] | None = None) -> InterpreterConfig:
        """Load settings from a YAML file, overlaid on environment resolution."""
        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Cannot parse {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")

        return cls.from_mapping(data, base=cls.from_env(environ))
