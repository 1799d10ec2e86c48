"""Command-line configuration for exprcalc."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from exprcalc.engine import ConfigurationError, NumericDomain, get_domain

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class CalcConfig:
    """Settings shared by the calc and nums commands.

    Attributes:
        domain: Name of the numeric domain ("float" or "integer")
        round: Decimal places to round float results to, or None for no rounding
        integers_only: nums treats "2.5" as the two numbers 2 and 5
    """

    domain: str = "float"
    round: int | None = None
    integers_only: bool = False

    def __post_init__(self) -> None:
        get_domain(self.domain)
        if self.round is not None and self.round < 0:
            raise ConfigurationError(f"round must not be negative, got {self.round}")

    @property
    def numeric_domain(self) -> NumericDomain:
        return get_domain(self.domain)

    @classmethod
    def from_env(cls, base: CalcConfig | None = None) -> CalcConfig:
        """Apply environment overrides on top of base (or the defaults).

        Reads EXPRCALC_DOMAIN, EXPRCALC_ROUND and EXPRCALC_INTEGERS_ONLY.
        Invalid values are logged and ignored.
        """
        config = base or cls()

        domain = os.environ.get("EXPRCALC_DOMAIN")
        if domain:
            try:
                config = replace(config, domain=domain.strip().lower())
            except ConfigurationError as e:
                logger.warning("Ignoring EXPRCALC_DOMAIN: %s", e)

        round_digits = os.environ.get("EXPRCALC_ROUND")
        if round_digits:
            try:
                config = replace(config, round=int(round_digits))
            except (ValueError, ConfigurationError) as e:
                logger.warning("Ignoring EXPRCALC_ROUND=%r: %s", round_digits, e)

        integers_only = os.environ.get("EXPRCALC_INTEGERS_ONLY")
        if integers_only is not None:
            flag = integers_only.strip().lower()
            if flag in _TRUE_VALUES:
                config = replace(config, integers_only=True)
            elif flag in _FALSE_VALUES:
                config = replace(config, integers_only=False)
            else:
                logger.warning(
                    "Ignoring EXPRCALC_INTEGERS_ONLY=%r: not a boolean", integers_only
                )

        return config

    @classmethod
    def from_file(cls, path: Path, base: CalcConfig | None = None) -> CalcConfig:
        """Apply settings from a YAML file on top of base (or the defaults).

        Example file:
            domain: integer
            round: 3

        Raises:
            ConfigurationError: If the file is not valid YAML, is not a
                mapping, or holds unknown keys or invalid values
        """
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return base or cls()
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a mapping of settings")

        known = {f.name for f in fields(cls)}
        overrides: dict[str, Any] = {}
        for key, value in data.items():
            name = str(key).replace("-", "_")
            if name not in known:
                raise ConfigurationError(f"Unknown setting '{key}' in {path}")
            overrides[name] = value

        if "round" in overrides and overrides["round"] is not None:
            if isinstance(overrides["round"], bool) or not isinstance(overrides["round"], int):
                raise ConfigurationError(f"'round' in {path} must be an integer")
        if "integers_only" in overrides and not isinstance(overrides["integers_only"], bool):
            raise ConfigurationError(f"'integers_only' in {path} must be true or false")
        if "domain" in overrides:
            overrides["domain"] = str(overrides["domain"]).lower()

        return replace(base or cls(), **overrides)

    @classmethod
    def resolve(cls, config_path: Path | None = None, **options: Any) -> CalcConfig:
        """Resolve settings: explicit options > YAML file > environment > defaults.

        Options whose value is None are treated as not given.
        """
        config = cls.from_env()
        if config_path is not None:
            config = cls.from_file(config_path, base=config)

        explicit = {key: value for key, value in options.items() if value is not None}
        if explicit:
            config = replace(config, **explicit)

        logger.debug("Resolved configuration: %s", config)
        return config
