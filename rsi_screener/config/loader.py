"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    ExchangeParams,
    LoggingParams,
    OutputParams,
    RSIParams,
    ScreenerConfig,
    ScreenerParams,
    get_default_config,
)
from .validation import ConfigValidator

SECTION_TYPES = {
    "exchange": ExchangeParams,
    "rsi": RSIParams,
    "screener": ScreenerParams,
    "output": OutputParams,
    "logging": LoggingParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_path: Path
    defaults: ScreenerConfig

    @classmethod
    def create(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_path is None:
            config_path = Path(__file__).parent.parent.parent / "config" / "screener.yaml"

        return cls(
            config_path=Path(config_path),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from the YAML config file, if present."""
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path) as f:
                file_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in {self.config_path}: {e}",
                source=str(self.config_path)
            ) from e

        if file_config is None:
            return {}

        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"Top level of {self.config_path} must be a mapping",
                source=str(self.config_path)
            )

        # A section header with nothing under it overrides nothing
        return {name: values for name, values in file_config.items() if values is not None}

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides, e.g. from the command line (highest priority)
        2. YAML config file
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> ScreenerConfig:
        """
        Merge, validate and build the screener configuration.

        Raises:
            ConfigurationError: If any parameter fails validation
        """
        merged = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value!r})" for err in errors]
            raise ConfigurationError(
                "Invalid configuration: " + "; ".join(error_msgs),
                errors=errors,
                source=str(self.config_path)
            )

        return self.build_config(merged)

    def build_config(self, config: dict[str, Any]) -> ScreenerConfig:
        """Build a ScreenerConfig from a merged configuration dictionary."""
        unknown_sections = set(config) - set(SECTION_TYPES)
        if unknown_sections:
            raise ConfigurationError(
                f"Unknown configuration sections: {sorted(unknown_sections)}",
                source=str(self.config_path)
            )

        sections = {}
        for name, section_type in SECTION_TYPES.items():
            values = config.get(name, {})
            if not isinstance(values, dict):
                raise ConfigurationError(
                    f"Section '{name}' must be a mapping",
                    source=str(self.config_path)
                )

            known = {f.name for f in fields(section_type)}
            unknown = set(values) - known
            if unknown:
                raise ConfigurationError(
                    f"Unknown keys in section '{name}': {sorted(unknown)}",
                    source=str(self.config_path)
                )
            sections[name] = section_type(**values)

        return ScreenerConfig(**sections)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
