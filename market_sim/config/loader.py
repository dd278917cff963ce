"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import structlog
import yaml

from ..errors import ConfigurationError
from .defaults import (
    DefaultConfig,
    InstrumentSpec,
    PortfolioParams,
    PricingParams,
    SimulationParams,
    get_default_config,
)
from .validation import ConfigValidator

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "market.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_path: Path
    defaults: DefaultConfig
    required: bool = False

    @classmethod
    def create(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """
        Create a ConfigLoader instance.

        An explicitly given path must exist; only the bundled default path
        may be absent.
        """
        required = config_path is not None
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        return cls(
            config_path=Path(config_path),
            defaults=get_default_config(),
            required=required,
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from the YAML file, empty when an optional file is absent."""
        if not self.config_path.exists():
            if self.required:
                raise ConfigurationError(
                    f"Configuration file not found: {self.config_path}",
                    context={"path": str(self.config_path)}
                )
            logger.debug("No configuration file, using defaults", path=str(self.config_path))
            return {}

        with open(self.config_path) as f:
            file_config = yaml.safe_load(f)

        if file_config is None:
            return {}
        if not isinstance(file_config, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping",
                context={"path": str(self.config_path)}
            )
        return file_config

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides, e.g. command line (highest priority)
        2. YAML configuration file
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merge, validate and build the typed configuration."""
        merged = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            logger.error("Configuration validation failed", errors=error_msgs)
            raise ConfigurationError(
                "Invalid configuration: " + "; ".join(error_msgs),
                errors=errors
            )

        return DefaultConfig(
            portfolio=PortfolioParams(**merged["portfolio"]),
            simulation=SimulationParams(**merged["simulation"]),
            pricing=PricingParams(**merged["pricing"]),
            instruments=tuple(InstrumentSpec(**spec) for spec in merged["instruments"]),
        )

    def _dataclass_to_dict(self, obj: Any) -> Any:
        """Convert nested dataclasses (and tuples of them) to plain data."""
        if hasattr(obj, '__dataclass_fields__'):
            return {
                field_name: self._dataclass_to_dict(getattr(obj, field_name))
                for field_name in obj.__dataclass_fields__
            }
        if isinstance(obj, (list, tuple)):
            return [self._dataclass_to_dict(item) for item in obj]
        return obj

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries. Lists are replaced, not merged."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
