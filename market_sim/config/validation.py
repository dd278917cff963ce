"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

PORTFOLIO_FIELDS = {"initial_balance"}
SIMULATION_FIELDS = {"duration_ticks", "tick_interval_seconds"}
PRICING_FIELDS = {"max_step_pct", "step_granularity", "price_floor"}
INSTRUMENT_FIELDS = {"symbol", "price", "alerts"}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _unknown_fields(section: str, params: dict[str, Any], known: set[str]) -> list[ValidationError]:
    return [
        ValidationError(field=f"{section}.{name}", message="Unknown parameter", value=params[name])
        for name in params
        if name not in known
    ]


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_portfolio_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate portfolio parameters."""
        errors = _unknown_fields("portfolio", params, PORTFOLIO_FIELDS)

        if "initial_balance" in params:
            value = params["initial_balance"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="initial_balance",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_simulation_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate simulation parameters."""
        errors = _unknown_fields("simulation", params, SIMULATION_FIELDS)

        if "duration_ticks" in params:
            value = params["duration_ticks"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="duration_ticks",
                    message="Must be a non-negative integer",
                    value=value
                ))

        if "tick_interval_seconds" in params:
            value = params["tick_interval_seconds"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="tick_interval_seconds",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_pricing_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate random walk parameters."""
        errors = _unknown_fields("pricing", params, PRICING_FIELDS)

        if "max_step_pct" in params:
            value = params["max_step_pct"]
            if not _is_number(value) or value <= 0 or value >= 1:
                errors.append(ValidationError(
                    field="max_step_pct",
                    message="Must be a positive number below 1",
                    value=value
                ))

        if "step_granularity" in params:
            value = params["step_granularity"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="step_granularity",
                    message="Must be a positive number",
                    value=value
                ))
            elif _is_number(params.get("max_step_pct")) and value > params["max_step_pct"]:
                errors.append(ValidationError(
                    field="step_granularity",
                    message="Must not exceed max_step_pct",
                    value=value
                ))

        if "price_floor" in params:
            value = params["price_floor"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="price_floor",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_instruments(instruments: Any, price_floor: Any = None) -> list[ValidationError]:
        """Validate the instrument set: non-empty, unique symbols, prices at or above the floor."""
        if not isinstance(instruments, list) or not instruments:
            return [ValidationError(
                field="instruments",
                message="Must be a non-empty list",
                value=instruments
            )]

        errors = []
        seen: set[str] = set()

        for index, spec in enumerate(instruments):
            if not isinstance(spec, dict):
                errors.append(ValidationError(
                    field=f"instruments[{index}]",
                    message="Must be a mapping",
                    value=spec
                ))
                continue

            errors.extend(_unknown_fields(f"instruments[{index}]", spec, INSTRUMENT_FIELDS))

            symbol = spec.get("symbol")
            if not isinstance(symbol, str) or not symbol.strip():
                errors.append(ValidationError(
                    field=f"instruments[{index}].symbol",
                    message="Must be a non-empty string",
                    value=symbol
                ))
            elif symbol.upper() in seen:
                errors.append(ValidationError(
                    field=f"instruments[{index}].symbol",
                    message="Duplicate symbol",
                    value=symbol
                ))
            else:
                seen.add(symbol.upper())

            price = spec.get("price")
            if not _is_number(price) or price <= 0:
                errors.append(ValidationError(
                    field=f"instruments[{index}].price",
                    message="Must be a positive number",
                    value=price
                ))
            elif _is_number(price_floor) and price < price_floor:
                errors.append(ValidationError(
                    field=f"instruments[{index}].price",
                    message="Must not be below price_floor",
                    value=price
                ))

            if "alerts" in spec and not isinstance(spec["alerts"], bool):
                errors.append(ValidationError(
                    field=f"instruments[{index}].alerts",
                    message="Must be a boolean",
                    value=spec["alerts"]
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        for section in ("portfolio", "simulation", "pricing"):
            if section in config and not isinstance(config[section], dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=config[section]
                ))
                config = {k: v for k, v in config.items() if k != section}

        if "portfolio" in config:
            errors.extend(ConfigValidator.validate_portfolio_params(config["portfolio"]))

        if "simulation" in config:
            errors.extend(ConfigValidator.validate_simulation_params(config["simulation"]))

        price_floor = None
        if "pricing" in config:
            errors.extend(ConfigValidator.validate_pricing_params(config["pricing"]))
            price_floor = config["pricing"].get("price_floor")

        if "instruments" in config:
            errors.extend(ConfigValidator.validate_instruments(config["instruments"], price_floor))

        return errors
