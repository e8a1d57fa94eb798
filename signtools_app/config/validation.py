"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

ALERT_POLICY_NAMES = ("none", "first_time", "update", "first_and_update", "every_time")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_marker_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate marker parameters."""
        errors = []

        for name in ("buy_icon", "sell_icon"):
            if name in params:
                value = params[name]
                if not isinstance(value, str) or not value:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-empty string",
                        value=value
                    ))

        if "buy_icon" in params and "sell_icon" in params:
            if params["buy_icon"] == params["sell_icon"]:
                errors.append(ValidationError(
                    field="sell_icon",
                    message="Must differ from buy_icon",
                    value=params["sell_icon"]
                ))

        if params.get("draw_margin") is not None:
            value = params["draw_margin"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="draw_margin",
                    message="Must be a non-negative number",
                    value=value
                ))

        if "draw_margin_fraction" in params:
            value = params["draw_margin_fraction"]
            if not _is_number(value) or value < 0 or value > 1:
                errors.append(ValidationError(
                    field="draw_margin_fraction",
                    message="Must be a number between 0 and 1",
                    value=value
                ))

        if "trainer_link" in params:
            value = params["trainer_link"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="trainer_link",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_navigation_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate navigation parameters."""
        errors = []

        for name in ("jump_margin", "newest_overscroll"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-negative integer",
                        value=value
                    ))

        if "range_margin_fraction" in params:
            value = params["range_margin_fraction"]
            if not _is_number(value) or value < 0 or value > 1:
                errors.append(ValidationError(
                    field="range_margin_fraction",
                    message="Must be a number between 0 and 1",
                    value=value
                ))

        if "show_navigation_buttons" in params:
            value = params["show_navigation_buttons"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="show_navigation_buttons",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_alert_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate alert parameters."""
        errors = []

        if "policy" in params:
            value = params["policy"]
            if value not in ALERT_POLICY_NAMES:
                errors.append(ValidationError(
                    field="policy",
                    message=f"Must be one of {', '.join(ALERT_POLICY_NAMES)}",
                    value=value
                ))

        for name in ("sound_resource", "sound_directory"):
            if name in params:
                value = params[name]
                if value is not None and not isinstance(value, str):
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a string",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_signal_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate moving-average evaluator parameters."""
        errors = []

        for name in ("short_period", "long_period"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "marker" in config:
            errors.extend(ConfigValidator.validate_marker_params(config["marker"]))

        if "navigation" in config:
            errors.extend(ConfigValidator.validate_navigation_params(config["navigation"]))

        if "alert" in config:
            errors.extend(ConfigValidator.validate_alert_params(config["alert"]))

        if "signal" in config:
            errors.extend(ConfigValidator.validate_signal_params(config["signal"]))

        return errors
