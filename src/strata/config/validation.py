"""Configuration validation for Strata.

This module provides validation utilities for configuration values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .schema import LogLevel, StrataConfig

VALID_LOG_LEVELS = {level.value for level in LogLevel}


@dataclass
class ValidationError:
    """Represents a configuration validation error."""

    key: str
    message: str
    value: Any = None

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.key}: {self.message} (got: {self.value!r})"
        return f"{self.key}: {self.message}"


@dataclass
class ValidationResult:
    """Result of configuration validation."""

    valid: bool
    errors: list[ValidationError]
    warnings: list[ValidationError]

    def __bool__(self) -> bool:
        return self.valid


class ConfigValidationError(Exception):
    """Raised when configuration validation fails during a save operation.

    Attributes:
        errors: List of ValidationError objects describing what failed
        warnings: List of ValidationError objects for non-fatal issues
    """

    def __init__(
        self,
        message: str,
        errors: list[ValidationError],
        warnings: Optional[list[ValidationError]] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors
        self.warnings = warnings or []

    def __str__(self) -> str:
        lines = [super().__str__()]
        if self.errors:
            lines.append("Errors:")
            for error in self.errors:
                lines.append(f"  - {error}")
        if self.warnings:
            lines.append("Warnings:")
            for warning in self.warnings:
                lines.append(f"  - {warning}")
        return "\n".join(lines)


def validate_config(config: StrataConfig) -> ValidationResult:
    """Validate a configuration instance.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with errors and warnings
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationError] = []

    _validate_identifiers(config, errors, warnings)
    _validate_csv(config, errors, warnings)
    _validate_logging(config, errors, warnings)

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_identifiers(
    config: StrataConfig,
    errors: list[ValidationError],
    warnings: list[ValidationError],
) -> None:
    """Validate identifier configuration."""
    identifiers = config.identifiers

    if not identifiers.separator:
        errors.append(ValidationError("identifiers.separator", "must not be empty"))
    elif any(char.isdigit() for char in identifiers.separator):
        errors.append(
            ValidationError(
                "identifiers.separator",
                "must not contain digits",
                identifiers.separator,
            )
        )

    if not identifiers.root_id:
        errors.append(ValidationError("identifiers.root_id", "must not be empty"))
    elif identifiers.separator and identifiers.separator in identifiers.root_id:
        errors.append(
            ValidationError(
                "identifiers.root_id",
                "must not contain the separator",
                identifiers.root_id,
            )
        )


def _validate_csv(
    config: StrataConfig,
    errors: list[ValidationError],
    warnings: list[ValidationError],
) -> None:
    """Validate CSV configuration."""
    csv_cfg = config.csv

    if len(csv_cfg.delimiter) != 1:
        errors.append(
            ValidationError(
                "csv.delimiter",
                "must be a single character",
                csv_cfg.delimiter,
            )
        )
    elif csv_cfg.delimiter == config.identifiers.separator:
        errors.append(
            ValidationError(
                "csv.delimiter",
                "must differ from the identifier separator",
                csv_cfg.delimiter,
            )
        )

    if not csv_cfg.with_header and csv_cfg.with_instance_names:
        warnings.append(
            ValidationError(
                "csv.with_instance_names",
                "instance names without a header row are easy to misalign",
                csv_cfg.with_instance_names,
            )
        )


def _validate_logging(
    config: StrataConfig,
    errors: list[ValidationError],
    warnings: list[ValidationError],
) -> None:
    """Validate logging configuration."""
    logging_cfg = config.logging

    if logging_cfg.level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            ValidationError(
                "logging.level",
                f"must be one of {VALID_LOG_LEVELS}",
                logging_cfg.level,
            )
        )

    if not logging_cfg.console and not logging_cfg.file:
        warnings.append(
            ValidationError(
                "logging.console",
                "console logging is off and no log file is set",
                logging_cfg.console,
            )
        )


def validate_value(key: str, value: Any) -> Optional[ValidationError]:
    """Validate a single configuration value.

    Args:
        key: Configuration key (dot notation)
        value: Value to validate

    Returns:
        ValidationError if invalid, None if valid
    """
    validators = {
        "builder.fix_breadth_gaps": lambda v: (
            None if isinstance(v, bool) else ValidationError(key, "must be a boolean", v)
        ),
        "builder.use_subtree": lambda v: (
            None if isinstance(v, bool) else ValidationError(key, "must be a boolean", v)
        ),
        "csv.delimiter": lambda v: (
            None
            if isinstance(v, str) and len(v) == 1
            else ValidationError(key, "must be a single character", v)
        ),
        "logging.level": lambda v: (
            None
            if str(v).upper() in VALID_LOG_LEVELS
            else ValidationError(key, "must be a valid log level", v)
        ),
    }

    if key in validators:
        return validators[key](value)

    return None
