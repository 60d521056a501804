"""Configuration schema dataclasses for Strata.

This module defines all configuration options as typed dataclasses,
providing a single source of truth for default values and types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..core.identifiers import HIERARCHY_BRANCH_SEPARATOR, ROOT_ID, IdentifierScheme


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class BuilderConfig:
    """Hierarchy builder settings."""

    fix_breadth_gaps: bool = False
    use_subtree: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "fix_breadth_gaps": self.fix_breadth_gaps,
            "use_subtree": self.use_subtree,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BuilderConfig:
        """Create from dictionary."""
        return cls(
            fix_breadth_gaps=data.get("fix_breadth_gaps", False),
            use_subtree=data.get("use_subtree", False),
        )


@dataclass
class IdentifierConfig:
    """How node identifiers are spelled."""

    separator: str = HIERARCHY_BRANCH_SEPARATOR
    root_id: str = ROOT_ID

    def to_scheme(self) -> IdentifierScheme:
        return IdentifierScheme(separator=self.separator, root_id=self.root_id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"separator": self.separator, "root_id": self.root_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> IdentifierConfig:
        """Create from dictionary."""
        return cls(
            separator=data.get("separator", HIERARCHY_BRANCH_SEPARATOR),
            root_id=data.get("root_id", ROOT_ID),
        )


@dataclass
class CSVConfig:
    """Layout of generated hierarchy CSV files."""

    delimiter: str = ","
    with_header: bool = True
    with_true_class: bool = False
    with_instance_names: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "delimiter": self.delimiter,
            "with_header": self.with_header,
            "with_true_class": self.with_true_class,
            "with_instance_names": self.with_instance_names,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CSVConfig:
        """Create from dictionary."""
        return cls(
            delimiter=data.get("delimiter", ","),
            with_header=data.get("with_header", True),
            with_true_class=data.get("with_true_class", False),
            with_instance_names=data.get("with_instance_names", False),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(levelname)s - %(name)s - %(message)s"
    file: Optional[str] = None
    console: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "level": self.level,
            "format": self.format,
            "file": self.file,
            "console": self.console,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LoggingConfig:
        """Create from dictionary."""
        return cls(
            level=data.get("level", "INFO"),
            format=data.get("format", "%(levelname)s - %(name)s - %(message)s"),
            file=data.get("file"),
            console=data.get("console", True),
        )


@dataclass
class StrataConfig:
    """Main configuration container for Strata.

    Configuration is loaded from multiple sources with the following priority:
    1. Programmatic (highest) - Direct API calls
    2. Environment Variables - STRATA_* prefixed
    3. Project Config - ./strata.toml
    4. User Config - ~/.config/strata/config.toml
    5. Defaults (lowest) - Built-in defaults
    """

    builder: BuilderConfig = field(default_factory=BuilderConfig)
    identifiers: IdentifierConfig = field(default_factory=IdentifierConfig)
    csv: CSVConfig = field(default_factory=CSVConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "builder": self.builder.to_dict(),
            "identifiers": self.identifiers.to_dict(),
            "csv": self.csv.to_dict(),
            "logging": self.logging.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StrataConfig:
        """Create configuration from dictionary."""
        return cls(
            builder=BuilderConfig.from_dict(data.get("builder", {})),
            identifiers=IdentifierConfig.from_dict(data.get("identifiers", {})),
            csv=CSVConfig.from_dict(data.get("csv", {})),
            logging=LoggingConfig.from_dict(data.get("logging", {})),
        )

    def get_nested(self, key: str, default: Any = None) -> Any:
        """Get a nested configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., "builder.use_subtree")
            default: Default value if key not found

        Returns:
            The configuration value or default
        """
        obj: Any = self
        for part in key.split("."):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            elif isinstance(obj, dict) and part in obj:
                obj = obj[part]
            else:
                return default
        return obj

    def set_nested(self, key: str, value: Any) -> None:
        """Set a nested configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., "builder.use_subtree")
            value: Value to set
        """
        parts = key.split(".")
        obj: Any = self
        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise KeyError(f"Invalid configuration key: {key}")
        if not hasattr(obj, parts[-1]):
            raise KeyError(f"Invalid configuration key: {key}")
        setattr(obj, parts[-1], value)
