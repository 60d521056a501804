"""Configuration system for Strata.

Configuration Sources (Priority Order):
1. Programmatic (highest) - Direct API calls
2. Environment Variables - STRATA_* prefixed variables
3. Project Config - ./strata.toml (or --config PATH)
4. User Config - ~/.config/strata/config.toml (global)
5. Defaults (lowest) - Built-in defaults

Example Usage:
    from strata.config import load_config

    config = load_config(project_path=Path("."))
    print(config.builder.fix_breadth_gaps)  # False
    print(config.identifiers.root_id)       # "gen"

Environment Variables:
    - STRATA_BUILDER_FIX_BREADTH_GAPS=true
    - STRATA_CSV_DELIMITER=";"
    - STRATA_LOGGING_LEVEL=DEBUG
"""

from .loader import (
    ConfigLoader,
    get_default_config,
    load_config,
)
from .log_setup import configure_logging
from .schema import (
    BuilderConfig,
    CSVConfig,
    IdentifierConfig,
    LoggingConfig,
    LogLevel,
    StrataConfig,
)
from .validation import (
    ConfigValidationError,
    ValidationError,
    ValidationResult,
    validate_config,
    validate_value,
)

__all__ = [
    # Main config class
    "StrataConfig",
    # Section configs
    "BuilderConfig",
    "IdentifierConfig",
    "CSVConfig",
    "LoggingConfig",
    # Enums
    "LogLevel",
    # Loader
    "ConfigLoader",
    "load_config",
    "get_default_config",
    "configure_logging",
    # Validation
    "validate_config",
    "validate_value",
    "ValidationError",
    "ValidationResult",
    "ConfigValidationError",
]
