"""
Configuration module
"""

from attendance_sdk.config.client_config import (
    ClientConfig,
    PartialClientConfig,
    DEFAULT_CONFIG_URL,
    ENV_VAR_MAPPING,
    ConfigDefaults,
)
from attendance_sdk.config.config_loader import ConfigLoader
from attendance_sdk.config.config_validator import (
    ConfigValidator,
    ValidationResult,
    ValidationErrorDetail,
)

__all__ = [
    "ClientConfig",
    "PartialClientConfig",
    "DEFAULT_CONFIG_URL",
    "ENV_VAR_MAPPING",
    "ConfigDefaults",
    "ConfigLoader",
    "ConfigValidator",
    "ValidationResult",
    "ValidationErrorDetail",
]
