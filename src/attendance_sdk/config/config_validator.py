"""
Configuration Validator
Validates SDK configuration with clear error messages
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ValidationErrorDetail:
    """Validation error detail"""
    field: str
    message: str
    value: Optional[Any] = None


@dataclass
class ValidationResult:
    """Validation result"""
    valid: bool
    errors: List[ValidationErrorDetail] = field(default_factory=list)


class ConfigValidator:
    """
    ConfigValidator class
    Provides comprehensive validation for SDK configuration
    """

    def __init__(self) -> None:
        self._errors: List[ValidationErrorDetail] = []

    def validate(self, config: Dict[str, Any]) -> ValidationResult:
        """
        Validate the entire configuration dictionary

        Args:
            config: Configuration dictionary to validate

        Returns:
            ValidationResult with any errors
        """
        self._errors = []

        self._validate_required(config)
        self._validate_formats(config)
        self._validate_ranges(config)

        return ValidationResult(
            valid=len(self._errors) == 0,
            errors=self._errors.copy()
        )

    def validate_or_raise(self, config: Dict[str, Any]) -> None:
        """
        Validate and raise if invalid

        Args:
            config: Configuration dictionary to validate

        Raises:
            ValidationError: If configuration is invalid
        """
        from attendance_sdk.exceptions import ValidationError

        result = self.validate(config)
        if not result.valid:
            error_messages = "; ".join(
                f"{e.field}: {e.message}" for e in result.errors
            )
            raise ValidationError(
                f"Configuration validation failed: {error_messages}",
                field=result.errors[0].field,
            )

    def _validate_required(self, config: Dict[str, Any]) -> None:
        """Validate required fields are present and non-empty"""
        for field_name in ("username", "password"):
            value = config.get(field_name)
            if value is None:
                self._errors.append(ValidationErrorDetail(
                    field=field_name,
                    message=f"{field_name} is required"
                ))
            elif isinstance(value, str) and value.strip() == "":
                self._errors.append(ValidationErrorDetail(
                    field=field_name,
                    message=f"{field_name} cannot be empty",
                    value="[REDACTED]" if field_name == "password" else value
                ))

    def _validate_formats(self, config: Dict[str, Any]) -> None:
        """Validate field formats"""
        username = config.get("username")
        if isinstance(username, str) and username.strip():
            local, sep, domain = username.strip().partition("@")
            if not sep or not local or not domain:
                self._errors.append(ValidationErrorDetail(
                    field="username",
                    message="username must be an email address",
                    value=username
                ))

        config_url = config.get("config_url")
        if config_url is not None and config_url != "":
            if not str(config_url).startswith(("http://", "https://")):
                self._errors.append(ValidationErrorDetail(
                    field="config_url",
                    message="config_url must be a valid HTTP/HTTPS URL",
                    value=config_url
                ))

        tenant_api_path = config.get("tenant_api_path")
        if tenant_api_path is not None and not isinstance(tenant_api_path, str):
            self._errors.append(ValidationErrorDetail(
                field="tenant_api_path",
                message="tenant_api_path must be a string",
                value=tenant_api_path
            ))

    def _validate_ranges(self, config: Dict[str, Any]) -> None:
        """Validate numeric ranges"""
        timeout = config.get("timeout")
        if timeout is not None:
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
                self._errors.append(ValidationErrorDetail(
                    field="timeout",
                    message="timeout must be a positive number (milliseconds)",
                    value=timeout
                ))
            elif timeout < 1000:
                self._errors.append(ValidationErrorDetail(
                    field="timeout",
                    message="timeout should be at least 1000ms for reliable operation",
                    value=timeout
                ))
            elif timeout > 300000:
                self._errors.append(ValidationErrorDetail(
                    field="timeout",
                    message="timeout should not exceed 300000ms (5 minutes)",
                    value=timeout
                ))

        margin = config.get("rate_limit_margin")
        if margin is not None:
            if isinstance(margin, bool) or not isinstance(margin, int) or margin < 0:
                self._errors.append(ValidationErrorDetail(
                    field="rate_limit_margin",
                    message="rate_limit_margin must be a non-negative integer (seconds)",
                    value=margin
                ))
            elif margin > 60:
                self._errors.append(ValidationErrorDetail(
                    field="rate_limit_margin",
                    message="rate_limit_margin should not exceed 60 seconds",
                    value=margin
                ))
