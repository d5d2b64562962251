"""
Attendance SDK Configuration Types and Schema
Type-safe configuration objects for the SDK
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


# Placeholder on a reserved, unresolvable host. Deployments must point
# config_url (or ATTENDANCE_CONFIG_URL) at their runtime configuration document.
DEFAULT_CONFIG_URL = "https://runtime-config.invalid/runtime-config.json"


class ConfigDefaults:
    """Default configuration values"""
    CONFIG_URL = DEFAULT_CONFIG_URL
    TENANT_API_PATH = "api"
    TIMEOUT = 30000
    RATE_LIMIT_MARGIN = 3
    DEBUG = False
    ENABLE_AUDIT_LOG = False


# Environment variable mapping
ENV_VAR_MAPPING = {
    "ATTENDANCE_USERNAME": "username",
    "ATTENDANCE_PASSWORD": "password",
    "ATTENDANCE_CONFIG_URL": "config_url",
    "ATTENDANCE_TENANT_API_PATH": "tenant_api_path",
    "ATTENDANCE_TIMEOUT": "timeout",
    "ATTENDANCE_RATE_LIMIT_MARGIN": "rate_limit_margin",
    "ATTENDANCE_DEBUG": "debug",
    "ATTENDANCE_ENABLE_AUDIT_LOG": "enable_audit_log",
}


class ClientConfig(BaseModel):
    """
    Main SDK configuration class
    Defines the credentials and transport options for a client
    """

    # Required - Credentials
    username: str = Field(
        ...,
        description="Login email address, also used for the directory lookup",
        min_length=1
    )
    password: str = Field(
        ...,
        description="Raw password; only its digest is ever transmitted",
        min_length=1,
        repr=False,
    )

    # Optional - Service locations
    config_url: str = Field(
        default=ConfigDefaults.CONFIG_URL,
        description=(
            "URL of the runtime configuration document. The default is a "
            "placeholder that never resolves; set it for every deployment"
        )
    )
    tenant_api_path: str = Field(
        default=ConfigDefaults.TENANT_API_PATH,
        description="Path appended to the tenant apiUrl to form the base URL"
    )

    # Optional - Transport
    timeout: int = Field(
        default=ConfigDefaults.TIMEOUT,
        description="Request timeout in milliseconds",
        ge=1000,
        le=300000
    )
    rate_limit_margin: int = Field(
        default=ConfigDefaults.RATE_LIMIT_MARGIN,
        description="Seconds added to Retry-After before retrying a 429",
        ge=0,
        le=60
    )

    # Optional - Diagnostics
    debug: bool = Field(
        default=ConfigDefaults.DEBUG,
        description="Report recoverable events (refresh, backoff) via logging"
    )
    enable_audit_log: bool = Field(
        default=ConfigDefaults.ENABLE_AUDIT_LOG,
        description="Enable per-request audit entries"
    )

    model_config = {
        "str_strip_whitespace": True,
        "validate_assignment": True,
    }

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username looks like an email address"""
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("username must be an email address")
        return v

    @field_validator("config_url")
    @classmethod
    def validate_config_url(cls, v: str) -> str:
        """Validate config_url is a valid URL"""
        if not v.startswith(("http://", "https://")):
            raise ValueError("config_url must be a valid HTTP/HTTPS URL")
        return v

    @field_validator("tenant_api_path")
    @classmethod
    def normalize_tenant_api_path(cls, v: str) -> str:
        """Strip surrounding slashes from tenant_api_path"""
        return v.strip("/")

    @property
    def uses_placeholder_config_url(self) -> bool:
        """True while config_url is still the unresolvable default"""
        return self.config_url == DEFAULT_CONFIG_URL

    def tenant_base_url(self, api_url: str) -> str:
        """Build the tenant base URL from the directory's apiUrl"""
        root = api_url.rstrip("/")
        if not self.tenant_api_path:
            return root
        return f"{root}/{self.tenant_api_path}"


class PartialClientConfig(BaseModel):
    """
    Partial configuration for merging from multiple sources
    All fields are optional to allow partial configuration
    """

    username: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)
    config_url: Optional[str] = None
    tenant_api_path: Optional[str] = None
    timeout: Optional[int] = None
    rate_limit_margin: Optional[int] = None
    debug: Optional[bool] = None
    enable_audit_log: Optional[bool] = None

    model_config = {
        "str_strip_whitespace": True,
    }
