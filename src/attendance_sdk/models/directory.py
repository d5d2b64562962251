"""Directory service models"""

from pydantic import BaseModel, ConfigDict, Field


class RuntimeConfig(BaseModel):
    """Runtime configuration document fetched before anything else"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    default_home_base_url: str = Field(
        ..., alias="defaultHomeBaseUrl", min_length=1,
        description="Directory service base URL",
    )
    auth_token: str = Field(
        ..., alias="authToken", min_length=1,
        description="Bearer token for directory and tenant calls",
    )


class SchoolConnection(BaseModel):
    """Tenant connection details"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    app_code: str = Field(..., alias="appCode", min_length=1, description="Tenant application code")
    api_url: str = Field(..., alias="apiUrl", min_length=1, description="Tenant API root URL")


class DirectoryUserInfo(BaseModel):
    """One record of the findspruserinfo lookup"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    school_connection: SchoolConnection = Field(..., alias="schoolConnection")
