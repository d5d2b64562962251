"""Tenant user models"""

from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class UserIdentity(BaseModel):
    """Identity record returned by the tenant User lookup"""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    user_type: Union[int, str] = Field(..., alias="userType", description="Tenant user type")
    internal_id: Union[int, str] = Field(..., alias="internalId", description="Tenant user id")
