from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    CUSTOMER = "customer"
    STORE = "store"
    MANAGER = "manager"


class RequestContext(BaseModel):
    """Authenticated caller identity, resolved outside the core."""
    model_config = ConfigDict(frozen=True)

    customer_id: str = Field(description="netId of the caller")
    role: Role = Field(default=Role.CUSTOMER, description="Caller role")
    token: Optional[str] = Field(default=None, description="Bearer token, forwarded to the allergy lookup")

    @property
    def can_edit_catalog(self) -> bool:
        return self.role is not Role.CUSTOMER
