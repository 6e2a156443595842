"""
Authenticated principal.

Dependencies: pydantic
System role: Explicit caller identity passed into every core operation
"""

from pydantic import BaseModel, ConfigDict, Field


class Principal(BaseModel):
    """Caller identity produced by the auth layer."""

    model_config = ConfigDict(frozen=True)

    owner_id: str = Field(min_length=1, description="Opaque authenticated owner id")
