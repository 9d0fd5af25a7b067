"""Response model for ENS profile lookups."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ProfileResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ens_name: str
    address: str | None = None
    avatar: str | None = None
    twitter: str | None = None
    github: str | None = None
    email: str | None = None
