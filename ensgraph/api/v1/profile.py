"""ENS profile lookup endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ensgraph.api.dependencies import get_resolver
from ensgraph.api.v1.schemas.profile import ProfileResponse
from ensgraph.services.ens_service import ProfileResolver

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/{name}", response_model=ProfileResponse)
async def get_profile(
    name: str,
    resolver: ProfileResolver = Depends(get_resolver),
) -> ProfileResponse:
    """Resolve an ENS name to its address, avatar and social text records.

    Unregistered names return 200 with every field but ``ensName`` empty.
    """
    profile = await resolver.resolve(name)
    return ProfileResponse(**profile.to_dict())
