"""ENS profile resolution: address, avatar and social text records."""

from __future__ import annotations

import asyncio
from dataclasses import asdict, dataclass
from typing import Any, Protocol

from ens import AsyncENS
from ens.exceptions import InvalidName as ENSInvalidName
from ens.utils import normalize_name
from web3 import AsyncHTTPProvider, AsyncWeb3

from ensgraph.config import Settings
from ensgraph.utils.exceptions import InvalidName, ResolutionError
from ensgraph.utils.logging import get_logger

logger = get_logger(__name__)

# Profile field -> ENS text record key
TEXT_RECORDS: dict[str, str] = {
    "twitter": "com.twitter",
    "github": "com.github",
    "email": "email",
}

AVATAR_RECORD = "avatar"


class NameResolutionClient(Protocol):
    """The subset of ``ens.AsyncENS`` the resolver relies on."""

    async def address(self, name: str) -> Any: ...

    async def get_text(self, name: str, key: str) -> str: ...


@dataclass(frozen=True)
class EnsProfile:
    ens_name: str
    address: str | None = None
    avatar: str | None = None
    twitter: str | None = None
    github: str | None = None
    email: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return asdict(self)


def build_ens_client(settings: Settings) -> AsyncENS:
    """Construct the name-resolution client for one process."""
    w3 = AsyncWeb3(AsyncHTTPProvider(settings.ETH_RPC_URL))
    return AsyncENS.from_web3(w3)


def normalize_ens_name(name: str) -> str:
    if not name or not name.strip():
        raise InvalidName("ENS name is required")
    try:
        return normalize_name(name.strip())
    except ENSInvalidName as exc:
        raise InvalidName(f"Invalid ENS name {name!r}: {exc}") from exc


class ProfileResolver:
    """Resolves ENS names through an injected client.

    An unknown name is a valid result (empty profile). Once an address is
    known, each record lookup fails independently to ``None``.
    """

    def __init__(
        self,
        client: NameResolutionClient,
        ipfs_gateway_url: str = "https://ipfs.io/ipfs/",
        avatar_service_url: str = "https://metadata.ens.domains/mainnet/avatar/",
    ) -> None:
        self._client = client
        self._ipfs_gateway_url = ipfs_gateway_url
        self._avatar_service_url = avatar_service_url

    @classmethod
    def from_settings(cls, client: NameResolutionClient, settings: Settings) -> ProfileResolver:
        return cls(
            client,
            ipfs_gateway_url=settings.IPFS_GATEWAY_URL,
            avatar_service_url=settings.ENS_AVATAR_SERVICE_URL,
        )

    async def resolve(self, name: str) -> EnsProfile:
        normalized = normalize_ens_name(name)

        try:
            address = await self._client.address(normalized)
        except Exception as exc:
            logger.error("ens_address_lookup_failed", ens_name=normalized, error=str(exc))
            raise ResolutionError(f"Failed to resolve {normalized}") from exc

        if not address:
            logger.info("ens_name_unregistered", ens_name=normalized)
            return EnsProfile(ens_name=name)

        avatar, *texts = await asyncio.gather(
            self._fetch_avatar(normalized),
            *(self._fetch_text(normalized, key) for key in TEXT_RECORDS.values()),
        )
        records = dict(zip(TEXT_RECORDS, texts))

        logger.info(
            "ens_profile_resolved",
            ens_name=normalized,
            address=str(address),
            records=sorted(k for k, v in records.items() if v),
        )
        return EnsProfile(ens_name=name, address=str(address), avatar=avatar, **records)

    async def _fetch_text(self, name: str, key: str) -> str | None:
        try:
            value = await self._client.get_text(name, key)
        except Exception as exc:
            logger.warning("ens_record_lookup_failed", ens_name=name, key=key, error=str(exc))
            return None
        return value or None

    async def _fetch_avatar(self, name: str) -> str | None:
        record = await self._fetch_text(name, AVATAR_RECORD)
        if record is None:
            return None
        return self._avatar_uri(name, record)

    def _avatar_uri(self, name: str, record: str) -> str:
        if record.startswith(("https://", "http://", "data:")):
            return record
        if record.startswith("ipfs://"):
            path = record.removeprefix("ipfs://").removeprefix("ipfs/")
            return f"{self._ipfs_gateway_url.rstrip('/')}/{path}"
        # NFT references (eip155:...) need on-chain token metadata lookups.
        return f"{self._avatar_service_url.rstrip('/')}/{name}"
