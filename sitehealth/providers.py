"""Identity and branding of the plugins that contribute checks."""

from __future__ import annotations

import typing as t
from pydantic import BaseModel, ConfigDict, Field


class ProviderMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    slug: str = Field(min_length=1)
    name: str
    description: str = ""
    url: str | None = None
    icon: str | None = None
    logo_url: str | None = None
    version: str | None = None

    def to_dict(self) -> dict[str, t.Any]:
        return {
            "slug": self.slug,
            "name": self.name,
            "description": self.description,
            "url": self.url,
            "icon": self.icon,
            "logoUrl": self.logo_url,
            "version": self.version,
        }

    to_array = to_dict


class ProviderRegistry:
    """Providers keyed by slug, in registration order.

    There are no built-in entries: the core plugin registers itself like any
    third party. Re-registering a slug replaces the entry in place.
    """

    def __init__(self) -> None:
        self._providers: dict[str, ProviderMetadata] = {}

    def reset(self) -> None:
        self._providers.clear()

    def register(self, provider: ProviderMetadata) -> None:
        self._providers[provider.slug] = provider

    def get(self, slug: str) -> ProviderMetadata | None:
        return self._providers.get(slug)

    def has(self, slug: str) -> bool:
        return slug in self._providers

    def all(self) -> list[ProviderMetadata]:
        return list(self._providers.values())

    def third_party(self) -> list[ProviderMetadata]:
        return [p for p in self._providers.values() if p.slug != "core"]

    def __len__(self) -> int:
        return len(self._providers)

    def __iter__(self) -> t.Iterator[ProviderMetadata]:
        return iter(self.all())

    def __contains__(self, slug: object) -> bool:
        return slug in self._providers


__all__ = ["ProviderMetadata", "ProviderRegistry"]
