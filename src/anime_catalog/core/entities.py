"""Core domain entities."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional

REQUIRED_API_KEYS = ("id", "name", "rate", "status", "country", "genre")


class AnimeStatus(str, Enum):
    """Airing status of a catalog entry."""

    FINISHED = "FINISHED"
    IN_PROGRESS = "IN_PROGRESS"
    NOT_STARTED = "NOT_STARTED"


class AnimeCountry(str, Enum):
    """Country of origin."""

    JAP_ANIME = "JAP_ANIME"
    CHN_ANIME = "CHN_ANIME"
    KOR_ANIME = "KOR_ANIME"
    US_ANIME = "US_ANIME"


class AnimeGenre(str, Enum):
    """Primary genre."""

    LEGEND = "LEGEND"
    ACTION = "ACTION"
    ROMANCE = "ROMANCE"
    COMEDY = "COMEDY"
    FANTASY = "FANTASY"
    SCI_FI = "SCI_FI"


@dataclass
class CatalogItem:
    """One catalog entry as served by the remote catalog."""

    id: str
    title: str
    rating: float
    status: AnimeStatus
    country: AnimeCountry
    genre: AnimeGenre
    release_year: str
    description: str
    image_url: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Catalog item id cannot be empty")

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "CatalogItem":
        """Build an item from one object of the catalog JSON response.

        ``year``, ``description`` and ``imageUrl`` may be missing or null and
        default to empty strings. Every other key is required.

        Raises:
            ValueError: Required key missing or null, or enum value unknown
        """
        missing = [key for key in REQUIRED_API_KEYS if payload.get(key) is None]
        if missing:
            raise ValueError(f"Catalog item missing required fields: {', '.join(missing)}")

        return cls(
            id=str(payload["id"]),
            title=str(payload["name"]),
            rating=float(payload["rate"]),
            status=AnimeStatus(payload["status"]),
            country=AnimeCountry(payload["country"]),
            genre=AnimeGenre(payload["genre"]),
            release_year=str(payload.get("year") or ""),
            description=payload.get("description") or "",
            image_url=payload.get("imageUrl") or "",
        )


@dataclass
class CachedCatalogItem:
    """Catalog entry stored in the local cache.

    ``key`` is the surrogate key assigned by the store. A key of ``0`` means
    the row has not been stored yet and the store picks the next one.
    """

    key: int
    id: str
    title: str
    rating: float
    status: AnimeStatus
    country: AnimeCountry
    genre: AnimeGenre
    release_year: str
    description: str
    image_url: str = ""

    @classmethod
    def from_catalog_item(cls, item: CatalogItem, key: int = 0) -> "CachedCatalogItem":
        return cls(key=key, **asdict(item))

    def to_catalog_item(self) -> CatalogItem:
        fields = asdict(self)
        fields.pop("key")
        return CatalogItem(**fields)


def parse_catalog_response(payload: Optional[dict[str, Any]]) -> Optional[list[CatalogItem]]:
    """Parse the catalog list response.

    Returns:
        Items under ``data``, or None when the collection is absent
    """
    if not payload:
        return None

    raw_items = payload.get("data")
    if raw_items is None:
        return None

    return [CatalogItem.from_api(raw) for raw in raw_items]
