"""Turn raw Steam store records into catalog rows."""
from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional

from .errors import RecordRejected
from .models import SENTINEL_RELEASE_DATE

DEFAULT_CURRENCY = "USD"
DEFAULT_DESCRIPTION = "No description available"
DEFAULT_GENRE = "Unknown"
DEFAULT_IMAGE = "No image available"
FREE_PRICE = "Free"

MONTHS: dict[str, str] = {
    "Jan": "01",
    "Feb": "02",
    "Mar": "03",
    "Apr": "04",
    "May": "05",
    "Jun": "06",
    "Jul": "07",
    "Aug": "08",
    "Sep": "09",
    "Oct": "10",
    "Nov": "11",
    "Dec": "12",
}

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


@dataclass(frozen=True)
class CatalogRow:
    """A normalized game ready to be persisted."""

    id: int
    currency: str
    description: str
    genre: str
    image_url: str
    name: str
    price: str
    release_date: str

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


def format_release_date(value: Optional[str]) -> str:
    """Convert a store date such as ``"Jun 12, 2023"`` to ``"2023-06-12"``.

    Anything that is not a month abbreviation, a day and a year becomes
    the sentinel date.
    """

    formatted = SENTINEL_RELEASE_DATE
    parts = value.split() if isinstance(value, str) else []
    if len(parts) == 3:
        month = MONTHS.get(parts[0])
        day = parts[1].rstrip(",")
        year = parts[2]
        if month and day and year:
            if day.isascii() and day.isdigit():
                day = day.zfill(2)
            formatted = f"{year}-{month}-{day}"

    if not DATE_PATTERN.fullmatch(formatted):
        return SENTINEL_RELEASE_DATE
    return formatted


def _is_dlc(genres: Any) -> bool:
    if not isinstance(genres, list):
        return False
    return any(
        isinstance(genre, Mapping)
        and str(genre.get("description", "")).strip().lower() == "dlc"
        for genre in genres
    )


def _first_genre(genres: Any) -> str:
    if isinstance(genres, list) and genres and isinstance(genres[0], Mapping):
        description = genres[0].get("description")
        if isinstance(description, str) and description.strip():
            return description.strip()
    return DEFAULT_GENRE


def _resolve_id(raw: Mapping[str, Any], fallback_id: Optional[int]) -> Optional[int]:
    app_id = raw.get("steam_appid", fallback_id)
    if isinstance(app_id, bool):
        return fallback_id
    try:
        return int(app_id) if app_id is not None else None
    except (TypeError, ValueError):
        return fallback_id


def normalize(raw: Optional[Mapping[str, Any]], fallback_id: Optional[int] = None) -> CatalogRow:
    """Map a store detail record onto a :class:`CatalogRow`.

    Raises :class:`RecordRejected` for absent records, records without a
    name, downloadable content and records whose app id is unknown.
    """

    if not isinstance(raw, Mapping):
        raise RecordRejected("record is absent", fallback_id)

    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        raise RecordRejected("record has no name", fallback_id)

    genres = raw.get("genres")
    if _is_dlc(genres):
        raise RecordRejected("record is downloadable content", fallback_id)

    app_id = _resolve_id(raw, fallback_id)
    if app_id is None:
        raise RecordRejected("record has no app id")

    description = raw.get("short_description")
    image = raw.get("header_image")
    price_overview = raw.get("price_overview")
    price = (
        price_overview.get("final_formatted")
        if isinstance(price_overview, Mapping)
        else None
    )
    release = raw.get("release_date")
    release_text = release.get("date") if isinstance(release, Mapping) else None

    return CatalogRow(
        id=app_id,
        currency=DEFAULT_CURRENCY,
        description=description if isinstance(description, str) and description else DEFAULT_DESCRIPTION,
        genre=_first_genre(genres),
        image_url=image if isinstance(image, str) and image else DEFAULT_IMAGE,
        name=name.strip(),
        price=price if isinstance(price, str) and price else FREE_PRICE,
        release_date=format_release_date(release_text),
    )
