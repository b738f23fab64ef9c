"""Restaurant and visit input models.

Records arrive from the club API or a JSON export. Validation here is
lenient: bad field values fall back to empty defaults so a
malformed visit degrades to "no ratings" instead of failing the snapshot.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any

import pydantic
import structlog
from pydantic import BaseModel, ConfigDict, Field, InstanceOf, field_validator

from pizza_standings.core.errors import SnapshotError
from pizza_standings.models.ratings import FlatRatings, NestedRatings, parse_rating_record

logger = structlog.get_logger()


class Visit(BaseModel):
    """One club visit to a restaurant."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str | None = None
    date: str = ""
    ratings: InstanceOf[FlatRatings] | InstanceOf[NestedRatings] = Field(
        default_factory=FlatRatings
    )
    attendees: tuple[str, ...] = ()
    notes: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str | None:
        if v is None or isinstance(v, bool):
            return None
        return str(v)

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> str:
        if isinstance(v, datetime):
            return v.date().isoformat()
        if isinstance(v, date):
            return v.isoformat()
        if isinstance(v, str):
            return v.strip()
        return ""

    @field_validator("ratings", mode="before")
    @classmethod
    def tag_ratings(cls, v: Any) -> FlatRatings | NestedRatings:
        return parse_rating_record(v)

    @field_validator("attendees", mode="before")
    @classmethod
    def coerce_attendees(cls, v: Any) -> tuple[str, ...]:
        if not isinstance(v, list | tuple):
            return ()
        return tuple(str(a) for a in v if isinstance(a, str | int) and not isinstance(a, bool))

    @field_validator("notes", mode="before")
    @classmethod
    def coerce_notes(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None


class Restaurant(BaseModel):
    """A restaurant and the visits the club made to it.

    Only ``id`` and ``name`` are required. Extra fields from the API
    (address, coordinates, price range, ...) are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)
    name: str
    slug: str | None = None
    visits: tuple[Visit, ...] = ()

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        # API rows carry integer ids
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("slug", mode="before")
    @classmethod
    def coerce_slug(cls, v: Any) -> str | None:
        return v if isinstance(v, str) and v.strip() else None

    @field_validator("visits", mode="before")
    @classmethod
    def drop_unusable_visits(cls, v: Any) -> tuple[Any, ...]:
        if not isinstance(v, list | tuple):
            return ()
        return tuple(visit for visit in v if isinstance(visit, Visit | Mapping))

    @property
    def sort_key(self) -> tuple[str, str]:
        """Case-insensitive name order, id as tie-break."""
        return (self.name.casefold(), self.id)


def load_restaurants(raw: Any) -> list[Restaurant]:
    """Validate a restaurant snapshot.

    Args:
        raw: A list (or tuple) of ``Restaurant`` instances or mappings.

    Returns:
        Validated restaurants in input order. Entries that cannot be
        validated at all are skipped with a warning.

    Raises:
        SnapshotError: If ``raw`` is not a list or tuple.
    """
    if isinstance(raw, str | bytes | Mapping) or not isinstance(raw, Sequence):
        msg = f"Expected a list of restaurants, got {type(raw).__name__}"
        raise SnapshotError(msg, "Pass the full restaurant collection, not a single record.")

    restaurants: list[Restaurant] = []
    for index, item in enumerate(raw):
        if isinstance(item, Restaurant):
            restaurants.append(item)
            continue
        if not isinstance(item, Mapping):
            logger.warning("skipped_restaurant", index=index, reason="not a mapping")
            continue
        try:
            restaurants.append(Restaurant.model_validate(item))
        except pydantic.ValidationError as e:
            logger.warning(
                "skipped_restaurant",
                index=index,
                restaurant_id=item.get("id"),
                errors=e.error_count(),
            )
    return restaurants
