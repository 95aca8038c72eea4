"""Location repository."""

from collections.abc import Iterable

from sqlmodel import Session, col, select

from .entity import Location
from .table import LocationTable


class LocationRepository:
    """Data-access layer for stock locations."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_many(self, location_ids: Iterable[int]) -> dict[int, Location]:
        """Return the locations found for ``location_ids`` keyed by id."""
        ids = set(location_ids)
        if not ids:
            return {}
        statement = select(LocationTable).where(col(LocationTable.id).in_(ids))
        return {
            row.id: Location.model_validate(row, from_attributes=True)
            for row in self._session.exec(statement)
        }
