"""Entity package: Location."""

from .entity import Location
from .repository import LocationRepository
from .table import LocationTable

__all__ = ["Location", "LocationRepository", "LocationTable"]
