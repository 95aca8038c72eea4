"""Entity package: Price."""

from .entity import Price
from .table import PriceTable

__all__ = ["Price", "PriceTable"]
