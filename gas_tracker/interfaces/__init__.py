"""Protocol interfaces for the gas tracker."""
from .price_oracle import PriceOracle
from .token_reader import TokenReader
from .transport import FeeTransport

__all__ = ["FeeTransport", "PriceOracle", "TokenReader"]
