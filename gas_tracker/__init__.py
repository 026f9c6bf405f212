"""Multi-network gas tracker with a simulated gas-loan workflow."""

__version__ = "0.1.0"
