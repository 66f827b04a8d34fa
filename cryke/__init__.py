"""
Cryke - launch tokens on Base and claim the trading fees they earn
"""

__version__ = "0.1.0"
