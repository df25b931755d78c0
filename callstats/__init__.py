"""
callstats: synthetic call dataset generator and call analytics.
"""

__version__ = "1.0.0"
