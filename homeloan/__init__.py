# homeloan/__init__.py
"""Fixed-rate mortgage amortization engine and text reporter."""

__version__ = "0.1.0"
