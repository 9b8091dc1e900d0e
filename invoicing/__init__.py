"""GST invoice computation engine: line pricing, totals and amount in words."""
__version__ = "1.0.0"
