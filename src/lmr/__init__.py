"""lmr: run SQL queries and mail the results as a formatted report."""

__version__ = "0.1.0"
