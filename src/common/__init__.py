"""Shared models, errors and interfaces for lmr."""
