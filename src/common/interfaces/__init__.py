"""Interfaces shared by the data and presentation layers."""

from .component import Component
from .driver import Driver

__all__ = ["Component", "Driver"]
