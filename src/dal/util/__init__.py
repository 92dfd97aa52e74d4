"""Helpers shared by the DAL drivers."""
