"""Process-level configuration helpers."""
