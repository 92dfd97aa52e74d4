"""Source kind normalization.

Canonical source kinds (internal, lowercase):
- "sqlite" - embedded SQLite database file
- "postgres" - PostgreSQL server

User-Facing Aliases (case-insensitive):
- SQLite: "sqlite", "sqlite3"
- PostgreSQL: "postgresql", "postgres", "pg"

Example:
    >>> normalize_source_kind("PostgreSQL")
    'postgres'
    >>> normalize_source_kind("Sqlite")
    'sqlite'
"""

# Alias mappings: user-friendly names -> canonical source kind
SOURCE_KIND_ALIASES: dict[str, str] = {
    # SQLite aliases
    "sqlite": "sqlite",
    "sqlite3": "sqlite",
    # PostgreSQL aliases
    "postgresql": "postgres",
    "postgres": "postgres",
    "pg": "postgres",
}


def normalize_source_kind(value: str) -> str:
    """Normalize a source kind to its canonical form.

    Strips whitespace, lowercases and maps known aliases. Unknown values pass
    through unchanged so the driver factory can reject them.

    Example:
        >>> normalize_source_kind("  PG  ")
        'postgres'
        >>> normalize_source_kind("oracle")
        'oracle'
    """
    cleaned = str(value).strip().lower()
    return SOURCE_KIND_ALIASES.get(cleaned, cleaned)
