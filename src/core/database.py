"""
SQLite bookkeeping for generated documents.
"""

import sqlite3

from core.config import DB_PATH
from models.entries import Month


def get_connection() -> sqlite3.Connection:
    """Get a database connection."""
    return sqlite3.connect(DB_PATH)


def generate_document_name(document_type: str, month: Month, conn: sqlite3.Connection) -> str:
    """
    Generate unique document name with auto-incremented suffix.

    Example: invoice_2024_02_a, hours_log_2024_02_b
    """
    base_pattern = f"{document_type}_{month.year}_{month.month:02d}_"

    cursor = conn.cursor()
    cursor.execute(
        "SELECT name FROM documents WHERE name LIKE ? ORDER BY name DESC",
        (f"{base_pattern}%",),
    )
    existing = cursor.fetchall()

    if not existing:
        return f"{base_pattern}a"

    # Find the highest suffix
    highest_suffix = "a"
    for (name,) in existing:
        suffix = name.replace(base_pattern, "")
        if suffix and suffix > highest_suffix:
            highest_suffix = suffix

    if highest_suffix >= "z":
        raise RuntimeError(f"Too many {document_type} documents for {month}")

    next_suffix = chr(ord(highest_suffix) + 1)
    return f"{base_pattern}{next_suffix}"


def create_document_record(
    conn: sqlite3.Connection,
    document_type: str,
    name: str,
    month: Month,
    entry_count: int,
    total_hours: float,
) -> int:
    """Record a generated document and return its id."""
    cursor = conn.cursor()
    cursor.execute(
        """
        INSERT INTO documents (type, name, month, entry_count, total_hours)
        VALUES (?, ?, ?, ?, ?)
        """,
        (document_type, name, str(month), entry_count, total_hours),
    )
    conn.commit()
    return cursor.lastrowid
