"""
Schema of the municipal complaints database (PostgreSQL).

The plan prompt renders this mapping verbatim, so the model only ever sees the
tables and columns listed here.
"""

from typing import TypedDict


class ColumnDef(TypedDict):
    name: str
    type: str


DATABASE_TABLES: dict[str, list[ColumnDef]] = {
    "complaints": [
        {"name": "complaint_id", "type": "INTEGER"},
        {"name": "category_id", "type": "INTEGER"},
        {"name": "resident_id", "type": "INTEGER"},
        {"name": "title", "type": "TEXT"},
        {"name": "description", "type": "TEXT"},
        {"name": "submission_date", "type": "DATE"},
    ],
    "residents": [
        {"name": "resident_id", "type": "INTEGER"},
        {"name": "first_name", "type": "TEXT"},
        {"name": "last_name", "type": "TEXT"},
        {"name": "email", "type": "TEXT"},
        {"name": "phone", "type": "TEXT"},
        {"name": "ward", "type": "INTEGER"},
    ],
    "service_categories": [
        {"name": "category_id", "type": "INTEGER"},
        {"name": "category_name", "type": "TEXT"},
    ],
    "status_logs": [
        {"name": "log_id", "type": "INTEGER"},
        {"name": "complaint_id", "type": "INTEGER"},
        {"name": "status", "type": "TEXT"},
        {"name": "status_date", "type": "DATE"},
    ],
}

# Aliases the plan prompt asks the model to use, one per table.
TABLE_ALIASES: dict[str, str] = {
    "complaints": "c",
    "residents": "r",
    "service_categories": "sc",
    "status_logs": "sl",
}

STATUS_VALUES: tuple[str, ...] = ("Pending", "In Progress", "Resolved")


def get_all_table_names() -> list[str]:
    """Return every table name in schema order."""
    return list(DATABASE_TABLES.keys())


def format_schema_for_prompt() -> str:
    """Render the schema as one bullet per table."""
    lines = []
    for table, columns in DATABASE_TABLES.items():
        rendered = ", ".join(
            f"{col['name']} ({col['type']})" if col["type"] == "DATE" else col["name"]
            for col in columns
        )
        lines.append(f"- {table}: {rendered}")
    return "\n".join(lines)
