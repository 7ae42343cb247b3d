"""
SQL safety rules for the PostgreSQL execution channel.

Every check here is a substring match on a lower-cased, trimmed copy of the
query. Identifiers that merely contain a blocked token (``pg_anything``,
``dropoff_ward``) are rejected too; false positives are acceptable, false
negatives are not.
"""

from chartgen.services.sql.models import RejectionReason, ValidationOutcome

# =============================================================================
# Blocked Keywords (Security - DDL/DML and catalog access)
# =============================================================================

BLOCKED_KEYWORDS: tuple[str, ...] = (
    # DDL / DML
    "drop",
    "delete",
    "update",
    "insert",
    "alter",
    "create",
    "truncate",
    # Procedure execution
    "exec",
    "execute",
    "sp_",
    "xp_",
    # Catalog / introspection
    "pg_",
    "information_schema",
)

# =============================================================================
# Foreign dialect functions (not implemented by PostgreSQL)
# =============================================================================

FOREIGN_DIALECT_FUNCTIONS: tuple[str, ...] = (
    # SQLite
    "strftime",
    "julianday",
    "group_concat",
    # MySQL
    "ifnull",
    "date_format",
    # SQL Server
    "getdate",
    "dateadd",
    "datediff",
)

REQUIRED_STATEMENT_PREFIX: str = "select"


# =============================================================================
# Main Validation Function
# =============================================================================


def validate_sql(sql: object) -> ValidationOutcome:
    """
    Accept or reject a candidate SQL string.

    This is the PRIMARY gate before execution and never raises: anything that
    is not a string, or does not survive all three checks, comes back as a
    rejection.

    Returns:
        ValidationOutcome carrying the trimmed original SQL on success, or the
        rejection reason and the offending token on failure.
    """
    if not isinstance(sql, str):
        return ValidationOutcome.reject(RejectionReason.NOT_A_SELECT)

    trimmed = sql.strip()
    lowered = trimmed.lower()

    # 1. Must start with SELECT
    if not lowered.startswith(REQUIRED_STATEMENT_PREFIX):
        return ValidationOutcome.reject(RejectionReason.NOT_A_SELECT)

    # 2. Blocked keywords (substring)
    for keyword in BLOCKED_KEYWORDS:
        if keyword in lowered:
            return ValidationOutcome.reject(RejectionReason.FORBIDDEN_KEYWORD, keyword)

    # 3. Functions from other dialects
    for function in FOREIGN_DIALECT_FUNCTIONS:
        if function in lowered:
            return ValidationOutcome.reject(RejectionReason.UNSUPPORTED_DIALECT_FUNCTION, function)

    return ValidationOutcome.accept(trimmed)
