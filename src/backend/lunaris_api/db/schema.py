"""
Versioned schema migrations for the form tables.

Migrations are applied out-of-band (`scripts/migrate.py`) or, when
DB_AUTO_MIGRATE is set, once at boot. The API itself only verifies that the
expected columns exist and refuses to start otherwise.
"""

from __future__ import annotations

from typing import Dict, List, Set, Tuple

from lunaris_api.config import Settings
from lunaris_api.db.postgres import PostgresStore
from lunaris_api.utils.logger import get_logger

logger = get_logger(__name__)

INTEREST_TABLE = "interest_form"
SPONSORSHIP_TABLE = "sponsorship_form"
MIGRATIONS_TABLE = "schema_migrations"

EXPECTED_COLUMNS: Dict[str, Set[str]] = {
    INTEREST_TABLE: {"id", "first_name", "last_name", "email", "program", "created_at"},
    SPONSORSHIP_TABLE: {"id", "name", "email", "phone_number", "comment", "created_at"},
}

MIGRATIONS: List[Tuple[int, str, str]] = [
    (
        1,
        "create_form_tables",
        """
        CREATE TABLE IF NOT EXISTS interest_form (
            id SERIAL PRIMARY KEY,
            first_name VARCHAR(255) NOT NULL,
            last_name VARCHAR(255) NOT NULL,
            email VARCHAR(255) NOT NULL UNIQUE,
            program VARCHAR(255) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );

        CREATE INDEX IF NOT EXISTS interest_form_created_at_idx
            ON interest_form (created_at);

        CREATE TABLE IF NOT EXISTS sponsorship_form (
            id SERIAL PRIMARY KEY,
            name VARCHAR(255) NOT NULL,
            email VARCHAR(255) NOT NULL,
            phone_number VARCHAR(50) NOT NULL,
            comment TEXT NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );

        CREATE INDEX IF NOT EXISTS sponsorship_form_created_at_idx
            ON sponsorship_form (created_at);
        """,
    ),
]


class SchemaError(RuntimeError):
    """The database does not match the tables this service writes to."""

    def __init__(self, problems: List[str]):
        super().__init__("Schema verification failed: " + "; ".join(problems))
        self.problems = problems


def _ensure_migrations_table(store: PostgresStore) -> None:
    with store.cursor() as cur:
        cur.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {MIGRATIONS_TABLE} (
                version INTEGER PRIMARY KEY,
                name TEXT NOT NULL,
                applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            );
            """
        )


def applied_versions(store: PostgresStore) -> Set[int]:
    with store.cursor() as cur:
        cur.execute(f"SELECT version FROM {MIGRATIONS_TABLE}")
        return {row["version"] for row in cur.fetchall()}


def apply_migrations(store: PostgresStore) -> List[int]:
    """Apply every migration not yet recorded; returns the versions applied."""
    _ensure_migrations_table(store)
    done = applied_versions(store)
    applied: List[int] = []
    for version, name, sql in sorted(MIGRATIONS):
        if version in done:
            continue
        # DDL and ledger row commit together.
        with store.cursor() as cur:
            cur.execute(sql)
            cur.execute(
                f"INSERT INTO {MIGRATIONS_TABLE} (version, name) VALUES (%s, %s)",
                (version, name),
            )
        logger.info("Applied migration %s (%s)", version, name)
        applied.append(version)
    if not applied:
        logger.info("Schema is up to date.")
    return applied


def reset_schema(store: PostgresStore) -> List[int]:
    """Drop the form tables and rebuild them. Destroys every stored submission."""
    logger.warning(
        "Dropping %s, %s and %s; all stored submissions will be lost.",
        INTEREST_TABLE,
        SPONSORSHIP_TABLE,
        MIGRATIONS_TABLE,
    )
    with store.cursor() as cur:
        cur.execute(
            f"DROP TABLE IF EXISTS {INTEREST_TABLE}, {SPONSORSHIP_TABLE}, {MIGRATIONS_TABLE};"
        )
    return apply_migrations(store)


def verify_schema(store: PostgresStore) -> None:
    with store.cursor() as cur:
        cur.execute(
            """
            SELECT table_name, column_name
            FROM information_schema.columns
            WHERE table_schema = current_schema()
              AND table_name = ANY(%s)
            """,
            (list(EXPECTED_COLUMNS),),
        )
        rows = cur.fetchall()

    found: Dict[str, Set[str]] = {}
    for row in rows:
        found.setdefault(row["table_name"], set()).add(row["column_name"])

    problems: List[str] = []
    for table, expected in EXPECTED_COLUMNS.items():
        columns = found.get(table)
        if not columns:
            problems.append(f"table {table} is missing")
            continue
        missing = sorted(expected - columns)
        if missing:
            problems.append(f"table {table} lacks columns {', '.join(missing)}")
    if problems:
        raise SchemaError(problems)
    logger.info("Schema verified for %s.", ", ".join(EXPECTED_COLUMNS))


def prepare_schema(store: PostgresStore, settings: Settings) -> None:
    """Boot hook: optionally migrate, then verify. Raises on any mismatch."""
    if settings.db_auto_migrate:
        apply_migrations(store)
    verify_schema(store)
