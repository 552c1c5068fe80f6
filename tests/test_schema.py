import pytest

from lunaris_api.config import Settings
from lunaris_api.db import schema
from lunaris_api.db.schema import SchemaError


def _columns(tables):
    return [
        {"table_name": table, "column_name": column}
        for table, columns in tables.items()
        for column in columns
    ]


def _ledger_responder(versions):
    def respond(sql, params):
        if sql.strip().startswith("SELECT version"):
            return [{"version": v} for v in versions]
        return None

    return respond


def test_apply_migrations_runs_pending_versions(make_store):
    store = make_store(responder=_ledger_responder([]))

    assert schema.apply_migrations(store) == [1]

    statements = [sql for sql, _ in store.executed]
    assert any("CREATE TABLE IF NOT EXISTS schema_migrations" in sql for sql in statements)
    assert any("CREATE TABLE IF NOT EXISTS interest_form" in sql for sql in statements)
    assert any("email VARCHAR(255) NOT NULL UNIQUE" in sql for sql in statements)
    assert store.executed[-1][1] == (1, "create_form_tables")


def test_apply_migrations_skips_recorded_versions(make_store):
    store = make_store(responder=_ledger_responder([1]))

    assert schema.apply_migrations(store) == []
    assert not any("interest_form" in sql for sql, _ in store.executed)


def test_reset_drops_tables_then_rebuilds(make_store):
    store = make_store(responder=_ledger_responder([]))

    assert schema.reset_schema(store) == [1]
    assert store.executed[0][0].startswith("DROP TABLE IF EXISTS interest_form, sponsorship_form")


def test_verify_schema_accepts_expected_columns(make_store):
    rows = _columns(schema.EXPECTED_COLUMNS)
    store = make_store(responder=lambda sql, params: rows)

    schema.verify_schema(store)


def test_verify_schema_tolerates_extra_columns(make_store):
    tables = {table: set(columns) for table, columns in schema.EXPECTED_COLUMNS.items()}
    tables["interest_form"].add("phone")
    store = make_store(responder=lambda sql, params: _columns(tables))

    schema.verify_schema(store)


def test_verify_schema_reports_missing_column_and_table(make_store):
    rows = _columns({"interest_form": {"id", "first_name", "last_name", "email", "created_at"}})
    store = make_store(responder=lambda sql, params: rows)

    with pytest.raises(SchemaError) as excinfo:
        schema.verify_schema(store)

    assert excinfo.value.problems == [
        "table interest_form lacks columns program",
        "table sponsorship_form is missing",
    ]


def test_prepare_schema_only_verifies_by_default(make_store, monkeypatch):
    calls = []
    monkeypatch.setattr(schema, "apply_migrations", lambda store: calls.append("migrate"))
    monkeypatch.setattr(schema, "verify_schema", lambda store: calls.append("verify"))

    schema.prepare_schema(make_store(), Settings(_env_file=None))

    assert calls == ["verify"]


def test_prepare_schema_migrates_when_enabled(make_store, monkeypatch):
    calls = []
    monkeypatch.setattr(schema, "apply_migrations", lambda store: calls.append("migrate"))
    monkeypatch.setattr(schema, "verify_schema", lambda store: calls.append("verify"))

    schema.prepare_schema(make_store(), Settings(_env_file=None, db_auto_migrate=True))

    assert calls == ["migrate", "verify"]
