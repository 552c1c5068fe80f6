from __future__ import annotations

from typing import Any, Dict, List

from psycopg2 import errors

from lunaris_api.db.postgres import PostgresStore
from lunaris_api.models.interest_form import InterestFormPayload
from lunaris_api.utils.logger import get_logger

logger = get_logger(__name__)


class DuplicateEmailError(Exception):
    """An interest submission already exists for this email."""


def save_interest_submission(store: PostgresStore, payload: InterestFormPayload) -> int:
    """
    Insert a new row into interest_form.
    Returns the new submission id; raises DuplicateEmailError on a repeated email.
    """
    sql = """
        INSERT INTO interest_form (first_name, last_name, email, program)
        VALUES (%s, %s, %s, %s)
        RETURNING id;
    """

    try:
        with store.cursor() as cur:
            cur.execute(
                sql,
                (payload.first_name, payload.last_name, payload.email, payload.program),
            )
            row = cur.fetchone()
    except errors.UniqueViolation as exc:
        raise DuplicateEmailError(payload.email) from exc

    submission_id = row["id"]
    logger.info("Stored interest_form submission id=%s", submission_id)
    return submission_id


def list_interest_submissions(store: PostgresStore) -> List[Dict[str, Any]]:
    sql = """
    SELECT id, first_name, last_name, email, program, created_at
    FROM interest_form
    ORDER BY created_at DESC, id DESC;
    """
    with store.cursor() as cur:
        cur.execute(sql)
        return cur.fetchall()
