from __future__ import annotations

from typing import Any, Dict, List

from lunaris_api.db.postgres import PostgresStore
from lunaris_api.models.sponsorship_form import SponsorshipFormPayload
from lunaris_api.utils.logger import get_logger

logger = get_logger(__name__)


def save_sponsorship_submission(store: PostgresStore, payload: SponsorshipFormPayload) -> int:
    sql = """
        INSERT INTO sponsorship_form (name, email, phone_number, comment)
        VALUES (%s, %s, %s, %s)
        RETURNING id;
    """

    with store.cursor() as cur:
        cur.execute(
            sql,
            (payload.name, payload.email, payload.phone_number, payload.comment),
        )
        row = cur.fetchone()
        submission_id = row["id"]
        logger.info("Stored sponsorship_form submission id=%s", submission_id)
        return submission_id


def list_sponsorship_submissions(store: PostgresStore) -> List[Dict[str, Any]]:
    sql = """
    SELECT id, name, email, phone_number, comment, created_at
    FROM sponsorship_form
    ORDER BY created_at DESC, id DESC;
    """
    with store.cursor() as cur:
        cur.execute(sql)
        return cur.fetchall()
