from typing import Any, Dict

from fastapi import APIRouter, BackgroundTasks, Depends

from lunaris_api.config import Settings
from lunaris_api.db.interest_forms import DuplicateEmailError, save_interest_submission
from lunaris_api.db.postgres import PostgresStore
from lunaris_api.dependencies import get_settings, get_store, get_submission_logger
from lunaris_api.models.common import (
    MISSING_FIELDS_MESSAGE,
    SUBMIT_ERROR_MESSAGE,
    SubmissionResponse,
)
from lunaris_api.models.interest_form import InterestFormPayload
from lunaris_api.utils.forms import failure_response, read_form_body
from lunaris_api.utils.logger import SubmissionLogger, get_logger
from lunaris_api.utils.mailer import send_submission_notification

router = APIRouter(prefix="/api", tags=["interest-form"])
logger = get_logger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Email already registered. Please use a different email."


@router.post("/interest-form", status_code=201, response_model=SubmissionResponse)
def submit_interest_form(
    background_tasks: BackgroundTasks,
    fields: Dict[str, Any] = Depends(read_form_body),
    store: PostgresStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
    submission_logger: SubmissionLogger = Depends(get_submission_logger),
):
    payload = InterestFormPayload.model_validate(fields)
    submission_logger.received("interest", payload.field_values())
    if payload.missing_fields():
        return failure_response(400, MISSING_FIELDS_MESSAGE)

    try:
        submission_id = save_interest_submission(store, payload)
    except DuplicateEmailError:
        logger.warning("Rejected interest form submission with an already registered email")
        return failure_response(400, DUPLICATE_EMAIL_MESSAGE)
    except Exception:
        logger.exception("Failed to persist interest form submission")
        return failure_response(500, SUBMIT_ERROR_MESSAGE)

    if settings.submission_notification_enabled:
        background_tasks.add_task(
            send_submission_notification,
            settings,
            "interest",
            submission_id,
            payload.field_values(),
        )

    return SubmissionResponse(
        success=True,
        message="Interest form submitted successfully!",
        id=submission_id,
    )
