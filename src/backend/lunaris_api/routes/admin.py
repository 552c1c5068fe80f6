from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from lunaris_api.db.interest_forms import list_interest_submissions
from lunaris_api.db.postgres import PostgresStore
from lunaris_api.db.sponsorship_forms import list_sponsorship_submissions
from lunaris_api.dependencies import get_store, require_admin
from lunaris_api.models.common import LIST_ERROR_MESSAGE
from lunaris_api.models.interest_form import InterestFormRecord
from lunaris_api.models.sponsorship_form import SponsorshipFormRecord
from lunaris_api.utils.logger import get_logger

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)
logger = get_logger(__name__)


def _list_error() -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": LIST_ERROR_MESSAGE})


@router.get(
    "/interest-forms",
    response_model=List[InterestFormRecord],
    summary="List interest form submissions, newest first",
)
def list_interest_forms(store: PostgresStore = Depends(get_store)):
    try:
        return list_interest_submissions(store)
    except Exception:
        logger.exception("Error fetching interest forms")
        return _list_error()


@router.get(
    "/sponsorship-forms",
    response_model=List[SponsorshipFormRecord],
    summary="List sponsorship form submissions, newest first",
)
def list_sponsorship_forms(store: PostgresStore = Depends(get_store)):
    try:
        return list_sponsorship_submissions(store)
    except Exception:
        logger.exception("Error fetching sponsorship forms")
        return _list_error()
