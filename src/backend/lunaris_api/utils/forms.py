import json
from typing import Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from lunaris_api.utils.logger import get_logger

logger = get_logger(__name__)

FORM_CONTENT_TYPES = {"application/x-www-form-urlencoded", "multipart/form-data"}


async def read_form_body(request: Request) -> Dict[str, Any]:
    """
    Return the submitted fields as a dict, from either a JSON or a form-encoded body.

    Unparseable bodies and non-object JSON come back empty so that the caller
    reports them as missing fields.
    """
    content_type = request.headers.get("content-type", "").split(";", 1)[0].strip().lower()
    if content_type in FORM_CONTENT_TYPES:
        try:
            form = await request.form()
        except (MultiPartException, HTTPException):
            logger.debug("Ignoring form body that could not be parsed")
            return {}
        # Uploaded files are not answers to any of our fields.
        return {key: value for key, value in form.items() if isinstance(value, str)}

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        logger.debug("Ignoring request body that is not valid JSON")
        return {}
    return data if isinstance(data, dict) else {}


def failure_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})
