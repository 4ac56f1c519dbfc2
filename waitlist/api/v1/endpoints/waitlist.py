from typing import Tuple

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from waitlist.core.database import get_db
from waitlist.core.exceptions import ValidationError
from waitlist.schemas.waitlist import WaitlistIn
from waitlist.services.waitlist_service import WaitlistService
from waitlist.utils.responses import is_json_request, write_message

router = APIRouter(tags=["waitlist"])


async def read_submission(request: Request) -> Tuple[str, str]:
    """Return the raw (email, nickname) pair from a JSON or form body."""
    if is_json_request(request):
        body = await request.body()
        try:
            payload = WaitlistIn.model_validate_json(body)
        except PydanticValidationError as e:
            raise ValidationError("invalid JSON body", details=str(e)) from e
        return payload.email or "", payload.nickname or ""

    try:
        async with request.form() as form:
            email = form.get("email")
            trap_value = form.get("nickname")
    except (StarletteHTTPException, MultiPartException) as e:
        raise ValidationError("invalid form data", details=str(e)) from e

    # File parts are not field values; fall back to the query string like a missing field
    if not isinstance(email, str):
        email = request.query_params.get("email", "")
    if not isinstance(trap_value, str):
        trap_value = request.query_params.get("nickname", "")
    return email, trap_value


@router.post("/waitlist", status_code=201, response_model=None)
async def add_to_waitlist(request: Request, db: Session = Depends(get_db)):
    html_preferred = not is_json_request(request)
    email, trap_value = await read_submission(request)
    message = await run_in_threadpool(WaitlistService(db).submit, email, trap_value)
    return write_message(201, message, html_preferred)
