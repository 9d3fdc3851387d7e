"""
Contact form webhook router.

Both endpoints answer 200; failures are reported only in the JSON body.
"""

import anyio
from fastapi import APIRouter, Request

from contact_relay.schemas.contact import ContactResponse
from contact_relay.services.submission_handler import SubmissionHandler

router = APIRouter(tags=["Contact"])


def _get_handler(request: Request) -> SubmissionHandler:
    return request.app.state.submission_handler


@router.get("/", response_model=ContactResponse, summary="Liveness probe")
async def health_check(request: Request):
    return _get_handler(request).health_check()


@router.post("/", response_model=ContactResponse, summary="お問い合わせを受け付ける")
async def submit_contact(request: Request):
    """
    Raw body is handed to the handler so malformed JSON still gets a JSON reply.
    Storage and SMTP calls block, so the handler runs on a worker thread.
    """
    body = await request.body()
    handler = _get_handler(request)
    return await anyio.to_thread.run_sync(handler.handle_submission, body)
