from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from nexora.services.ai import draft_email

router = APIRouter(prefix="/assistant", tags=["assistant"])


class EmailRequest(BaseModel):
    prompt: str
    email_type: Literal["follow-up", "outreach", "reminder"] = "follow-up"


@router.post("/email")
async def generate_email(request: Request, payload: EmailRequest):
    settings = request.app.state.settings
    try:
        email = await draft_email(payload.prompt, payload.email_type, api_key=settings.anthropic_api_key)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return {"email": email}
