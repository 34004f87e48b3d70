"""
API routes: register endpoints and delegate to handlers; no logic here.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.api.handlers import handle_chat
from app.schemas.chat import ChatErrorResponse, ChatRequest, ChatResponse

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "Docs chat backend running"}


@router.get("/health", tags=["system"])
def health():
    return {"status": "ok"}


# --- Chat ---

@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ChatErrorResponse}, 500: {"model": ChatErrorResponse}},
    tags=["chat"],
    summary="Ask a question about the platform",
    description="Search the docs, read the most relevant pages, and answer. 400 on missing message, 500 when the answer could not be generated.",
)
def post_chat(body: ChatRequest) -> JSONResponse:
    logger.info("[api:post_chat] IN  message=%r", body.message)
    status_code, payload = handle_chat(body.message)
    logger.info("[api:post_chat] OUT status=%d", status_code)
    return JSONResponse(status_code=status_code, content=payload)
