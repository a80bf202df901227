# app/routers/ai.py
from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse
from starlette.datastructures import UploadFile

from app.core.ai_client import TextModel, VisionModel
from app.core.auth import bearer_scheme, get_current_user
from app.core.dependencies import (
    get_pdf_bucket,
    get_text_model,
    get_user_repository,
    get_vision_model,
)
from app.core.storage_utils import StorageBucket
from app.repositories.user_repo import AuthUserRepository
from app.schemas.ai import GenerateRequest, GenerateResponse
from app.services.document_service import DocumentService
from app.services.generation_service import GenerationService

router = APIRouter(tags=["AI"])


def get_generation_service(
    model: TextModel = Depends(get_text_model),
) -> GenerationService:
    return GenerationService(model)


def get_document_service(
    pdfs: StorageBucket = Depends(get_pdf_bucket),
    model: VisionModel = Depends(get_vision_model),
) -> DocumentService:
    return DocumentService(pdfs, model)


@router.post("/generate", response_model=GenerateResponse)
def generate(
    payload: GenerateRequest,
    service: GenerationService = Depends(get_generation_service),
):
    """
    Generate text for a prompt (blocking, not streamed).

    - 400 if `prompt` is missing, empty or not a string.
    - 500 with a generic message on any model failure.
    """
    return service.generate(payload)


@router.post("/analyze-pdf", summary="Upload a PDF and stream its summary")
async def analyze_pdf(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    repo: AuthUserRepository = Depends(get_user_repository),
    service: DocumentService = Depends(get_document_service),
):
    """
    Store the first multipart part (must be a .pdf) and stream a
    markdown summary of it as plain text.

    Auth:
      - Requires valid Supabase JWT. The session is resolved only after
        the file part passed its checks.
    """
    form = await request.form()
    items = form.multi_items()

    filename: str | None = None
    file_bytes: bytes | None = None
    if items and isinstance(items[0][1], UploadFile):
        upload = items[0][1]
        filename = upload.filename
        file_bytes = await upload.read()

    service.check_upload(filename, file_bytes)
    current_user = await run_in_threadpool(get_current_user, credentials, repo)

    stream = await run_in_threadpool(
        service.analyze_pdf, current_user, filename, file_bytes
    )
    return StreamingResponse(stream, media_type="text/plain; charset=utf-8")
