# app/services/document_service.py
import logging
import re
import time
from itertools import chain
from typing import Callable, Iterator

from app.core.ai_client import PDF_MIME_TYPE, VisionModel
from app.core.errors import BadInput, NotAuthenticated, RemoteError, provider_message
from app.core.storage_utils import StorageBucket
from app.models.user import AuthUser

logger = logging.getLogger(__name__)

SUMMARY_INSTRUCTION = (
    "Please analyze the PDF and provide a broad summary of its contents. "
    "Focus on the main points, key findings, and any important conclusions. "
    "Categorize the content into sections and provide a summary of each section. "
    "Return the summary directly. Use markdown formatting."
)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def sanitize_filename(filename: str) -> str:
    """Replace every character outside [A-Za-z0-9.-] with '_'."""
    return _UNSAFE_FILENAME_CHARS.sub("_", filename)


def is_pdf_filename(filename: str | None) -> bool:
    return bool(filename) and filename.lower().endswith(".pdf")


class DocumentService:
    """
    Upload-then-summarize pipeline for PDFs.

    The PDF is stored write-once under pdfs/<user_id>/<millis>-<name>
    and its bytes are sent inline to the vision model; the model's
    output is relayed chunk by chunk and never stored.
    """

    def __init__(
        self,
        pdfs: StorageBucket,
        model: VisionModel,
        clock: Callable[[], float] = time.time,
    ):
        self.pdfs = pdfs
        self.model = model
        self.clock = clock

    def object_name(self, filename: str) -> str:
        """<epoch millis>-<sanitized filename>"""
        timestamp = int(self.clock() * 1000)
        return f"{timestamp}-{sanitize_filename(filename)}"

    def check_upload(self, filename: str | None, file_bytes: bytes | None) -> None:
        """
        Reject a request without a file part or with a non-.pdf filename.

        Raises:
            BadInput
        """
        if filename is None or file_bytes is None:
            raise BadInput("No file uploaded")

        if not is_pdf_filename(filename):
            raise BadInput("Invalid file type. Please upload a PDF file.")

    def analyze_pdf(
        self,
        current_user: AuthUser | None,
        filename: str | None,
        file_bytes: bytes | None,
    ) -> Iterator[str]:
        """
        Store the PDF and start streaming its summary.

        Validation happens before any remote call, in this order:
        missing file, non-.pdf filename, missing session.

        The first chunk is pulled before returning so a model call that
        cannot be established fails here (RemoteError) instead of after
        the response has started.

        Raises:
            BadInput: no file part, or filename does not end in .pdf.
            NotAuthenticated: no session.
            RemoteError: storage upload failed, or the model stream could
                not be opened.
        """
        self.check_upload(filename, file_bytes)

        if current_user is None:
            raise NotAuthenticated("User not authenticated")

        file_path = f"{current_user.id}/{self.object_name(filename)}"
        logger.info(f"Uploading file to: {self.pdfs.name}/{file_path}")
        try:
            self.pdfs.upload(file_path, file_bytes, PDF_MIME_TYPE)
        except RemoteError as exc:
            raise RemoteError(f"Error uploading file: {exc.message}") from exc

        public_url = self.pdfs.get_public_url(file_path)
        logger.info(f"Stored PDF at {public_url}")

        stream = self.model.stream_pdf(SUMMARY_INSTRUCTION, file_bytes)
        try:
            first = next(stream, None)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error(f"Could not open summary stream: {exc}")
            raise RemoteError(provider_message(exc)) from exc

        if first is None:
            return iter(())
        return chain([first], stream)
