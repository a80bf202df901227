# app/core/ai_client.py
"""
Model provider clients.

Two backends are used:
  - a general text model (xAI Grok through its OpenAI-compatible API)
    for blocking prompt -> text generation
  - a vision/document model (Gemini) that accepts a PDF inline and
    streams its answer back
"""
import logging
from functools import lru_cache
from typing import Iterator

from google import genai
from google.genai import types
from openai import OpenAI

from app.core.config import get_settings

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


class ModelInvalidResponseException(Exception):
    pass


@lru_cache(maxsize=1)
def get_xai_client() -> OpenAI:
    """
    Singleton OpenAI-compatible client pointed at xAI.

    Raises:
        ValueError: If XAI_API_KEY is not set
    """
    settings = get_settings()
    if not settings.XAI_API_KEY:
        raise ValueError("XAI_API_KEY environment variable not set")
    client = OpenAI(api_key=settings.XAI_API_KEY, base_url=settings.XAI_BASE_URL)
    logger.info("xAI client initialized")
    return client


@lru_cache(maxsize=1)
def get_gemini_client() -> genai.Client:
    """
    Singleton Gemini client.

    Raises:
        ValueError: If GEMINI_API_KEY is not set
    """
    settings = get_settings()
    if not settings.GEMINI_API_KEY:
        raise ValueError("GEMINI_API_KEY environment variable not set")
    client = genai.Client(api_key=settings.GEMINI_API_KEY)
    logger.info("Gemini client initialized")
    return client


class TextModel:
    """
    Blocking prompt -> text generation.

    Without an explicit client the shared xAI client is built on the
    first call, so a missing key fails the call rather than the request.
    """

    def __init__(self, model: str, client: OpenAI | None = None):
        self.model = model
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = get_xai_client()
        return self._client

    def generate(self, prompt: str) -> str:
        truncated = (prompt[:200] + "...") if len(prompt) > 200 else prompt
        logger.info(f"Calling {self.model}, prompt: '{truncated}'")
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )
        text = response.choices[0].message.content if response.choices else None
        if text is None:
            raise ModelInvalidResponseException()
        return text


class VisionModel:
    """Streaming generation over an inline PDF document."""

    def __init__(self, model: str, client: genai.Client | None = None):
        self.model = model
        self._client = client

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = get_gemini_client()
        return self._client

    def stream_pdf(self, instruction: str, pdf_data: bytes) -> Iterator[str]:
        """
        Yield text chunks as the model produces them.

        The client is built and the request sent when the first chunk is
        pulled.
        """
        logger.info(f"Streaming {self.model} over a {len(pdf_data)} byte PDF")
        stream = self.client.models.generate_content_stream(
            model=self.model,
            contents=[
                instruction,
                types.Part.from_bytes(data=pdf_data, mime_type=PDF_MIME_TYPE),
            ],
        )
        for chunk in stream:
            if chunk.text:
                yield chunk.text
