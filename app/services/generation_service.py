# app/services/generation_service.py
import logging

from app.core.ai_client import TextModel
from app.core.errors import RemoteError
from app.schemas.ai import GenerateRequest, GenerateResponse

logger = logging.getLogger(__name__)


class GenerationService:
    """One blocking prompt -> text call against the general text model."""

    def __init__(self, model: TextModel):
        self.model = model

    def generate(self, payload: GenerateRequest) -> GenerateResponse:
        """
        Raises:
            RemoteError: any provider failure, with a generic message.
                The cause is logged, not returned to the client.
        """
        try:
            result = self.model.generate(payload.prompt)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error(f"Error in AI generation: {exc}")
            raise RemoteError("Failed to generate AI response") from exc
        return GenerateResponse(result=result)
