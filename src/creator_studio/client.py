"""
Gemini client: one outbound generate_content call per request
"""

import logging
from typing import Any, Optional

from google import genai
from google.genai import types
from pydantic import BaseModel, Field
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from creator_studio.config import DEFAULT_MODEL, StudioConfig
from creator_studio.errors import InferenceError, MissingApiKeyError
from creator_studio.models import GroundingCitation
from creator_studio.prompts import PromptRequest, ResponseMode

logger = logging.getLogger(__name__)


class InferenceResponse(BaseModel):
    """Raw model text plus any grounding citations"""
    text: str = ""
    citations: list[GroundingCitation] = Field(default_factory=list)


def build_generation_config(request: PromptRequest) -> Optional[types.GenerateContentConfig]:
    """Map a response mode onto the SDK's request configuration"""
    if request.mode == ResponseMode.GROUNDED_JSON:
        return types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())],
        )
    if request.mode == ResponseMode.SCHEMA_JSON:
        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=request.schema_definition,
        )
    return None


def extract_citations(response: Any) -> list[GroundingCitation]:
    """Collect web sources from the first candidate's grounding metadata"""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []

    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    citations = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        if not uri:
            continue
        citations.append(GroundingCitation(uri=uri, title=getattr(web, "title", None) or ""))
    return citations


class GeminiClient:
    """
    Thin async wrapper around the google-genai SDK.

    Build it once at startup and hand it to the studio. Transport and
    provider failures surface as InferenceError; nothing is retried unless
    max_attempts is raised above 1.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        client: Optional[Any] = None,
        max_attempts: int = 1,
    ):
        """
        Initialize the client.

        Args:
            api_key: Gemini API key (required unless client is given)
            model: Model identifier used for every request
            client: Pre-built SDK client, mainly for tests
            max_attempts: Total attempts per request (1 = no retry)
        """
        if client is None:
            if not api_key:
                raise MissingApiKeyError()
            client = genai.Client(api_key=api_key)

        self.model = model
        self.max_attempts = max(max_attempts, 1)
        self._client = client

    @classmethod
    def from_config(cls, config: StudioConfig) -> "GeminiClient":
        return cls(
            api_key=config.api_key,
            model=config.model,
            max_attempts=config.max_attempts,
        )

    async def _generate_content(self, request: PromptRequest) -> Any:
        config = build_generation_config(request)

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            reraise=True,
        ):
            with attempt:
                return await self._client.aio.models.generate_content(
                    model=self.model,
                    contents=request.instruction,
                    config=config,
                )

    async def generate(self, request: PromptRequest) -> InferenceResponse:
        """
        Send one request to the model.

        Args:
            request: Instruction and response mode from a prompt builder

        Returns:
            Response text and, for grounded requests, the cited web sources

        Raises:
            InferenceError: the call itself failed
        """
        logger.debug("Calling %s for %s (mode=%s)", self.model, request.operation, request.mode.value)

        try:
            response = await self._generate_content(request)
        except Exception as e:
            logger.error("Error calling Gemini for %s: %s", request.operation, e)
            raise InferenceError(
                f"Gemini request failed: {e}",
                operation=request.operation,
                cause=e,
            ) from e

        text = getattr(response, "text", None) or ""
        citations = extract_citations(response) if request.grounded else []

        logger.debug(
            "Gemini answered %s: %d chars, %d citations",
            request.operation, len(text), len(citations),
        )
        return InferenceResponse(text=text, citations=citations)

    async def close(self):
        """Release the SDK's async transport when it exposes one"""
        aclose = getattr(getattr(self._client, "aio", None), "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
