"""
Main studio class: one pipeline behind every AI-backed operation
"""

import logging
from typing import Any, Callable, Optional, Protocol, Union

from pydantic import BaseModel, Field

from creator_studio.client import GeminiClient, InferenceResponse
from creator_studio.config import StudioConfig
from creator_studio.extraction import ParseOutcome, parse_response
from creator_studio.models import (
    CompetitorAnalysisResult,
    ContentGenerationResult,
    ContentType,
    DescriptionLength,
    GroundingCitation,
    SeoAnalysisResult,
    TagSuggestions,
    TimeFrame,
    TrendReport,
)
from creator_studio.normalizers import (
    Normalized,
    normalize_competitor,
    normalize_content_package,
    normalize_seo,
    normalize_tag_suggestions,
    normalize_trend_report,
)
from creator_studio.prompts import (
    PromptRequest,
    ResponseMode,
    build_competitor_prompt,
    build_content_prompt,
    build_description_prompt,
    build_seo_prompt,
    build_tags_prompt,
    build_trending_prompt,
)

logger = logging.getLogger(__name__)


class InferenceClient(Protocol):
    """Anything that can answer a PromptRequest"""

    async def generate(self, request: PromptRequest) -> InferenceResponse:
        ...


class PipelineResult(BaseModel):
    """A typed result with diagnostics about how it was produced"""
    value: Any
    outcome: ParseOutcome = ParseOutcome.VALID
    defaulted: list[str] = Field(default_factory=list)
    citations: list[GroundingCitation] = Field(default_factory=list)


class Pipeline:
    """
    Invoke, extract, normalize.

    Transport failures propagate as InferenceError. Output that does not
    decode yields the default value; output with gaps is patched by the
    normalizer. Neither raises.
    """

    def __init__(self, client: InferenceClient):
        self.client = client

    async def run(
        self,
        request: PromptRequest,
        default: BaseModel,
        normalizer: Callable[[Any], Normalized],
    ) -> PipelineResult:
        response = await self.client.generate(request)

        parsed = parse_response(response.text, strict=request.mode == ResponseMode.SCHEMA_JSON)
        if parsed.outcome == ParseOutcome.UNPARSABLE:
            logger.warning("%s: model output did not decode, using defaults", request.operation)
            return PipelineResult(
                value=default,
                outcome=ParseOutcome.UNPARSABLE,
                citations=response.citations,
            )

        normalized = normalizer(parsed.data)
        outcome = ParseOutcome.VALID if normalized.complete else ParseOutcome.PARTIAL
        if normalized.defaulted:
            logger.debug("%s: defaulted fields %s", request.operation, ", ".join(normalized.defaulted))

        return PipelineResult(
            value=normalized.value,
            outcome=outcome,
            defaulted=normalized.defaulted,
            citations=response.citations,
        )

    async def run_text(self, request: PromptRequest) -> PipelineResult:
        response = await self.client.generate(request)
        text = response.text.strip()
        return PipelineResult(
            value=text,
            outcome=ParseOutcome.VALID if text else ParseOutcome.UNPARSABLE,
            citations=response.citations,
        )


class CreatorStudio:
    """
    AI-backed YouTube metadata operations.

    Each operation builds its prompt, makes exactly one model call and
    returns a fully populated result. The studio holds no per-request
    state, so operations can run concurrently.
    """

    def __init__(self, client: InferenceClient):
        """
        Initialize the studio.

        Args:
            client: Inference client, built once at startup
        """
        self.client = client
        self.pipeline = Pipeline(client)

    # Detailed variants return PipelineResult for diagnostics

    async def fetch_trending_videos_detailed(
        self,
        time_frame: Union[TimeFrame, str] = TimeFrame.HOURS_24,
    ) -> PipelineResult:
        result = await self.pipeline.run(
            build_trending_prompt(time_frame),
            TrendReport(),
            normalize_trend_report,
        )
        # citations live on the report itself
        report = result.value.model_copy(update={"citations": list(result.citations)})
        return result.model_copy(update={"value": report})

    async def analyze_seo_detailed(self, title: str, description: str, tags: str) -> PipelineResult:
        return await self.pipeline.run(
            build_seo_prompt(title, description, tags),
            SeoAnalysisResult(),
            normalize_seo,
        )

    async def generate_tags_and_titles_detailed(self, topic: str) -> PipelineResult:
        return await self.pipeline.run(
            build_tags_prompt(topic),
            TagSuggestions(),
            normalize_tag_suggestions,
        )

    async def generate_content_strategy_detailed(
        self,
        content_type: Union[ContentType, str],
        idea: str,
        draft_description: str = "",
        draft_tags: str = "",
        duration: Optional[str] = None,
    ) -> PipelineResult:
        return await self.pipeline.run(
            build_content_prompt(content_type, idea, draft_description, draft_tags, duration),
            ContentGenerationResult(),
            normalize_content_package,
        )

    async def analyze_competitor_detailed(self, name_or_url: str) -> PipelineResult:
        return await self.pipeline.run(
            build_competitor_prompt(name_or_url),
            CompetitorAnalysisResult(),
            normalize_competitor,
        )

    async def generate_video_description_detailed(
        self,
        title: str,
        tags: str,
        length: Union[DescriptionLength, str] = DescriptionLength.MEDIUM,
    ) -> PipelineResult:
        return await self.pipeline.run_text(build_description_prompt(title, tags, length))

    # Public operations

    async def fetch_trending_videos(
        self,
        time_frame: Union[TimeFrame, str] = TimeFrame.HOURS_24,
    ) -> TrendReport:
        """
        Top trending videos and shorts for a time frame.

        Returns:
            TrendReport with trends in model order and the grounding citations
        """
        return (await self.fetch_trending_videos_detailed(time_frame)).value

    async def analyze_seo(self, title: str, description: str, tags: str) -> SeoAnalysisResult:
        """Score a title/description/tag set; all-zero result if the model output is unusable"""
        return (await self.analyze_seo_detailed(title, description, tags)).value

    async def generate_tags_and_titles(self, topic: str) -> TagSuggestions:
        """Tags with volume tiers plus title ideas for a topic"""
        return (await self.generate_tags_and_titles_detailed(topic)).value

    async def generate_content_strategy(
        self,
        content_type: Union[ContentType, str],
        idea: str,
        draft_description: str = "",
        draft_tags: str = "",
        duration: Optional[str] = None,
    ) -> ContentGenerationResult:
        """
        Full metadata package for a content idea.

        Args:
            content_type: Shorts, Long Video, Post or Live
            idea: Main idea or topic
            draft_description: User's draft description, improved by the model
            draft_tags: User's draft tags
            duration: Video duration, for long videos

        Returns:
            Titles, SEO description, keywords and tags
        """
        result = await self.generate_content_strategy_detailed(
            content_type, idea, draft_description, draft_tags, duration
        )
        return result.value

    async def analyze_competitor(self, name_or_url: str) -> CompetitorAnalysisResult:
        """Competitive profile of a channel given its name or URL"""
        return (await self.analyze_competitor_detailed(name_or_url)).value

    async def generate_video_description(
        self,
        title: str,
        tags: str,
        length: Union[DescriptionLength, str] = DescriptionLength.MEDIUM,
    ) -> str:
        return (await self.generate_video_description_detailed(title, tags, length)).value

    async def close(self):
        close = getattr(self.client, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


def create_studio(config: Optional[StudioConfig] = None) -> CreatorStudio:
    """
    Build a studio from configuration (environment by default).

    Raises:
        MissingApiKeyError: no API key is configured
    """
    config = config or StudioConfig.from_env()
    return CreatorStudio(GeminiClient.from_config(config))
