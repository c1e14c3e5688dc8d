"""
Data models for the creator studio
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def now_ms() -> int:
    """Current time as epoch milliseconds"""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


class TimeFrame(str, Enum):
    """Look-back windows for trend discovery"""
    HOURS_4 = "4h"
    HOURS_24 = "24h"
    DAYS_7 = "7d"
    MONTH_1 = "1m"
    YEAR_1 = "1y"

    @property
    def phrase(self) -> str:
        return {
            TimeFrame.HOURS_4: "past 4 hours",
            TimeFrame.HOURS_24: "past 24 hours",
            TimeFrame.DAYS_7: "past 7 days",
            TimeFrame.MONTH_1: "past month",
            TimeFrame.YEAR_1: "past year",
        }[self]


class ContentKind(str, Enum):
    """Kind of trending item"""
    VIDEO = "Video"
    SHORT = "Short"


class SearchVolume(str, Enum):
    """Search volume tier for a suggested tag"""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class DescriptionLength(str, Enum):
    """Target length for generated video descriptions"""
    SHORT = "Short"
    MEDIUM = "Medium"
    LONG = "Long"

    @property
    def phrase(self) -> str:
        return {
            DescriptionLength.SHORT: "concise (approx 50-80 words)",
            DescriptionLength.MEDIUM: "standard length (approx 150-200 words)",
            DescriptionLength.LONG: "in-depth and detailed (approx 300+ words)",
        }[self]


class ContentType(str, Enum):
    """Kinds of content a package can be generated for"""
    SHORTS = "Shorts"
    LONG_VIDEO = "Long Video"
    POST = "Post"
    LIVE = "Live"
    TAGS_ONLY = "Tags Only"


class StudioModel(BaseModel):
    """Immutable record serialized with camelCase keys"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class GroundingCitation(StudioModel):
    """A web source backing a grounded answer"""
    uri: str
    title: str = ""


class TrendItem(StudioModel):
    """One trending video or short"""
    rank: int = Field(ge=1)
    title: str = ""
    channel: str = ""
    views: str = ""
    why_trending: str = ""
    type: ContentKind = ContentKind.VIDEO
    url: Optional[str] = None


class TrendReport(StudioModel):
    """Trending items plus the citations that grounded them"""
    trends: list[TrendItem] = Field(default_factory=list)
    citations: list[GroundingCitation] = Field(default_factory=list)


class SeoAnalysisResult(StudioModel):
    """SEO audit of a title, description and tag set"""
    score: int = Field(default=0, ge=0, le=100)
    title_score: int = Field(default=0, ge=0, le=100)
    description_score: int = Field(default=0, ge=0, le=100)
    tags_score: int = Field(default=0, ge=0, le=100)

    title_feedback: str = ""
    description_feedback: str = ""
    tags_feedback: str = ""

    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    keywords_found: list[str] = Field(default_factory=list)


class GeneratedTag(StudioModel):
    """One suggested tag"""
    tag: str
    volume: SearchVolume = SearchVolume.LOW
    relevance: int = Field(default=0, ge=0, le=100)


class TagSuggestions(StudioModel):
    """Tags and titles suggested for a topic"""
    tags: list[GeneratedTag] = Field(default_factory=list)
    titles: list[str] = Field(default_factory=list)


class ContentGenerationResult(StudioModel):
    """A full metadata package for a piece of content"""
    titles: list[str] = Field(default_factory=list)
    seo_description: str = ""
    keywords: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class TopVideo(StudioModel):
    """A competitor's top performing video"""
    title: str = ""
    views: str = ""
    upload_date: str = ""
    url: Optional[str] = None


class CompetitorAnalysisResult(StudioModel):
    """One channel's competitive profile"""
    competitor_name: str = "Unknown"
    channel_url: Optional[str] = None
    subscriber_count: Optional[str] = None

    trending_score: int = Field(default=0, ge=0, le=100)
    trending_video_count: int = Field(default=0, ge=0)

    top_videos: list[TopVideo] = Field(default_factory=list)
    common_keywords: list[str] = Field(default_factory=list)

    # Strategy
    thumbnail_strategy: str = ""
    content_structure: str = ""
    upload_schedule: str = ""

    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)


class CompetitorItem(CompetitorAnalysisResult):
    """A competitor analysis kept in history"""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: int = Field(default_factory=now_ms)

    @classmethod
    def from_result(cls, result: CompetitorAnalysisResult) -> "CompetitorItem":
        return cls(**result.model_dump())


class SavedProject(ContentGenerationResult):
    """A content package saved for later"""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: int = Field(default_factory=now_ms)
    idea: str = ""
    content_type: str = ContentType.LONG_VIDEO.value

    @classmethod
    def from_package(
        cls,
        idea: str,
        content_type: str,
        result: ContentGenerationResult,
    ) -> "SavedProject":
        """Save a generated content package"""
        return cls(
            idea=idea,
            content_type=_enum_value(content_type),
            **result.model_dump(),
        )

    @classmethod
    def from_tag_suggestions(cls, topic: str, suggestions: TagSuggestions) -> "SavedProject":
        """Save tag suggestions; the tag texts double as keywords"""
        tag_texts = [t.tag for t in suggestions.tags]
        return cls(
            idea=topic,
            content_type=ContentType.TAGS_ONLY.value,
            titles=list(suggestions.titles),
            seo_description="Generated via Tag Generator",
            keywords=tag_texts,
            tags=list(tag_texts),
        )

    @property
    def created_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc)


def _enum_value(value) -> str:
    return value.value if isinstance(value, Enum) else str(value)
