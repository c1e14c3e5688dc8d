"""
Coerce decoded model output into the strict result models.

Decoded JSON is trusted for nothing: every field is read individually,
missing or mistyped values fall back to safe defaults (empty list, 0, empty
string, "Unknown" for a competitor name) and the fallbacks are recorded so
callers can tell a clean answer from a patched one. Unrecognized fields are
dropped.
"""

import math
import re
from typing import Any, Optional

from pydantic import BaseModel, Field

from creator_studio.models import (
    CompetitorAnalysisResult,
    ContentGenerationResult,
    ContentKind,
    GeneratedTag,
    SearchVolume,
    SeoAnalysisResult,
    TagSuggestions,
    TopVideo,
    TrendItem,
    TrendReport,
)


UNKNOWN_COMPETITOR = "Unknown"

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")

_KINDS = {
    "video": ContentKind.VIDEO,
    "videos": ContentKind.VIDEO,
    "long video": ContentKind.VIDEO,
    "short": ContentKind.SHORT,
    "shorts": ContentKind.SHORT,
}

_VOLUMES = {v.value.lower(): v for v in SearchVolume}


class Normalized(BaseModel):
    """A coerced result plus the fields that had to be defaulted"""
    value: Any
    defaulted: list[str] = Field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.defaulted


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        match = _NUMBER.search(value)
        if not match:
            return None
        number = match.group(0)
    else:
        return None

    try:
        number = float(number)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


class FieldReader:
    """Reads fields off a loosely-typed mapping, recording every fallback"""

    def __init__(self, data: Any, prefix: str = "", defaulted: Optional[list[str]] = None):
        self.data = data if isinstance(data, dict) else {}
        self.prefix = prefix
        self.defaulted = defaulted if defaulted is not None else []

    def mark_defaulted(self, key: str):
        self.defaulted.append(f"{self.prefix}{key}")

    def child(self, data: Any, prefix: str) -> "FieldReader":
        """Reader for a nested object sharing this reader's record"""
        return FieldReader(data, prefix=prefix, defaulted=self.defaulted)

    def text(self, key: str, default: str = "") -> str:
        value = self.data.get(key)
        if isinstance(value, str):
            return value.strip()
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        self.mark_defaulted(key)
        return default

    def optional_text(self, key: str) -> Optional[str]:
        value = self.data.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    def integer(
        self,
        key: str,
        default: int = 0,
        minimum: Optional[int] = None,
        maximum: Optional[int] = None,
    ) -> int:
        number = _to_number(self.data.get(key))
        if number is None:
            self.mark_defaulted(key)
            return default

        result = int(round(number))
        if minimum is not None:
            result = max(result, minimum)
        if maximum is not None:
            result = min(result, maximum)
        return result

    def score(self, key: str) -> int:
        """Integer clamped to 0..100"""
        return self.integer(key, minimum=0, maximum=100)

    def strings(self, key: str) -> list[str]:
        value = self.data.get(key)
        if isinstance(value, str):
            # "a, b, c" instead of a list
            return [part.strip() for part in value.split(",") if part.strip()]
        if not isinstance(value, list):
            self.mark_defaulted(key)
            return []

        items = []
        for item in value:
            if isinstance(item, str):
                if item.strip():
                    items.append(item.strip())
            elif isinstance(item, (int, float)) and not isinstance(item, bool):
                items.append(str(item))
        return items

    def objects(self, key: str) -> list[dict]:
        value = self.data.get(key)
        if not isinstance(value, list):
            self.mark_defaulted(key)
            return []
        return [item for item in value if isinstance(item, dict)]


def _content_kind(reader: FieldReader) -> ContentKind:
    raw = reader.data.get("type")
    kind = _KINDS.get(raw.strip().lower()) if isinstance(raw, str) else None
    if kind is None:
        reader.mark_defaulted("type")
        return ContentKind.VIDEO
    return kind


def _search_volume(reader: FieldReader) -> SearchVolume:
    raw = reader.data.get("volume")
    volume = _VOLUMES.get(raw.strip().lower()) if isinstance(raw, str) else None
    if volume is None:
        reader.mark_defaulted("volume")
        return SearchVolume.LOW
    return volume


def _assign_ranks(raw_ranks: list[Optional[int]]) -> list[int]:
    """Keep valid first-seen ranks; give the rest the smallest unused ranks"""
    claimed = set()
    keep = []
    for rank in raw_ranks:
        valid = rank is not None and rank >= 1 and rank not in claimed
        if valid:
            claimed.add(rank)
        keep.append(valid)

    ranks = []
    next_free = 1
    for rank, valid in zip(raw_ranks, keep):
        if valid:
            ranks.append(rank)
            continue
        while next_free in claimed:
            next_free += 1
        claimed.add(next_free)
        ranks.append(next_free)
    return ranks


def normalize_trend_report(data: Any) -> Normalized:
    """Trend items from either {"trends": [...]} or a bare array"""
    reader = FieldReader(data)
    if isinstance(data, list):
        items = [item for item in data if isinstance(item, dict)]
    else:
        items = reader.objects("trends")

    readers = [reader.child(item, f"trends[{i}].") for i, item in enumerate(items)]

    raw_ranks = []
    for item_reader in readers:
        number = _to_number(item_reader.data.get("rank"))
        if number is None:
            item_reader.mark_defaulted("rank")
            raw_ranks.append(None)
        else:
            raw_ranks.append(int(round(number)))

    trends = []
    for item_reader, rank in zip(readers, _assign_ranks(raw_ranks)):
        trends.append(TrendItem(
            rank=rank,
            title=item_reader.text("title"),
            channel=item_reader.text("channel"),
            views=item_reader.text("views"),
            why_trending=item_reader.text("whyTrending"),
            type=_content_kind(item_reader),
            url=item_reader.optional_text("url"),
        ))

    return Normalized(value=TrendReport(trends=trends), defaulted=reader.defaulted)


def normalize_seo(data: Any) -> Normalized:
    reader = FieldReader(data)

    result = SeoAnalysisResult(
        score=reader.score("score"),
        title_score=reader.score("titleScore"),
        description_score=reader.score("descriptionScore"),
        tags_score=reader.score("tagsScore"),
        title_feedback=reader.text("titleFeedback"),
        description_feedback=reader.text("descriptionFeedback"),
        tags_feedback=reader.text("tagsFeedback"),
        strengths=reader.strings("strengths"),
        weaknesses=reader.strings("weaknesses"),
        suggestions=reader.strings("suggestions"),
        keywords_found=reader.strings("keywordsFound"),
    )
    return Normalized(value=result, defaulted=reader.defaulted)


def normalize_tag_suggestions(data: Any) -> Normalized:
    reader = FieldReader(data)

    tags = []
    for i, item in enumerate(reader.objects("tags")):
        tag_reader = reader.child(item, f"tags[{i}].")
        text = tag_reader.text("tag")
        if not text:
            continue
        tags.append(GeneratedTag(
            tag=text,
            volume=_search_volume(tag_reader),
            relevance=tag_reader.score("relevance"),
        ))

    result = TagSuggestions(tags=tags, titles=reader.strings("titles"))
    return Normalized(value=result, defaulted=reader.defaulted)


def normalize_content_package(data: Any) -> Normalized:
    reader = FieldReader(data)

    result = ContentGenerationResult(
        titles=reader.strings("titles"),
        seo_description=reader.text("seoDescription"),
        keywords=reader.strings("keywords"),
        tags=reader.strings("tags"),
    )
    if not result.titles and "titles" not in reader.defaulted:
        # a package without titles is not a successful generation
        reader.defaulted.append("titles")
    return Normalized(value=result, defaulted=reader.defaulted)


def normalize_competitor(data: Any) -> Normalized:
    reader = FieldReader(data)

    name = reader.text("competitorName")
    if not name:
        if "competitorName" not in reader.defaulted:
            reader.defaulted.append("competitorName")
        name = UNKNOWN_COMPETITOR

    top_videos = []
    for i, item in enumerate(reader.objects("topVideos")):
        video_reader = reader.child(item, f"topVideos[{i}].")
        top_videos.append(TopVideo(
            title=video_reader.text("title"),
            views=video_reader.text("views"),
            upload_date=video_reader.text("uploadDate"),
            url=video_reader.optional_text("url"),
        ))

    result = CompetitorAnalysisResult(
        competitor_name=name,
        channel_url=reader.optional_text("channelUrl"),
        subscriber_count=reader.optional_text("subscriberCount"),
        trending_score=reader.score("trendingScore"),
        trending_video_count=reader.integer("trendingVideoCount", minimum=0),
        top_videos=top_videos,
        common_keywords=reader.strings("commonKeywords"),
        thumbnail_strategy=reader.text("thumbnailStrategy"),
        content_structure=reader.text("contentStructure"),
        upload_schedule=reader.text("uploadSchedule"),
        strengths=reader.strings("strengths"),
        weaknesses=reader.strings("weaknesses"),
    )
    return Normalized(value=result, defaulted=reader.defaulted)
