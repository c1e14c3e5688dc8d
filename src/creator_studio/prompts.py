"""
Prompt builders for each studio use case.

Every builder is a pure function of its inputs and returns a PromptRequest:
the instruction text plus how the model should answer (free text, JSON
requested by instruction with Google Search grounding, or JSON constrained
by a response schema). Grounding and response schemas cannot be combined,
so grounded prompts spell the JSON shape out in the instruction.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel

from creator_studio.models import DescriptionLength, TimeFrame


class ResponseMode(str, Enum):
    """How the model is asked to answer"""
    TEXT = "text"
    GROUNDED_JSON = "grounded_json"
    SCHEMA_JSON = "schema_json"


class PromptRequest(BaseModel):
    """An instruction plus its response mode"""
    operation: str
    instruction: str
    mode: ResponseMode = ResponseMode.TEXT
    schema_definition: Optional[dict] = None

    @property
    def grounded(self) -> bool:
        return self.mode == ResponseMode.GROUNDED_JSON


def _string_list() -> dict:
    return {"type": "ARRAY", "items": {"type": "STRING"}}


SEO_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "score": {"type": "NUMBER"},
        "titleScore": {"type": "NUMBER"},
        "descriptionScore": {"type": "NUMBER"},
        "tagsScore": {"type": "NUMBER"},
        "titleFeedback": {"type": "STRING"},
        "descriptionFeedback": {"type": "STRING"},
        "tagsFeedback": {"type": "STRING"},
        "strengths": _string_list(),
        "weaknesses": _string_list(),
        "suggestions": _string_list(),
        "keywordsFound": _string_list(),
    },
    "required": [
        "score", "titleScore", "descriptionScore", "tagsScore",
        "titleFeedback", "descriptionFeedback", "tagsFeedback",
        "strengths", "weaknesses", "suggestions", "keywordsFound",
    ],
}

CONTENT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "titles": _string_list(),
        "seoDescription": {"type": "STRING"},
        "keywords": _string_list(),
        "tags": _string_list(),
    },
    "required": ["titles", "seoDescription", "keywords", "tags"],
}

# Result counts requested from the model
TREND_VIDEO_COUNT = 6
TREND_SHORT_COUNT = 6
TAG_COUNT = 12
TAG_TITLE_COUNT = 5
PACKAGE_TITLE_COUNT = 5
PACKAGE_TAG_COUNT = 20
HASHTAG_COUNT = 3
FEEDBACK_MAX_WORDS = 20


def build_trending_prompt(time_frame: Union[TimeFrame, str]) -> PromptRequest:
    """Top trending videos and shorts for a time frame, found via search"""
    window = TimeFrame(time_frame).phrase

    instruction = f"""
Find the top trending YouTube videos and Shorts uploaded in the {window}.
I need exactly {TREND_VIDEO_COUNT} Videos and {TREND_SHORT_COUNT} Shorts.

CRITICAL:
1. Use Google Search to find videos uploaded or trending within the {window}.
2. Focus on viral content, high view velocity and breaking news.

Return a valid JSON object in a markdown code block.
The JSON structure must be:
{{
  "trends": [
    {{
      "rank": 1,
      "title": "Video Title",
      "channel": "Channel Name",
      "views": "View count (e.g. 1.2M)",
      "whyTrending": "A detailed paragraph explaining why this video is viral. Mention the thumbnail, the hook or the current event it connects to.",
      "type": "Video" or "Short",
      "url": "YouTube URL if found"
    }}
  ]
}}
"""
    return PromptRequest(
        operation="fetch_trending_videos",
        instruction=instruction.strip(),
        mode=ResponseMode.GROUNDED_JSON,
    )


def build_seo_prompt(title: str, description: str, tags: str) -> PromptRequest:
    """SEO audit of existing video metadata"""
    instruction = f"""
Act as a world-class YouTube SEO expert. Analyze the following video metadata:

Title: {title}
Description: {description}
Tags: {tags}

Provide a JSON response with the following structure:
{{
  "score": number (0-100 overall score),
  "titleScore": number (0-100),
  "descriptionScore": number (0-100),
  "tagsScore": number (0-100),
  "titleFeedback": "Specific feedback for the title (max {FEEDBACK_MAX_WORDS} words)",
  "descriptionFeedback": "Specific feedback for the description (max {FEEDBACK_MAX_WORDS} words)",
  "tagsFeedback": "Specific feedback for the tags (max {FEEDBACK_MAX_WORDS} words)",
  "strengths": string[],
  "weaknesses": string[],
  "suggestions": string[],
  "keywordsFound": string[]
}}
"""
    return PromptRequest(
        operation="analyze_seo",
        instruction=instruction.strip(),
        mode=ResponseMode.SCHEMA_JSON,
        schema_definition=SEO_SCHEMA,
    )


def build_tags_prompt(topic: str) -> PromptRequest:
    """Tags with search volume tiers and titles, from current search interest"""
    instruction = f"""
Act as a YouTube SEO expert.
Topic: "{topic}"

Goal: Generate high-performing metadata using real-time insights.

1. Use Google Search to find trending keywords and high-volume search terms related to this topic RIGHT NOW (past 24 hours).
2. List exactly {TAG_COUNT} optimized tags.
   - Prioritize "High" volume tags that are currently trending or have high search interest.
   - Keep tags strictly relevant to the topic.
   - Volume must be exactly "High", "Medium" or "Low".
   - Relevance is a score from 0 to 100.
3. Create {TAG_TITLE_COUNT} viral titles using the "High" volume keywords and power words.

Return valid JSON inside a markdown block:
```json
{{
  "tags": [
    {{ "tag": "keyword", "volume": "High", "relevance": 95 }}
  ],
  "titles": ["Title 1", "Title 2"]
}}
```
"""
    return PromptRequest(
        operation="generate_tags_and_titles",
        instruction=instruction.strip(),
        mode=ResponseMode.GROUNDED_JSON,
    )


def build_content_prompt(
    content_type: str,
    idea: str,
    draft_description: str,
    draft_tags: str,
    duration: Optional[str] = None,
) -> PromptRequest:
    """Complete optimization package: titles, description, keywords, tags"""
    content_type = getattr(content_type, "value", content_type)

    instruction = f"""
Act as a professional YouTube Strategist and Copywriter.

Task: Create a complete optimization package for a {content_type}.

Input Details:
- Main Idea/Topic: "{idea}"
- User's Draft Description: "{draft_description}"
- User's Draft Tags: "{draft_tags}"
- Duration (if relevant): "{duration or 'N/A'}"

Requirements:
1. Titles: Generate {PACKAGE_TITLE_COUNT} high-CTR, viral-worthy titles. Use power words, curiosity gaps and clear value propositions.
2. SEO Description: Write a full, SEO-optimized description.
   - If the user provided a draft, improve it significantly.
   - Structure it with a Hook (first 2 lines), Content Summary, Key Points and a Call to Action.
   - Include exactly {HASHTAG_COUNT} relevant hashtags at the very end.
3. Keywords: List 10-15 broad and specific keywords relevant to the topic.
4. Tags: List {PACKAGE_TAG_COUNT} video tags optimized for the YouTube algorithm.

Output Format:
Return valid JSON:
{{
  "titles": ["Title 1", "Title 2", ...],
  "seoDescription": "Full description text...",
  "keywords": ["keyword 1", "keyword 2", ...],
  "tags": ["tag1", "tag2", ...]
}}
"""
    return PromptRequest(
        operation="generate_content_strategy",
        instruction=instruction.strip(),
        mode=ResponseMode.SCHEMA_JSON,
        schema_definition=CONTENT_SCHEMA,
    )


def build_competitor_prompt(name_or_url: str) -> PromptRequest:
    """Competitive profile of a channel, researched via search"""
    instruction = f"""
Analyze the YouTube competitor based on this input: "{name_or_url}".

If the input is a URL (e.g. youtube.com/...), extract the channel info from it and analyze that specific channel.
If the input is a name, use Google Search to find the official channel first.

Use Google Search to find their channel details, top performing videos (look for high view counts relative to recency) and overall strategy.

Calculate a 'trendingScore' (0-100) based on how viral their recent content is (high views in a short time).
Count how many of their top videos are considered "Trending" or "Viral".

Return a valid JSON object in a markdown code block.
The JSON structure must be:
{{
  "competitorName": "Channel Name",
  "channelUrl": "https://youtube.com/...",
  "subscriberCount": "Approximate subs (e.g. 1.2M)",
  "trendingScore": number,
  "trendingVideoCount": number,
  "topVideos": [
    {{ "title": "Video Title", "views": "View Count", "uploadDate": "Approx date", "url": "URL if available" }}
  ],
  "commonKeywords": ["keyword1", "keyword2", ...],
  "thumbnailStrategy": "Description of their thumbnail style (colors, faces, text, etc)",
  "contentStructure": "Description of their video structure (intro, pacing, hook)",
  "uploadSchedule": "Estimated schedule (e.g. Daily, Weekly on Fridays)",
  "strengths": ["point 1", "point 2"],
  "weaknesses": ["point 1", "point 2"]
}}

Focus on the last 3-6 months of data if possible.
"""
    return PromptRequest(
        operation="analyze_competitor",
        instruction=instruction.strip(),
        mode=ResponseMode.GROUNDED_JSON,
    )


def build_description_prompt(
    title: str,
    tags: str,
    length: Union[DescriptionLength, str] = DescriptionLength.MEDIUM,
) -> PromptRequest:
    """Plain-text video description"""
    length = DescriptionLength(length)

    instruction = f"""
You are a YouTube SEO expert. Write a video description for the following:

Video Title: "{title}"
Tags/Keywords: "{tags}"

Requirements:
- Length: {length.phrase}
- Tone: Engaging, professional and optimized for search.
- Structure:
  1. Strong hook in the first sentence using the main keyword.
  2. Value proposition (what viewers will learn).
  3. Call to Action (CTA).
- Include the tags naturally where relevant.
- Do not use hashtags in the main text (append {HASHTAG_COUNT} relevant hashtags at the end).

Return ONLY the raw description text.
"""
    return PromptRequest(
        operation="generate_video_description",
        instruction=instruction.strip(),
        mode=ResponseMode.TEXT,
    )
