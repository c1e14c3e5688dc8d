"""
Creator Studio - AI-assisted YouTube metadata for content creators
"""

__version__ = "1.0.0"
__author__ = "Creator Tools Team"

from creator_studio.errors import CreatorStudioError, InferenceError, MissingApiKeyError
from creator_studio.models import (
    CompetitorAnalysisResult,
    ContentGenerationResult,
    GeneratedTag,
    SavedProject,
    SeoAnalysisResult,
    TagSuggestions,
    TimeFrame,
    TrendItem,
    TrendReport,
)
from creator_studio.client import GeminiClient
from creator_studio.studio import CreatorStudio, create_studio

__all__ = [
    "CreatorStudioError",
    "InferenceError",
    "MissingApiKeyError",
    "CompetitorAnalysisResult",
    "ContentGenerationResult",
    "GeneratedTag",
    "SavedProject",
    "SeoAnalysisResult",
    "TagSuggestions",
    "TimeFrame",
    "TrendItem",
    "TrendReport",
    "GeminiClient",
    "CreatorStudio",
    "create_studio",
]
