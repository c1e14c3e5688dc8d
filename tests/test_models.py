import pytest
from pydantic import ValidationError

from creator_studio.models import (
    CompetitorAnalysisResult,
    CompetitorItem,
    ContentGenerationResult,
    ContentType,
    DescriptionLength,
    SavedProject,
    SeoAnalysisResult,
    TimeFrame,
    TrendItem,
)


def test_camel_case_serialization():
    result = SeoAnalysisResult(score=10, title_score=20, keywords_found=["a"])
    dumped = result.model_dump(by_alias=True)
    assert dumped["titleScore"] == 20
    assert dumped["keywordsFound"] == ["a"]


def test_populate_by_alias_or_name():
    assert TrendItem(rank=1, whyTrending="x").why_trending == "x"
    assert TrendItem(rank=1, why_trending="y").why_trending == "y"


def test_records_are_frozen():
    result = SeoAnalysisResult()
    with pytest.raises(ValidationError):
        result.score = 50


@pytest.mark.parametrize("kwargs", [{"rank": 0}, {"rank": 1, "type": "Live"}])
def test_trend_item_validation(kwargs):
    with pytest.raises(ValidationError):
        TrendItem(**kwargs)


def test_time_frame_phrases():
    assert TimeFrame("4h").phrase == "past 4 hours"
    assert TimeFrame.YEAR_1.phrase == "past year"
    with pytest.raises(ValueError):
        TimeFrame("2w")


def test_description_length_phrase():
    assert "50-80 words" in DescriptionLength.SHORT.phrase


def test_saved_project_from_package():
    package = ContentGenerationResult(titles=["T"], seo_description="D", keywords=["k"], tags=["t"])

    project = SavedProject.from_package("idea", ContentType.SHORTS, package)

    assert project.content_type == "Shorts"
    assert project.titles == ["T"]
    assert len(project.id) == 32
    assert project.created_at.year >= 2024


def test_saved_projects_get_distinct_ids():
    first = SavedProject(idea="a")
    second = SavedProject(idea="a")
    assert first.id != second.id


def test_competitor_item_keeps_analysis():
    result = CompetitorAnalysisResult(competitor_name="Chan", trending_score=40)
    item = CompetitorItem.from_result(result)
    assert item.competitor_name == "Chan"
    assert item.trending_score == 40
    assert item.timestamp > 0
