import pytest

from creator_studio.models import ContentKind, SearchVolume, SeoAnalysisResult
from creator_studio.normalizers import (
    FieldReader,
    normalize_competitor,
    normalize_content_package,
    normalize_seo,
    normalize_tag_suggestions,
    normalize_trend_report,
)


class TestFieldReader:
    @pytest.mark.parametrize("raw,expected", [
        (85, 85),
        (85.6, 86),
        ("72", 72),
        ("90%", 90),
        (150, 100),
        (-5, 0),
    ])
    def test_score_coercion(self, raw, expected):
        assert FieldReader({"s": raw}).score("s") == expected

    @pytest.mark.parametrize("raw", [None, True, "high", [1], float("nan")])
    def test_score_fallback(self, raw):
        reader = FieldReader({"s": raw})
        assert reader.score("s") == 0
        assert reader.defaulted == ["s"]

    @pytest.mark.parametrize("raw", [10 ** 400, "1" + "0" * 400, -(10 ** 400)])
    def test_oversized_number_falls_back(self, raw):
        reader = FieldReader({"s": raw})
        assert reader.score("s") == 0
        assert reader.defaulted == ["s"]

    def test_strings_drop_non_strings(self):
        reader = FieldReader({"l": ["a", " b ", "", None, 3, {"x": 1}]})
        assert reader.strings("l") == ["a", "b", "3"]
        assert reader.defaulted == []

    def test_strings_split_comma_text(self):
        assert FieldReader({"l": "one, two,,three"}).strings("l") == ["one", "two", "three"]

    def test_non_mapping_input(self):
        reader = FieldReader(["not", "a", "dict"])
        assert reader.text("title") == ""
        assert reader.strings("tags") == []
        assert reader.defaulted == ["title", "tags"]


class TestSeo:
    def test_missing_strengths_becomes_empty_list(self):
        normalized = normalize_seo({"score": 70, "weaknesses": ["short title"]})
        result = normalized.value
        assert result.strengths == []
        assert result.weaknesses == ["short title"]
        assert "strengths" in normalized.defaulted

    def test_complete_payload(self):
        payload = {
            "score": 81, "titleScore": 90, "descriptionScore": 75, "tagsScore": 60,
            "titleFeedback": "Good", "descriptionFeedback": "Longer", "tagsFeedback": "More",
            "strengths": ["hook"], "weaknesses": [], "suggestions": ["add tags"],
            "keywordsFound": ["python"],
        }
        normalized = normalize_seo(payload)
        assert normalized.complete
        assert normalized.value.title_score == 90
        assert normalized.value.keywords_found == ["python"]

    def test_scores_clamped(self):
        result = normalize_seo({"score": 250, "titleScore": -3}).value
        assert result.score == 100
        assert result.title_score == 0

    def test_none_gives_default_shape(self):
        assert normalize_seo(None).value == SeoAnalysisResult()

    def test_extra_fields_dropped(self):
        result = normalize_seo({"score": 10, "mood": "happy"}).value
        assert "mood" not in result.model_dump()


class TestTrends:
    def _items(self, count):
        return [
            {
                "rank": i + 1,
                "title": f"Video {i + 1}",
                "channel": "Chan",
                "views": "1M",
                "whyTrending": "Because",
                "type": "Video" if i % 2 == 0 else "Short",
            }
            for i in range(count)
        ]

    def test_object_root(self):
        report = normalize_trend_report({"trends": self._items(3)}).value
        assert [t.rank for t in report.trends] == [1, 2, 3]
        assert report.trends[1].type == ContentKind.SHORT

    def test_array_root(self):
        report = normalize_trend_report(self._items(4)).value
        assert len(report.trends) == 4

    def test_duplicate_and_missing_ranks_are_reassigned(self):
        items = [{"rank": 2}, {"rank": 2}, {}, {"rank": 0}, {"rank": "5"}]
        normalized = normalize_trend_report({"trends": items})
        ranks = [t.rank for t in normalized.value.trends]
        assert ranks == [2, 1, 3, 4, 5]
        assert len(set(ranks)) == len(ranks)
        assert "trends[2].rank" in normalized.defaulted

    def test_oversized_rank_is_reassigned(self):
        items = [{"rank": "1" + "0" * 400, "title": "a"}, {"rank": 10 ** 400, "title": "b"}]
        normalized = normalize_trend_report({"trends": items})
        assert [t.rank for t in normalized.value.trends] == [1, 2]
        assert normalized.defaulted[:2] == ["trends[0].rank", "trends[1].rank"]

    @pytest.mark.parametrize("raw,kind", [
        ("Short", ContentKind.SHORT),
        ("shorts", ContentKind.SHORT),
        ("VIDEO", ContentKind.VIDEO),
        ("Livestream", ContentKind.VIDEO),
        (None, ContentKind.VIDEO),
    ])
    def test_kind_coercion(self, raw, kind):
        report = normalize_trend_report({"trends": [{"rank": 1, "type": raw}]}).value
        assert report.trends[0].type == kind

    def test_non_object_items_skipped(self):
        report = normalize_trend_report({"trends": ["junk", 3, {"rank": 1, "title": "ok"}]}).value
        assert [t.title for t in report.trends] == ["ok"]

    def test_blank_url_is_none(self):
        report = normalize_trend_report({"trends": [{"rank": 1, "url": "  "}]}).value
        assert report.trends[0].url is None


class TestTags:
    def test_volume_restricted_to_enumeration(self):
        payload = {
            "tags": [
                {"tag": "a", "volume": "HIGH", "relevance": 90},
                {"tag": "b", "volume": "medium", "relevance": "80"},
                {"tag": "c", "volume": "Very High", "relevance": 70},
                {"tag": "d", "volume": 42},
                {"tag": "", "volume": "High"},
            ],
            "titles": ["T1", "T2"],
        }
        normalized = normalize_tag_suggestions(payload)
        tags = normalized.value.tags
        assert [t.tag for t in tags] == ["a", "b", "c", "d"]
        assert all(t.volume in set(SearchVolume) for t in tags)
        assert tags[0].volume == SearchVolume.HIGH
        assert tags[1].volume == SearchVolume.MEDIUM
        assert tags[2].volume == SearchVolume.LOW
        assert "tags[2].volume" in normalized.defaulted
        assert normalized.value.titles == ["T1", "T2"]

    def test_wrong_typed_lists(self):
        result = normalize_tag_suggestions({"tags": "oops", "titles": None}).value
        assert result.tags == []
        assert result.titles == []


class TestContentPackage:
    def test_full_package(self):
        normalized = normalize_content_package({
            "titles": ["A", "B"], "seoDescription": "Desc", "keywords": ["k"], "tags": ["t"],
        })
        assert normalized.complete
        assert normalized.value.seo_description == "Desc"

    def test_empty_titles_marked(self):
        normalized = normalize_content_package({
            "titles": [], "seoDescription": "Desc", "keywords": [], "tags": [],
        })
        assert normalized.value.titles == []
        assert normalized.defaulted == ["titles"]

    def test_missing_everything(self):
        result = normalize_content_package({}).value
        assert result.titles == []
        assert result.seo_description == ""
        assert result.keywords == []
        assert result.tags == []


class TestCompetitor:
    def test_missing_name_becomes_unknown(self):
        normalized = normalize_competitor({"trendingScore": 50})
        assert normalized.value.competitor_name == "Unknown"
        assert "competitorName" in normalized.defaulted

    def test_blank_name_becomes_unknown(self):
        assert normalize_competitor({"competitorName": "  "}).value.competitor_name == "Unknown"

    def test_full_payload(self):
        result = normalize_competitor({
            "competitorName": "MrBeast",
            "channelUrl": "https://youtube.com/@MrBeast",
            "subscriberCount": "300M",
            "trendingScore": 97.4,
            "trendingVideoCount": -2,
            "topVideos": [
                {"title": "V1", "views": "100M", "uploadDate": "2 weeks ago"},
                "junk",
            ],
            "commonKeywords": ["challenge"],
            "thumbnailStrategy": "Faces",
            "contentStructure": "Fast hook",
            "uploadSchedule": "Weekly",
            "strengths": ["scale"],
            "weaknesses": [],
        }).value
        assert result.competitor_name == "MrBeast"
        assert result.trending_score == 97
        assert result.trending_video_count == 0
        assert len(result.top_videos) == 1
        assert result.top_videos[0].upload_date == "2 weeks ago"
        assert result.top_videos[0].url is None

    def test_optional_fields_absent(self):
        result = normalize_competitor({"competitorName": "X"}).value
        assert result.channel_url is None
        assert result.subscriber_count is None
        assert result.top_videos == []
