import pytest

from model import utc_timestamp
from mood_cache import MoodCache
from tools.mood_recommendation import MoodRecommendationTool
from tools.moods import CURATED_RECOMMENDATIONS


@pytest.fixture
def tool(clock):
    return MoodRecommendationTool(MoodCache(clock=clock))


def titles(result):
    return [movie.title for movie in result.recommendations]


class TestMoodRecommendationTool:
    def test_cold_cache_generates(self, tool, clock):
        result = tool.recommend("happy", limit=3)

        assert result.cached is False
        assert result.mood_changed is False
        assert result.cache_age is None
        assert titles(result) == ["The Grand Budapest Hotel", "Paddington 2", "Knives Out"]
        assert result.timestamp == utc_timestamp(clock.now)

    def test_repeat_is_served_from_cache(self, tool):
        first = tool.recommend("happy", limit=3)
        second = tool.recommend("happy", limit=3)

        assert second.cached is True
        assert second.cache_age == 0
        assert second.mood_changed is None
        assert titles(second) == titles(first)
        assert second.timestamp == first.timestamp

    def test_cache_age_is_rounded_seconds(self, tool, clock):
        tool.recommend("happy")
        clock.advance(2.6)

        result = tool.recommend("happy")

        assert result.cached is True
        assert result.cache_age == 3

    def test_cached_hit_applies_limit(self, tool):
        tool.recommend("happy", limit=5)
        result = tool.recommend("happy", limit=2)
        assert result.cached is True
        assert len(result.recommendations) == 2

    def test_mood_change_overwrites_cache(self, tool):
        tool.recommend("happy", limit=3)
        result = tool.recommend("sad")

        assert result.cached is False
        assert result.mood_changed is True
        assert titles(result)[0] == "Life is Beautiful"
        assert "happy" not in tool.cache

    def test_expired_entry_regenerates(self, tool, clock):
        tool.recommend("happy")
        clock.advance(31 * 60)

        result = tool.recommend("happy")

        assert result.cached is False
        assert result.mood_changed is False

    def test_custom_ttl(self, tool, clock):
        tool.recommend("happy", cache_ttl=1000)
        clock.advance(1.5)
        assert tool.recommend("happy", cache_ttl=1000).cached is False

    def test_unknown_mood_falls_back_to_relaxed(self, tool):
        result = tool.recommend("bored")

        assert result.mood == "bored"
        expected = [item["title"] for item in CURATED_RECOMMENDATIONS["relaxed"]]
        assert titles(result) == expected

    def test_table_lookup_is_case_insensitive(self, tool):
        result = tool.recommend("  SCARED ")
        assert titles(result)[0] == "The Shining"

    def test_generation_failure_returns_empty_list(self, tool, monkeypatch):
        def broken(mood, limit):
            raise RuntimeError("table unavailable")

        monkeypatch.setattr(tool, "_generate", broken)
        result = tool.recommend("happy")

        assert result.recommendations == []
        assert result.cached is False
        assert len(tool.cache) == 0

    async def test_run_speaks_camel_case(self, tool):
        output = await tool.run({"mood": "happy", "cacheTTL": 60000, "limit": 2})

        assert output["mood"] == "happy"
        assert output["cached"] is False
        assert output["moodChanged"] is False
        assert "cacheAge" not in output
        assert output["recommendations"][0]["matchScore"] == 95

        cached = await tool.run({"mood": "happy"})
        assert cached["cached"] is True
        assert cached["cacheAge"] == 0

    def test_schema_advertises_wire_names(self, tool):
        schema = tool.schema()
        assert schema["function"]["name"] == "movie_recommendation"
        properties = schema["function"]["parameters"]["properties"]
        assert set(properties) == {"mood", "cacheTTL", "limit"}
        assert schema["function"]["parameters"]["required"] == ["mood"]
