from typing import List, Optional
import logging

from pydantic import BaseModel, ConfigDict, Field

from model import utc_timestamp
from mood_cache import MoodCache
from tools.base import Tool
from tools.moods import curated_for_mood

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL_MS = 1800000  # 30 minutes
DEFAULT_LIMIT = 5


class MoodRecommendationInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mood: str = Field(description="The user's current mood (e.g., happy, sad, excited, relaxed, scared)")
    cache_ttl: int = Field(
        default=DEFAULT_CACHE_TTL_MS,
        alias="cacheTTL",
        ge=0,
        description="Cache time-to-live in milliseconds (default: 1800000 = 30 minutes)",
    )
    limit: int = Field(
        default=DEFAULT_LIMIT,
        ge=1,
        description="Number of movie recommendations to return (default: 5)",
    )


class CuratedMovie(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    genre: str
    description: str
    match_score: int = Field(alias="matchScore")


class MoodRecommendationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mood: str
    recommendations: List[CuratedMovie] = Field(default_factory=list)
    cached: bool
    timestamp: str
    cache_age: Optional[int] = Field(default=None, alias="cacheAge")
    mood_changed: Optional[bool] = Field(default=None, alias="moodChanged")


class MoodRecommendationTool(Tool):
    name = "movie_recommendation"
    description = "Recommends movies based on user mood with intelligent caching"
    input_model = MoodRecommendationInput

    def __init__(self, cache: Optional[MoodCache] = None, default_ttl_ms: int = DEFAULT_CACHE_TTL_MS):
        self.cache = cache if cache is not None else MoodCache()
        self.default_ttl_ms = default_ttl_ms

    async def execute(self, params: MoodRecommendationInput) -> MoodRecommendationResult:
        return self.recommend(params.mood, limit=params.limit, cache_ttl=params.cache_ttl)

    def recommend(self, mood: str, limit: int = DEFAULT_LIMIT,
                  cache_ttl: Optional[int] = None) -> MoodRecommendationResult:
        """
        Return up to ``limit`` recommendations for ``mood``.

        Fresh cached results for the same mood are served from the cache; anything
        else regenerates the list from the curated table and overwrites the cache.
        Generation failures produce an empty list instead of an exception.
        """
        ttl = self.default_ttl_ms if cache_ttl is None else cache_ttl
        now = self.cache.now()

        hit = self.cache.lookup(mood, ttl, now=now)
        if hit is not None:
            age = int(hit.age_ms / 1000 + 0.5)
            logger.info(f"Cache HIT - Mood: '{mood}' (age: {age}s)")
            return MoodRecommendationResult(
                mood=mood,
                recommendations=hit.recommendations[:limit],
                cached=True,
                cache_age=age,
                timestamp=utc_timestamp(hit.timestamp),
            )

        logger.info(f"Cache MISS - Generating recommendations for mood: '{mood}'")
        try:
            recommendations = self._generate(mood, limit)
            previous_mood = self.cache.last_mood
            mood_changed = self.cache.store(mood, recommendations, now=now)
            if mood_changed:
                logger.info(f"MOOD CHANGE: '{previous_mood}' -> '{mood}'")
            logger.info(f"Generated {len(recommendations)} recommendations for '{mood}'")
            return MoodRecommendationResult(
                mood=mood,
                recommendations=recommendations,
                cached=False,
                mood_changed=mood_changed,
                timestamp=utc_timestamp(now),
            )
        except Exception as e:
            logger.error(f"Recommendation generation failed for mood '{mood}': {e}")
            return MoodRecommendationResult(
                mood=mood,
                recommendations=[],
                cached=False,
                timestamp=utc_timestamp(now),
            )

    def _generate(self, mood: str, limit: int) -> List[CuratedMovie]:
        return [CuratedMovie.model_validate(item) for item in curated_for_mood(mood)[:limit]]
