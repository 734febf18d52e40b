from typing import List
import logging

from pydantic import BaseModel, ConfigDict, Field

from mood_classifier import MoodClassifier
from tmdb_client import MovieRecommendation, TmdbClient
from tools.base import Tool
from tools.moods import genre_for_mood

logger = logging.getLogger(__name__)


class CatalogRecommendationInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_input: str = Field(
        alias="userInput",
        description="User's description of their current state or what they want to watch",
    )
    limit: int = Field(default=5, ge=1, le=20, description="Number of recommendations to return")


class CatalogRecommendationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    detected_mood: str = Field(alias="detectedMood")
    mood_confidence: float = Field(alias="moodConfidence")
    recommendations: List[MovieRecommendation] = Field(default_factory=list)
    count: int = 0


class CatalogRecommendationTool(Tool):
    name = "catalog_recommendation"
    description = (
        "Get movie recommendations by analyzing user input to determine mood, "
        "then fetching the most popular matching movies from TMDB"
    )
    input_model = CatalogRecommendationInput

    def __init__(self, classifier: MoodClassifier, catalog: TmdbClient):
        self.classifier = classifier
        self.catalog = catalog

    async def execute(self, params: CatalogRecommendationInput) -> CatalogRecommendationResult:
        # both collaborators must be configured before anything goes over the network
        self.catalog.require_api_key()
        self.classifier.require_credentials()

        classification = await self.classifier.classify(params.user_input)
        genre_ids = genre_for_mood(classification.mood)
        logger.info(f"Mood '{classification.mood}' mapped to TMDB genre(s) {genre_ids}")

        recommendations = await self.catalog.top_movies_for_genre(genre_ids, params.limit)
        return CatalogRecommendationResult(
            detected_mood=classification.mood,
            mood_confidence=classification.confidence,
            recommendations=recommendations,
            count=len(recommendations),
        )
