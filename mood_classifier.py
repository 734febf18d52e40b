from typing import Optional
import json
import logging

from pydantic import BaseModel

from config import Settings
from exceptions import ConfigurationError, UpstreamSchemaError
from llm import has_openai_credentials, initialize_openai_client
from tools.moods import DEFAULT_MOOD, KNOWN_MOODS

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE = 0.5


class MoodClassification(BaseModel):
    mood: str = DEFAULT_MOOD
    confidence: float = DEFAULT_CONFIDENCE


class MoodClassifier:
    """Detects the user's mood from free text with a language model."""

    def __init__(self, settings: Settings, client=None):
        self.settings = settings
        self.model = settings.classifier_model
        self._client = client

    def require_credentials(self) -> None:
        if self._client is None and not has_openai_credentials(self.settings.classifier_api_key, self.settings):
            raise ConfigurationError("CLASSIFIER_API_KEY not configured")

    def _get_client(self):
        if self._client is None:
            self._client = initialize_openai_client(
                self.settings.classifier_api_key, self.settings, key_name="CLASSIFIER_API_KEY"
            )
        return self._client

    async def classify(self, text: str) -> MoodClassification:
        self.require_credentials()
        client = self._get_client()

        response = await client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": self._build_prompt(text)}],
            response_format={"type": "json_object"},
            temperature=0,
        )
        content = response.choices[0].message.content or "{}"

        try:
            parsed = json.loads(content)
        except ValueError as e:
            raise UpstreamSchemaError("mood classifier", f"response is not valid JSON: {content[:100]}") from e
        if not isinstance(parsed, dict):
            raise UpstreamSchemaError("mood classifier", "expected a JSON object")

        mood = str(parsed.get("mood") or DEFAULT_MOOD).strip().lower()
        try:
            confidence = float(parsed.get("confidence") or DEFAULT_CONFIDENCE)
        except (TypeError, ValueError) as e:
            raise UpstreamSchemaError("mood classifier", f"invalid confidence {parsed.get('confidence')!r}") from e

        logger.info(f"Detected mood '{mood}' (confidence {confidence:.2f})")
        return MoodClassification(mood=mood, confidence=confidence)

    def _build_prompt(self, text: str) -> str:
        return f"""Analyze the following user input and determine their current mood. Respond ONLY with valid JSON in this exact format:
{{
  "mood": "one of: {', '.join(KNOWN_MOODS)}",
  "confidence": 0.0 to 1.0
}}

User input: "{text}"
"""
