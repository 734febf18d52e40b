from typing import Any, Dict, List, Optional
import logging

from agents.base_agent import BaseAgent
from agents.movie_agent import MovieAgent
from config import Settings
from mood_cache import MoodCache
from mood_classifier import MoodClassifier
from tmdb_client import TmdbClient
from tools.catalog_recommendation import CatalogRecommendationTool
from tools.mood_recommendation import MoodRecommendationTool

logger = logging.getLogger(__name__)

MOVIE_AGENT_ID = "movieAgent"


class AgentRegistry:
    def __init__(self):
        self._agents: Dict[str, BaseAgent] = {}

    def register(self, agent_id: str, agent: BaseAgent) -> None:
        self._agents[agent_id] = agent
        logger.info(f"Registered agent: {agent_id}")

    def get(self, agent_id: str) -> Optional[BaseAgent]:
        return self._agents.get(agent_id)

    def list_agents(self) -> List[Dict[str, Any]]:
        return [{"id": agent_id, **agent.describe()} for agent_id, agent in self._agents.items()]

    def __contains__(self, agent_id: str) -> bool:
        return agent_id in self._agents

    def __len__(self) -> int:
        return len(self._agents)


def build_default_registry(settings: Settings, cache: Optional[MoodCache] = None) -> AgentRegistry:
    """Registry with the movie agent; the catalog tool is offered only when TMDB is configured."""
    cache = cache if cache is not None else MoodCache(capacity=settings.mood_cache_capacity)
    tools = [MoodRecommendationTool(cache, default_ttl_ms=settings.mood_cache_ttl_ms)]

    if settings.tmdb_api_key:
        catalog = TmdbClient(settings.tmdb_api_key, settings.tmdb_base_url, timeout=settings.http_timeout)
        tools.append(CatalogRecommendationTool(MoodClassifier(settings), catalog))
    else:
        logger.info("TMDB_API_KEY not set, catalog recommendations disabled")

    registry = AgentRegistry()
    registry.register(MOVIE_AGENT_ID, MovieAgent(settings, tools))
    return registry
