from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional
import asyncio
import logging

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from exceptions import CatalogError, ConfigurationError, UpstreamError, UpstreamSchemaError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.themoviedb.org/3"


class TmdbGenre(BaseModel):
    id: int
    name: str


class TmdbMovieSummary(BaseModel):
    id: int
    title: str = ""
    overview: Optional[str] = None
    vote_average: float = 0.0
    release_date: Optional[str] = None
    popularity: float = 0.0


class TmdbDiscoverPage(BaseModel):
    page: int = 1
    results: List[TmdbMovieSummary] = Field(default_factory=list)


class TmdbMovieDetails(TmdbMovieSummary):
    runtime: Optional[int] = None
    genres: List[TmdbGenre] = Field(default_factory=list)


class MovieRecommendation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    overview: str = ""
    rating: float = 0.0
    release_date: str = Field(default="", alias="releaseDate")
    runtime: int = 0
    genres: List[str] = Field(default_factory=list)
    popularity: float = 0.0

    @classmethod
    def from_summary(cls, movie: TmdbMovieSummary) -> "MovieRecommendation":
        """Recommendation without detail enrichment (runtime 0, no genre names)."""
        return cls(
            id=movie.id,
            title=movie.title,
            overview=movie.overview or "",
            rating=movie.vote_average,
            release_date=movie.release_date or "",
            popularity=movie.popularity,
        )

    @classmethod
    def from_details(cls, movie: TmdbMovieDetails) -> "MovieRecommendation":
        recommendation = cls.from_summary(movie)
        recommendation.runtime = movie.runtime or 0
        recommendation.genres = [genre.name for genre in movie.genres]
        return recommendation


class TmdbClient:
    """Async client for the TMDB movie catalog."""

    def __init__(self, api_key: Optional[str], base_url: str = DEFAULT_BASE_URL,
                 timeout: Optional[float] = None, http_client: Optional[httpx.AsyncClient] = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    def require_api_key(self) -> None:
        if not self.api_key:
            raise ConfigurationError("TMDB_API_KEY not configured")

    @asynccontextmanager
    async def _session(self, client: Optional[httpx.AsyncClient] = None) -> AsyncIterator[httpx.AsyncClient]:
        if client is not None:
            yield client
        elif self._http_client is not None:
            yield self._http_client
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as session:
                yield session

    async def _get(self, client: httpx.AsyncClient, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        query = {"api_key": self.api_key}
        query.update(params or {})
        try:
            response = await client.get(f"{self.base_url}{path}", params=query)
        except httpx.HTTPError as e:
            raise CatalogError(f"TMDB request to {path} failed: {e}") from e

        if response.is_error:
            raise CatalogError(f"TMDB API error: {response.status_code} {response.reason_phrase}")
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamSchemaError("TMDB", f"{path} returned invalid JSON") from e

    async def discover_movies(self, genre_ids: str, page: int = 1,
                              client: Optional[httpx.AsyncClient] = None) -> List[TmdbMovieSummary]:
        """Movies in the given genre(s), most popular first."""
        self.require_api_key()
        async with self._session(client) as session:
            data = await self._get(session, "/discover/movie", {
                "with_genres": genre_ids,
                "sort_by": "popularity.desc",
                "page": page,
            })
        try:
            return TmdbDiscoverPage.model_validate(data).results
        except ValidationError as e:
            raise UpstreamSchemaError("TMDB /discover/movie", str(e)) from e

    async def get_movie_details(self, movie_id: int,
                                client: Optional[httpx.AsyncClient] = None) -> TmdbMovieDetails:
        self.require_api_key()
        async with self._session(client) as session:
            data = await self._get(session, f"/movie/{movie_id}")
        try:
            return TmdbMovieDetails.model_validate(data)
        except ValidationError as e:
            raise UpstreamSchemaError(f"TMDB /movie/{movie_id}", str(e)) from e

    async def top_movies_for_genre(self, genre_ids: str, limit: int) -> List[MovieRecommendation]:
        """
        Fetch the ``limit`` most popular movies for a genre filter, enriched with
        runtime and genre names.

        Detail lookups run concurrently; results keep the discover order. A failed
        lookup degrades only its own movie to runtime 0 and no genre names.

        Raises:
            ConfigurationError: TMDB_API_KEY is missing
            CatalogError: the discover call failed or returned no movies
        """
        self.require_api_key()
        async with self._session() as session:
            candidates = await self.discover_movies(genre_ids, client=session)
            if not candidates:
                raise CatalogError(f"No movies found for genre: {genre_ids}")
            candidates = candidates[:limit]
            return list(await asyncio.gather(*(self._enrich(session, movie) for movie in candidates)))

    async def _enrich(self, client: httpx.AsyncClient, movie: TmdbMovieSummary) -> MovieRecommendation:
        try:
            details = await self.get_movie_details(movie.id, client=client)
        except UpstreamError as e:
            logger.warning(f"Detail lookup failed for movie {movie.id} ('{movie.title}'), using summary: {e}")
            return MovieRecommendation.from_summary(movie)
        return MovieRecommendation.from_details(details)
