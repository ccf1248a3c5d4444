"""
Static route mapping between the browser-facing API and the TMDB API.

Each ``ProxyRoute`` pairs an inbound path with an upstream path template and
an ordered list of parameter rules. Rules insert a key into the outbound
parameter mapping only when their source value is present, so optional
filters never reach the upstream as empty keys.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import quote

from shared.errors import MissingParameterError


MEDIA_APPEND_TO_RESPONSE = "videos,credits,similar,recommendations"
PERSON_APPEND_TO_RESPONSE = "movie_credits,tv_credits"
DEFAULT_SORT = "popularity.desc"
DEFAULT_PAGE = 1

Query = Mapping[str, str]
Params = Dict[str, Any]


def present(query: Query, name: str) -> Optional[str]:
    """Return the inbound value for ``name``, or None when missing or empty."""
    value = query.get(name)
    if value is None or value == "":
        return None
    return value


@dataclass(frozen=True)
class Passthrough:
    """Forward a value as-is, falling back to ``default`` when absent."""

    name: str
    default: Optional[Any] = None
    upstream_name: Optional[str] = None

    def apply(self, query: Query, params: Params) -> None:
        value = present(query, self.name)
        if value is None:
            value = self.default
        if value is not None:
            params[self.upstream_name or self.name] = value


@dataclass(frozen=True)
class Required:
    """Forward a value the caller must supply."""

    name: str

    def apply(self, query: Query, params: Params) -> None:
        value = present(query, self.name)
        if value is None:
            raise MissingParameterError(self.name)
        params[self.name] = value


@dataclass(frozen=True)
class Flag:
    """Boolean coercion: True only for the literal string "true"."""

    name: str

    def apply(self, query: Query, params: Params) -> None:
        params[self.name] = query.get(self.name) == "true"


@dataclass(frozen=True)
class FirstOf:
    """Forward the first present name in ``names``, under its own key."""

    names: Tuple[str, ...]

    def apply(self, query: Query, params: Params) -> None:
        for name in self.names:
            value = present(query, name)
            if value is not None:
                params[name] = value
                return


@dataclass(frozen=True)
class Fixed:
    """A constant sent on every call."""

    name: str
    value: Any

    def apply(self, query: Query, params: Params) -> None:
        params[self.name] = self.value


Rule = Union[Passthrough, Required, Flag, FirstOf, Fixed]


@dataclass(frozen=True)
class ProxyRoute:
    name: str
    path: str
    upstream: str
    description: str
    rules: Tuple[Rule, ...] = field(default_factory=tuple)

    def resolve(self, query: Query) -> "ProxyRoute":
        return self

    def upstream_path(self, path_params: Optional[Mapping[str, str]] = None) -> str:
        """Fill the upstream template, escaping identifiers as single segments."""
        escaped = {key: quote(str(value), safe="") for key, value in (path_params or {}).items()}
        return self.upstream.format(**escaped)

    def build_params(self, query: Query) -> Params:
        params: Params = {}
        for rule in self.rules:
            rule.apply(query, params)
        return params


@dataclass(frozen=True)
class ConditionalRoute:
    """Pick ``when_present`` if the caller sent ``trigger``, else ``otherwise``."""

    name: str
    path: str
    trigger: str
    when_present: ProxyRoute
    otherwise: ProxyRoute

    def resolve(self, query: Query) -> ProxyRoute:
        if present(query, self.trigger) is not None:
            return self.when_present
        return self.otherwise


@dataclass(frozen=True)
class RedirectRoute:
    """Deprecated alias answered with a redirect instead of an upstream call."""

    name: str
    path: str
    target: str
    status_code: int = 302

    def location(self, raw_query: str) -> str:
        if raw_query:
            return f"{self.target}?{raw_query}"
        return self.target


AnyRoute = Union[ProxyRoute, ConditionalRoute]


def build_upstream_params(route: ProxyRoute, query: Query) -> Params:
    """Build the outbound query mapping for ``route`` from the inbound ``query``."""
    return route.build_params(query)


PAGE = Passthrough("page", default=DEFAULT_PAGE)
SORT_BY = Passthrough("sort_by", default=DEFAULT_SORT)
VOTE_AVERAGE_GTE = Passthrough("vote_average_gte", upstream_name="vote_average.gte")


def _list_route(name: str, path: str, upstream: str, description: str) -> ProxyRoute:
    return ProxyRoute(name, path, upstream, description, (PAGE,))


SEARCH_MOVIE = ProxyRoute(
    "search_movie",
    "/api/search/movie",
    "/search/movie",
    "movies",
    (
        Required("query"),
        PAGE,
        FirstOf(("primary_release_year", "year")),
        Flag("include_adult"),
    ),
)

SEARCH_MULTI = ProxyRoute(
    "search_multi",
    "/api/search/multi",
    "/search/multi",
    "search results",
    (Required("query"), PAGE),
)

DISCOVER_MOVIE = ProxyRoute(
    "discover_movie",
    "/api/discover/movie",
    "/discover/movie",
    "movies",
    (
        PAGE,
        SORT_BY,
        Passthrough("with_genres"),
        Passthrough("year"),
        VOTE_AVERAGE_GTE,
        Passthrough("with_watch_providers"),
    ),
)

DISCOVER_TV = ProxyRoute(
    "discover_tv",
    "/api/discover/tv",
    "/discover/tv",
    "TV shows",
    (
        PAGE,
        SORT_BY,
        Passthrough("with_genres"),
        Passthrough("first_air_date_year"),
        VOTE_AVERAGE_GTE,
    ),
)

MOVIES_INDEX = ConditionalRoute(
    "movies",
    "/api/movies",
    trigger="query",
    when_present=ProxyRoute(
        "movies_search",
        "/api/movies",
        "/search/movie",
        "movies",
        (Required("query"), PAGE),
    ),
    otherwise=ProxyRoute(
        "movies_discover",
        "/api/movies",
        "/discover/movie",
        "movies",
        (PAGE, SORT_BY),
    ),
)

# Static paths come before the {id} patterns they would otherwise collide with.
ROUTES: Sequence[AnyRoute] = (
    MOVIES_INDEX,
    _list_route("movies_popular", "/api/movies/popular", "/movie/popular", "popular movies"),
    _list_route("movies_top_rated", "/api/movies/top_rated", "/movie/top_rated", "top rated movies"),
    _list_route("movies_upcoming", "/api/movies/upcoming", "/movie/upcoming", "upcoming movies"),
    _list_route("movies_now_playing", "/api/movies/now_playing", "/movie/now_playing", "now playing movies"),
    ProxyRoute(
        "movie_details",
        "/api/movies/{id}",
        "/movie/{id}",
        "movie details",
        (Fixed("append_to_response", MEDIA_APPEND_TO_RESPONSE),),
    ),
    ProxyRoute("movie_credits", "/api/movies/{id}/credits", "/movie/{id}/credits", "movie credits"),
    ProxyRoute("movie_videos", "/api/movies/{id}/videos", "/movie/{id}/videos", "movie videos"),
    _list_route("movie_similar", "/api/movies/{id}/similar", "/movie/{id}/similar", "similar movies"),
    _list_route(
        "movie_recommendations",
        "/api/movies/{id}/recommendations",
        "/movie/{id}/recommendations",
        "movie recommendations",
    ),
    _list_route("tv_popular", "/api/tv/popular", "/tv/popular", "popular TV shows"),
    ProxyRoute(
        "tv_details",
        "/api/tv/{id}",
        "/tv/{id}",
        "TV show details",
        (Fixed("append_to_response", MEDIA_APPEND_TO_RESPONSE),),
    ),
    ProxyRoute(
        "person_details",
        "/api/person/{id}",
        "/person/{id}",
        "person details",
        (Fixed("append_to_response", PERSON_APPEND_TO_RESPONSE),),
    ),
    ProxyRoute("genres_movie", "/api/genres/movie", "/genre/movie/list", "movie genres"),
    ProxyRoute("genres_tv", "/api/genres/tv", "/genre/tv/list", "TV genres"),
    DISCOVER_MOVIE,
    DISCOVER_TV,
    SEARCH_MULTI,
    SEARCH_MOVIE,
)

LEGACY_REDIRECTS: Sequence[RedirectRoute] = (
    RedirectRoute("search_movies_legacy", "/api/search/movies", SEARCH_MOVIE.path),
)
