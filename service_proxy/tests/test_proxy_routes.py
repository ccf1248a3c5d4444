"""
Route-level tests for the proxy service.
"""

import httpx
import pytest

from conftest import TEST_TOKEN


class TestReadiness:
    """Test cases for non-proxied endpoints."""

    def test_root_endpoint(self, client, upstream):
        response = client.get("/")
        assert response.status_code == 200
        assert response.text == "TMDB proxy server is running"
        assert upstream.requests == []

    def test_health_endpoint(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "proxy"
        assert data["status"] == "ok"
        assert data["dependencies"] == {"upstream_credential": "configured"}

    def test_health_reports_missing_credential(self, monkeypatch, upstream):
        from fastapi.testclient import TestClient
        from service_proxy.app.main import create_app

        monkeypatch.delenv("TMDB_API_KEY", raising=False)
        client = TestClient(create_app(transport=upstream.transport()))

        response = client.get("/health")
        assert response.json()["dependencies"]["upstream_credential"] == "missing"


class TestSearchRoutes:
    """Test cases for search routes."""

    @pytest.mark.parametrize("path", ["/api/search/multi", "/api/search/movie"])
    def test_missing_query_returns_400_without_upstream_call(self, client, upstream, path):
        response = client.get(path, params={"page": "2"})

        assert response.status_code == 400
        assert response.json() == {"error": "Query parameter is required"}
        assert upstream.requests == []

    def test_search_movie_forwards_translated_params(self, client, upstream):
        response = client.get(
            "/api/search/movie",
            params={
                "query": "blade runner",
                "page": "2",
                "year": "1982",
                "primary_release_year": "2017",
                "include_adult": "true",
            },
        )

        assert response.status_code == 200
        sent = upstream.last
        assert sent.url.path == "/3/search/movie"
        assert dict(sent.url.params) == {
            "query": "blade runner",
            "page": "2",
            "primary_release_year": "2017",
            "include_adult": "true",
        }

    @pytest.mark.parametrize("raw", ["false", "TRUE", "yes", "1"])
    def test_include_adult_false_unless_literal_true(self, client, upstream, raw):
        client.get("/api/search/movie", params={"query": "x", "include_adult": raw})
        assert upstream.last.url.params["include_adult"] == "false"

    def test_include_adult_false_when_absent(self, client, upstream):
        client.get("/api/search/movie", params={"query": "x"})
        assert upstream.last.url.params["include_adult"] == "false"

    def test_search_multi(self, client, upstream):
        client.get("/api/search/multi", params={"query": "nolan"})
        sent = upstream.last
        assert sent.url.path == "/3/search/multi"
        assert dict(sent.url.params) == {"query": "nolan", "page": "1"}

    def test_legacy_search_movies_redirects(self, client, upstream):
        response = client.get("/api/search/movies?query=x&page=2", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/api/search/movie?query=x&page=2"
        assert upstream.requests == []


class TestMovieRoutes:
    """Test cases for movie routes."""

    def test_movie_details_example(self, client, upstream):
        body = {"id": 550, "title": "Fight Club", "credits": {"cast": []}}
        upstream.respond_with(200, json=body)

        response = client.get("/api/movies/550")

        assert response.status_code == 200
        assert response.json() == body
        assert len(upstream.requests) == 1
        sent = upstream.last
        assert sent.method == "GET"
        assert sent.url.path == "/3/movie/550"
        assert dict(sent.url.params) == {
            "append_to_response": "videos,credits,similar,recommendations"
        }
        assert sent.headers["Authorization"] == f"Bearer {TEST_TOKEN}"
        assert sent.headers["accept"] == "application/json"

    def test_unknown_movie_relays_404_envelope(self, client, upstream):
        upstream.respond_with(
            404,
            json={"success": False, "status_code": 34,
                  "status_message": "The resource you requested could not be found."},
        )

        response = client.get("/api/movies/999999999")

        assert response.status_code == 404
        assert response.json() == {
            "error": "Failed to fetch movie details",
            "message": "The resource you requested could not be found.",
            "path": "/movie/999999999",
        }

    def test_transport_failure_returns_500(self, client, upstream):
        upstream.fail_with(lambda request: httpx.ConnectTimeout("timed out", request=request))

        response = client.get("/api/movies/popular")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Failed to fetch popular movies"
        assert data["path"] == "/movie/popular"
        assert len(upstream.requests) == 1

    @pytest.mark.parametrize("name", ["popular", "top_rated", "upcoming", "now_playing"])
    def test_list_routes_are_not_captured_as_ids(self, client, upstream, name):
        client.get(f"/api/movies/{name}", params={"page": "3"})
        sent = upstream.last
        assert sent.url.path == f"/3/movie/{name}"
        assert dict(sent.url.params) == {"page": "3"}

    def test_movies_index_search_branch(self, client, upstream):
        client.get("/api/movies", params={"query": "heat"})
        sent = upstream.last
        assert sent.url.path == "/3/search/movie"
        assert dict(sent.url.params) == {"query": "heat", "page": "1"}

    def test_movies_index_discover_branch(self, client, upstream):
        client.get("/api/movies")
        sent = upstream.last
        assert sent.url.path == "/3/discover/movie"
        assert dict(sent.url.params) == {"page": "1", "sort_by": "popularity.desc"}

    @pytest.mark.parametrize("sub", ["credits", "videos"])
    def test_movie_subresources_without_page(self, client, upstream, sub):
        client.get(f"/api/movies/27205/{sub}", params={"page": "2"})
        sent = upstream.last
        assert sent.url.path == f"/3/movie/27205/{sub}"
        assert dict(sent.url.params) == {}

    @pytest.mark.parametrize("sub", ["similar", "recommendations"])
    def test_movie_subresources_with_page(self, client, upstream, sub):
        client.get(f"/api/movies/27205/{sub}", params={"page": "2"})
        sent = upstream.last
        assert sent.url.path == f"/3/movie/27205/{sub}"
        assert dict(sent.url.params) == {"page": "2"}


class TestOtherResources:
    """Test cases for TV, person, genre and discover routes."""

    def test_tv_popular(self, client, upstream):
        client.get("/api/tv/popular")
        assert upstream.last.url.path == "/3/tv/popular"
        assert dict(upstream.last.url.params) == {"page": "1"}

    def test_tv_details_appends_related(self, client, upstream):
        client.get("/api/tv/1399")
        assert upstream.last.url.path == "/3/tv/1399"
        assert upstream.last.url.params["append_to_response"] == "videos,credits,similar,recommendations"

    def test_person_details_appends_credits(self, client, upstream):
        client.get("/api/person/287")
        assert upstream.last.url.path == "/3/person/287"
        assert upstream.last.url.params["append_to_response"] == "movie_credits,tv_credits"

    @pytest.mark.parametrize("kind", ["movie", "tv"])
    def test_genre_lists(self, client, upstream, kind):
        upstream.respond_with(200, json={"genres": [{"id": 28, "name": "Action"}]})

        response = client.get(f"/api/genres/{kind}")

        assert response.json() == {"genres": [{"id": 28, "name": "Action"}]}
        assert upstream.last.url.path == f"/3/genre/{kind}/list"

    def test_discover_movie_renames_vote_average(self, client, upstream):
        client.get("/api/discover/movie", params={"vote_average_gte": "7", "with_genres": "18"})
        params = upstream.last.url.params
        assert params["vote_average.gte"] == "7"
        assert "vote_average_gte" not in params
        assert params["with_genres"] == "18"
        assert params["sort_by"] == "popularity.desc"
        assert "year" not in params
        assert "with_watch_providers" not in params

    def test_discover_tv_first_air_date_year(self, client, upstream):
        client.get("/api/discover/tv", params={"first_air_date_year": "2008", "sort_by": "vote_count.desc"})
        assert upstream.last.url.path == "/3/discover/tv"
        assert dict(upstream.last.url.params) == {
            "page": "1",
            "sort_by": "vote_count.desc",
            "first_air_date_year": "2008",
        }

    def test_upstream_list_body_relayed(self, client, upstream):
        upstream.respond_with(200, json=[{"id": 1}, {"id": 2}])
        response = client.get("/api/tv/popular")
        assert response.json() == [{"id": 1}, {"id": 2}]
