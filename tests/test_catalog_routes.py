"""Tests for browsing the catalog pages."""

from __future__ import annotations

from gameshelf.catalog.services import list_genres, search_games


GAMES = (
    {"id": 10, "name": "Portal", "genre": "Puzzle"},
    {"id": 20, "name": "Portal 2", "genre": "Puzzle"},
    {"id": 30, "name": "Half-Life", "genre": "Action"},
    {"id": 40, "name": "Stardew Valley", "genre": "Simulation", "release_date": "0000-00-00"},
)


def test_root_redirects_to_catalog(client):
    response = client.get("/")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/games/")


def test_search_games_filters_and_paginates(app, add_games):
    add_games(*GAMES)

    with app.app_context():
        first_page = search_games(page=1, per_page=2)
        assert first_page.total == 4
        assert [game.name for game in first_page.items] == ["Half-Life", "Portal"]

        by_name = search_games(query="portal", per_page=10)
        assert [game.id for game in by_name.items] == [10, 20]

        by_genre = search_games(genre="Action", per_page=10)
        assert [game.id for game in by_genre.items] == [30]

        assert search_games(page=9, per_page=2).items == []
        assert list_genres() == ["Action", "Puzzle", "Simulation"]


def test_browse_page_lists_games(client, add_games):
    add_games(*GAMES)

    response = client.get("/games/")

    assert response.status_code == 200
    assert b"Half-Life" in response.data
    assert b"Portal" in response.data
    assert b"Stardew Valley" not in response.data

    response = client.get("/games/?page=2")
    assert b"Stardew Valley" in response.data


def test_browse_page_search(client, add_games):
    add_games(*GAMES)

    response = client.get("/games/?q=half")

    assert b"Half-Life" in response.data
    assert b"Portal" not in response.data


def test_browse_page_with_no_matches(client, add_games):
    add_games(*GAMES)

    response = client.get("/games/?q=zelda")

    assert b"No games found." in response.data


def test_detail_page(client, add_games):
    add_games(*GAMES)

    response = client.get("/games/30")
    assert response.status_code == 200
    assert b"Half-Life" in response.data
    assert b"2023-06-12" in response.data

    response = client.get("/games/40")
    assert b"Unknown" in response.data


def test_unknown_game_is_404(client):
    assert client.get("/games/12345").status_code == 404


def test_search_treats_wildcards_literally(app, add_games):
    add_games(*GAMES, {"id": 50, "name": "Snake_Case", "genre": "Puzzle"})

    with app.app_context():
        assert [game.id for game in search_games(query="_", per_page=10).items] == [50]
        assert search_games(query="%", per_page=10).items == []
        assert search_games(query="100%", per_page=10).total == 0
