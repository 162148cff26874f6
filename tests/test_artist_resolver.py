import pytest

from artist_playlists.core import Artist, NotFound, ValidationError
from artist_playlists.pipeline import resolve_artist

MODULE = "artist_playlists.pipeline.artist_resolver"


def _artist(artist_id: str) -> Artist:
    return Artist(id=artist_id, name=f"Artist {artist_id}", image_url=None, follower_count=1)


def _patch_search(monkeypatch, ids):
    calls = []

    def fake_search(token: str, query: str, limit: int = 5):
        calls.append({"query": query, "limit": limit})
        return [_artist(i) for i in ids]

    monkeypatch.setattr(f"{MODULE}.search_artists", fake_search)
    return calls


def test_resolver_skips_excluded_ids_in_ranked_order(monkeypatch) -> None:
    calls = _patch_search(monkeypatch, ["A1", "A2", "A3"])

    artist = resolve_artist("token", "Artist X", excluded_ids=["A1"])

    assert artist.id == "A2"
    assert calls == [{"query": "Artist X", "limit": 5}]


def test_resolver_returns_first_candidate_without_exclusions(monkeypatch) -> None:
    _patch_search(monkeypatch, ["A1", "A2"])

    assert resolve_artist("token", "Artist X").id == "A1"


def test_resolver_not_found_when_all_excluded(monkeypatch) -> None:
    _patch_search(monkeypatch, ["A1", "A2"])

    with pytest.raises(NotFound):
        resolve_artist("token", "Artist X", excluded_ids={"A1", "A2"})


def test_resolver_not_found_on_empty_results(monkeypatch) -> None:
    _patch_search(monkeypatch, [])

    with pytest.raises(NotFound):
        resolve_artist("token", "Nobody")


def test_resolver_rejects_blank_query(monkeypatch) -> None:
    calls = _patch_search(monkeypatch, ["A1"])

    with pytest.raises(ValidationError):
        resolve_artist("token", "   ")

    assert calls == []
