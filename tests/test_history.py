"""Tests for history paging, reduction and watch history building."""

from datetime import datetime, timezone

import pytest

from mediacull.errors import WatchHistoryError
from mediacull.models import (
    EpisodeWatch, HistoryPage, HistoryRecord, MediaType, MovieWatch, WatchHistory
)
from mediacull.services.history import (
    HistoryReducer, WatchHistoryBuilder, clamp_progress, reduce_latest
)


def record(user, date, percent=100, season=None, episode=None, tag=None):
    return HistoryRecord(
        user=user,
        date=date,
        percent_complete=percent if tag is None else tag,
        parent_media_index=season,
        media_index=episode
    )


class FakeTautulli:
    """Serves a fixed list of records page by page."""
    
    def __init__(self, records):
        self.records = records
        self.calls = []
    
    async def get_history(self, **params):
        self.calls.append(params)
        start, length = params["start"], params["length"]
        return HistoryPage(records=self.records[start:start + length])


class TestReduceLatest:
    def test_keeps_latest_per_user(self):
        records = [
            record("alice", 100),
            record("bob", 50),
            record("alice", 300),
            record("alice", 200),
        ]
        latest = reduce_latest(records)
        
        assert set(latest) == {"alice", "bob"}
        assert latest["alice"].date == 300
        assert latest["bob"].date == 50
    
    def test_tie_keeps_first_seen(self):
        records = [record("alice", 300, tag=1), record("alice", 300, tag=2)]
        latest = reduce_latest(records)
        assert latest["alice"].percent_complete == 1
    
    def test_empty(self):
        assert reduce_latest([]) == {}


class TestHistoryReducer:
    @pytest.mark.asyncio
    async def test_pages_until_short_page(self):
        records = [record(f"user{i % 7}", i) for i in range(2 * 1000 + 5)]
        tautulli = FakeTautulli(records)
        reducer = HistoryReducer(tautulli)
        
        history = await reducer.fetch_history("42", MediaType.MOVIE)
        
        assert len(history) == 2005
        assert len(tautulli.calls) == 3
        assert [c["start"] for c in tautulli.calls] == [0, 1000, 2000]
        assert all(c["length"] == 1000 for c in tautulli.calls)
    
    @pytest.mark.asyncio
    async def test_exact_multiple_requests_one_empty_page(self):
        tautulli = FakeTautulli([record("a", i) for i in range(6)])
        reducer = HistoryReducer(tautulli, page_size=3)
        
        history = await reducer.fetch_history("42", MediaType.MOVIE)
        
        assert len(history) == 6
        assert len(tautulli.calls) == 3
    
    @pytest.mark.asyncio
    async def test_start_is_record_offset_of_page(self):
        tautulli = FakeTautulli([record("a", i) for i in range(7)])
        reducer = HistoryReducer(tautulli, page_size=3)
        
        history = await reducer.fetch_history("42", MediaType.TV)
        
        assert len(history) == 7
        assert [c["start"] for c in tautulli.calls] == [0, 3, 6]
        assert [r.date for r in history] == list(range(7))
    
    @pytest.mark.asyncio
    async def test_query_parameter_by_media_type(self):
        movies = FakeTautulli([])
        shows = FakeTautulli([])
        
        await HistoryReducer(movies).fetch_history("1", MediaType.MOVIE)
        await HistoryReducer(shows).fetch_history("2", MediaType.TV)
        
        assert movies.calls[0]["rating_key"] == "1"
        assert "grandparent_rating_key" not in movies.calls[0]
        assert shows.calls[0]["grandparent_rating_key"] == "2"
    
    @pytest.mark.asyncio
    async def test_movie_records_lose_episode_numbers(self):
        tautulli = FakeTautulli([record("a", 1, season=1, episode=2)])
        history = await HistoryReducer(tautulli).fetch_history("1", MediaType.MOVIE)
        assert history[0].parent_media_index is None
        assert history[0].media_index is None
    
    @pytest.mark.asyncio
    async def test_fetch_and_reduce(self):
        tautulli = FakeTautulli([record("a", 1), record("b", 5), record("a", 9)])
        reduced = await HistoryReducer(tautulli).fetch_and_reduce("1", MediaType.MOVIE)
        assert {user: r.date for user, r in reduced.items()} == {"a": 9, "b": 5}


class TestWatchHistoryBuilder:
    def test_movie_watches(self):
        reduced = {"bob": record("bob", 1700000000, percent=150), "alice": record("alice", 0, percent=42)}
        history = WatchHistoryBuilder().build(reduced, MediaType.MOVIE, "10")
        
        assert history.media_type is MediaType.MOVIE
        assert history.watches == (
            MovieWatch("alice", datetime(1970, 1, 1, tzinfo=timezone.utc), 42),
            MovieWatch("bob", datetime.fromtimestamp(1700000000, tz=timezone.utc), 100),
        )
    
    def test_episode_watches(self):
        reduced = {"alice": record("alice", 86400, percent=90, season=2, episode=5)}
        history = WatchHistoryBuilder().build(reduced, MediaType.TV, "10")
        
        watch = history.watches[0]
        assert isinstance(watch, EpisodeWatch)
        assert (watch.season, watch.episode, watch.progress) == (2, 5, 90)
    
    def test_episode_without_numbers_fails_with_rating_key(self):
        reduced = {"alice": record("alice", 86400, season=2)}
        with pytest.raises(WatchHistoryError) as exc_info:
            WatchHistoryBuilder().build(reduced, MediaType.TV, "777")
        assert exc_info.value.rating_key == "777"
    
    def test_unconvertible_date_fails_with_rating_key(self):
        reduced = {"alice": record("alice", 10 ** 15)}
        with pytest.raises(WatchHistoryError, match="rating key 55"):
            WatchHistoryBuilder().build(reduced, MediaType.MOVIE, "55")
    
    def test_empty(self):
        history = WatchHistoryBuilder().build({}, MediaType.TV, "1")
        assert history == WatchHistory(MediaType.TV)


class TestClampProgress:
    def test_over_100_is_capped(self):
        assert clamp_progress(150) == 100
    
    def test_in_range_is_kept(self):
        assert clamp_progress(42) == 42


class TestDescribe:
    def test_no_history(self):
        assert WatchHistory(MediaType.MOVIE).describe() == "No watch history."
    
    def test_lines_per_user(self):
        when = datetime(2024, 3, 9, 20, 0, tzinfo=timezone.utc)
        history = WatchHistory(MediaType.TV, (
            EpisodeWatch("alice", when, 75, 1, 4),
        ))
        assert history.describe() == (
            "Watch history:\n"
            "      * Last watch by alice, was at 09-03-2024. Season 1 Episode 4, with 75% complete."
        )
    
    def test_movie_line(self):
        watch = MovieWatch("bob", datetime(2023, 12, 1, tzinfo=timezone.utc), 100)
        assert watch.describe() == "Last watch by bob at 01-12-2023, with 100% progress."


class TestHistoryPage:
    def test_built_by_field_name_or_alias(self):
        by_name = HistoryPage(records=[record("a", 1)], records_filtered=1)
        by_alias = HistoryPage.model_validate({"data": [{"user": "a", "date": 1}], "recordsFiltered": 1})
        
        assert HistoryPage.model_config["populate_by_name"] is True
        assert by_name.records_filtered == by_alias.records_filtered == 1
        assert by_name.records[0].user == by_alias.records[0].user == "a"
