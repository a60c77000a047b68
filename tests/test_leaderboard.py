"""Tests for the cache wrapper and the leaderboard built on it."""
import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from qaskills.base.models import LeaderboardFilter
from qaskills.clients.cache_client import CacheClient
from qaskills.services.leaderboard_service import LeaderboardService


def factory_returning(value):
    return AsyncMock(return_value=value)


class TestCacheClient:
    def test_without_backend_calls_factory(self):
        factory = factory_returning({"a": 1})
        assert asyncio.run(CacheClient(None).get_or_set("k", factory)) == {"a": 1}
        factory.assert_awaited_once()

    def test_hit_skips_factory(self):
        redis = AsyncMock()
        redis.get.return_value = json.dumps({"cached": True})
        factory = factory_returning({"cached": False})

        assert asyncio.run(CacheClient(redis).get_or_set("k", factory)) == {"cached": True}
        redis.get.assert_awaited_once_with("qaskills:k")
        factory.assert_not_awaited()

    def test_miss_stores_with_ttl(self):
        redis = AsyncMock()
        redis.get.return_value = None
        asyncio.run(CacheClient(redis).get_or_set("k", factory_returning([1, 2]), ttl_seconds=300))
        redis.set.assert_awaited_once_with("qaskills:k", "[1, 2]", ex=300)

    def test_backend_failure_falls_through(self):
        redis = AsyncMock()
        redis.get.side_effect = RedisConnectionError("down")
        redis.set.side_effect = RedisConnectionError("down")
        assert asyncio.run(CacheClient(redis).get_or_set("k", factory_returning("fresh"))) == "fresh"

    def test_from_url_without_url_disables_cache(self):
        assert CacheClient.from_url("").redis is None


class TestLeaderboard:
    @pytest.fixture
    def rows(self):
        return [
            {"id": "s1", "name": "Playwright", "slug": "playwright-e2e", "authorName": "tta",
             "installCount": 86, "weeklyInstalls": 10, "qualityScore": 92,
             "testingTypes": ["e2e"], "frameworks": ["playwright"], "verified": True},
            {"id": "s2", "name": "Jest", "slug": "jest-unit", "authorName": "tta",
             "installCount": 64, "weeklyInstalls": 30, "qualityScore": 91,
             "testingTypes": ["unit"], "frameworks": ["jest"], "verified": False},
        ]

    def test_rows_are_ranked(self, skill_repo, rows):
        skill_repo._top_skills.return_value = rows
        service = LeaderboardService(skill_repo, CacheClient(None))

        result = asyncio.run(service.get_leaderboard("hot"))

        skill_repo._top_skills.assert_awaited_once_with(LeaderboardFilter.Hot, 50)
        assert result["filter"] == "hot"
        assert [s["rank"] for s in result["skills"]] == [1, 2]
        assert result["skills"][0]["author"] == "tta"
        assert "updatedAt" in result

    @pytest.mark.parametrize("raw, expected", [
        (None, LeaderboardFilter.All),
        ("all", LeaderboardFilter.All),
        ("trending", LeaderboardFilter.Trending),
        ("new", LeaderboardFilter.New),
        ("drop table", LeaderboardFilter.All),
    ])
    def test_filter_parsing(self, skill_repo, raw, expected):
        skill_repo._top_skills.return_value = []
        service = LeaderboardService(skill_repo, CacheClient(None))
        asyncio.run(service.get_leaderboard(raw))
        assert skill_repo._top_skills.await_args.args[0] is expected

    def test_cached_per_filter_for_five_minutes(self, skill_repo, rows):
        redis = AsyncMock()
        redis.get.return_value = None
        skill_repo._top_skills.return_value = rows
        service = LeaderboardService(skill_repo, CacheClient(redis))

        asyncio.run(service.get_leaderboard("trending"))

        key, _ = redis.set.await_args.args
        assert key == "qaskills:leaderboard:trending"
        assert redis.set.await_args.kwargs["ex"] == 300
