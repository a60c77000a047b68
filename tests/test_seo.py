"""Tests for sitemap, robots, llms.txt and JSON-LD builders."""
import asyncio
from datetime import datetime, timezone
from xml.etree import ElementTree

from pymongo.errors import ServerSelectionTimeoutError

from qaskills.content.blog_posts import BLOG_POSTS
from qaskills.services.seo_service import SITEMAP_NS, STATIC_PAGES, SeoService
from qaskills.utils import json_ld

BASE = "https://qaskills.sh"
NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)


def locs(xml: str) -> list[str]:
    root = ElementTree.fromstring(xml.split("\n", 1)[1])
    return [el.text for el in root.iter(f"{{{SITEMAP_NS}}}loc")]


class TestRobots:
    def test_rules_for_each_crawler(self, skill_repo, user_repo):
        robots = SeoService(BASE, skill_repo, user_repo).robots_txt()
        for agent in ("*", "GPTBot", "ClaudeBot", "PerplexityBot", "Amazonbot"):
            assert f"User-Agent: {agent}\nAllow: /\nDisallow: /dashboard/\nDisallow: /api/" in robots
        assert robots.rstrip().endswith("Sitemap: https://qaskills.sh/sitemap.xml")


class TestSitemap:
    def test_includes_skills_users_and_blog(self, skill_repo, user_repo):
        skill_repo._list_skill_refs.return_value = [
            {"slug": "playwright-e2e", "authorName": "thetestingacademy", "updatedAt": NOW},
        ]
        user_repo._list_user_refs.return_value = [{"username": "ada", "updatedAt": NOW}]

        xml = asyncio.run(SeoService(BASE, skill_repo, user_repo).sitemap_xml(NOW))
        urls = locs(xml)

        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert urls[0] == BASE
        assert f"{BASE}/skills/thetestingacademy/playwright-e2e" in urls
        assert f"{BASE}/users/ada" in urls
        assert f"{BASE}/blog/{BLOG_POSTS[0]['slug']}" in urls
        assert len(urls) == len(STATIC_PAGES) + 1 + 1 + len(BLOG_POSTS)

    def test_falls_back_without_database(self, skill_repo, user_repo):
        skill_repo._list_skill_refs.side_effect = ServerSelectionTimeoutError("no servers")
        entries = asyncio.run(SeoService(BASE, skill_repo, user_repo).sitemap_entries(NOW))
        assert len(entries) == len(STATIC_PAGES) + len(BLOG_POSTS)

    def test_falls_back_on_unusable_rows(self, skill_repo, user_repo):
        skill_repo._list_skill_refs.return_value = [{"authorName": "tta"}]
        user_repo._list_user_refs.return_value = [{"username": "ada", "updatedAt": NOW}]
        entries = asyncio.run(SeoService(BASE, skill_repo, user_repo).sitemap_entries(NOW))
        assert len(entries) == len(STATIC_PAGES) + len(BLOG_POSTS)
        assert f"{BASE}/users/ada" not in [e["url"] for e in entries]

    def test_priorities_are_formatted(self, skill_repo, user_repo):
        skill_repo._list_skill_refs.return_value = []
        user_repo._list_user_refs.return_value = []
        xml = asyncio.run(SeoService(BASE, skill_repo, user_repo).sitemap_xml(NOW))
        assert "<priority>1</priority>" in xml
        assert "<priority>0.85</priority>" in xml


class TestJsonLd:
    def test_skill_with_rating_and_version(self):
        data = json_ld.skill(BASE, "Jest & Friends", "Unit tests", "tta", "jest",
                             review_count=4, average_rating=4.3, version="1.2.0")
        assert data["@type"] == "SoftwareApplication"
        assert data["aggregateRating"]["ratingValue"] == "4.3"
        assert data["softwareVersion"] == "1.2.0"
        assert "title=Jest%20%26%20Friends" in data["image"]
        assert data["url"] == f"{BASE}/skills/tta/jest"

    def test_skill_without_reviews_has_no_rating(self):
        data = json_ld.skill(BASE, "Jest", "Unit tests", "tta", "jest", review_count=0, average_rating=5.0)
        assert "aggregateRating" not in data
        assert "softwareVersion" not in data

    def test_breadcrumb_positions(self):
        data = json_ld.breadcrumbs([("Home", BASE), ("Skills", f"{BASE}/skills")])
        assert [i["position"] for i in data["itemListElement"]] == [1, 2]

    def test_collection_page_without_items(self):
        assert "mainEntity" not in json_ld.collection_page("Skills", "All", f"{BASE}/skills")

    def test_blog_post_defaults_modified_date(self):
        data = json_ld.blog_post(BASE, "Title", "Desc", "2026-02-11", "post")
        assert data["dateModified"] == "2026-02-11"
        assert data["mainEntityOfPage"] == f"{BASE}/blog/post"
