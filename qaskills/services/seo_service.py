import logging
from datetime import date, datetime, timezone
from typing import Optional
from xml.etree import ElementTree
from qaskills.content.blog_posts import BLOG_POSTS
from qaskills.repositories.skill_repository import SkillRepository
from qaskills.repositories.user_repository import UserRepository
from qaskills.utils import json_ld

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

# (path, change frequency, priority)
STATIC_PAGES = [
    ("", "daily", 1.0),
    ("/skills", "daily", 0.9),
    ("/getting-started", "monthly", 0.85),
    ("/leaderboard", "daily", 0.8),
    ("/packs", "weekly", 0.7),
    ("/pricing", "monthly", 0.7),
    ("/how-to-publish", "monthly", 0.65),
    ("/blog", "weekly", 0.6),
    ("/faq", "monthly", 0.6),
    ("/about", "monthly", 0.5),
    ("/contact", "monthly", 0.5),
    ("/terms", "monthly", 0.3),
    ("/privacy", "monthly", 0.3),
    ("/refund-policy", "monthly", 0.3),
    ("/llms.txt", "monthly", 0.2),
    ("/agents", "weekly", 0.9),
    ("/categories", "weekly", 0.9),
    ("/compare", "monthly", 0.8),
    ("/agents/claude-code", "weekly", 0.85),
    ("/agents/cursor", "weekly", 0.85),
    ("/agents/copilot", "weekly", 0.85),
    ("/agents/windsurf", "weekly", 0.85),
    ("/agents/cline", "weekly", 0.85),
    ("/categories/e2e-testing", "weekly", 0.8),
    ("/categories/unit-testing", "weekly", 0.8),
    ("/categories/api-testing", "weekly", 0.8),
    ("/categories/performance-testing", "weekly", 0.8),
    ("/categories/accessibility-testing", "weekly", 0.8),
    ("/compare/qaskills-vs-skillsmp", "monthly", 0.75),
    ("/compare/playwright-vs-cypress-skills", "monthly", 0.75),
]

CRAWLERS = ["*", "GPTBot", "ClaudeBot", "PerplexityBot", "Amazonbot"]
DISALLOWED = ["/dashboard/", "/api/"]

LLMS_TXT = """# QASkills.sh

> The curated QA skills directory for AI coding agents

## About
QASkills.sh is a free, open-source directory of QA testing skills for AI coding agents. It provides curated, quality-scored skills that can be installed into Claude Code, Cursor, GitHub Copilot, Windsurf, and 30+ other AI coding agents with a single command.

## Key Features
- Curated QA testing skills with quality scores (0-100)
- One-command installation via CLI: npx qaskills add <skill-name>
- Supports 30+ AI coding agents
- Free and open source
- Skill Packs for bundled installations
- Community publishing support

## Content Structure
- /skills - Browse all QA skills with search and filtering
- /skills/[author]/[slug] - Individual skill detail pages
- /packs - Curated skill bundles
- /leaderboard - Top skills by installs, quality, and trending
- /blog - QA testing articles and guides
- /getting-started - Installation guide
- /how-to-publish - Skill publishing guide
- /pricing - Free and open source
- /faq - Frequently asked questions

## API
- GET /api/skills - Search and list skills (public, JSON)
- GET /api/skills/[author]/[slug] - Skill details (public, JSON)
- GET /api/leaderboard - Leaderboard data (public, JSON)

## Contact
- Website: {base_url}
- GitHub: https://github.com/PramodDutta/qaskills
- YouTube: https://youtube.com/@TheTestingAcademy

## Documentation
- Getting Started: {base_url}/getting-started
- How to Publish: {base_url}/how-to-publish
- FAQ: {base_url}/faq
"""

class SeoService:
    def __init__(self, base_url: str, skills: SkillRepository, users: UserRepository):
        self.base_url = base_url.rstrip("/")
        self.skills = skills
        self.users = users

    def robots_txt(self) -> str:
        blocks = []
        for agent in CRAWLERS:
            lines = [f"User-Agent: {agent}", "Allow: /"]
            lines += [f"Disallow: {path}" for path in DISALLOWED]
            blocks.append("\n".join(lines))
        blocks.append(f"Sitemap: {self.base_url}/sitemap.xml")
        return "\n\n".join(blocks) + "\n"

    def llms_txt(self) -> str:
        return LLMS_TXT.format(base_url=self.base_url)

    def static_entries(self, now: Optional[datetime] = None) -> list[dict]:
        now = now or datetime.now(timezone.utc)
        return [
            {"url": f"{self.base_url}{path}", "lastModified": now, "changeFrequency": freq, "priority": priority}
            for path, freq, priority in STATIC_PAGES
        ]

    def blog_entries(self) -> list[dict]:
        return [
            {
                "url": f"{self.base_url}/blog/{post['slug']}",
                "lastModified": date.fromisoformat(post["date"]),
                "changeFrequency": "monthly",
                "priority": 0.6,
            }
            for post in BLOG_POSTS
        ]

    async def sitemap_entries(self, now: Optional[datetime] = None) -> list[dict]:
        """All sitemap entries. Falls back to static and blog pages if skill or user pages cannot be built."""
        static = self.static_entries(now)
        try:
            dynamic = await self._dynamic_entries()
        except Exception:
            logger.exception("Sitemap falling back to static pages")
            dynamic = []
        return static + dynamic + self.blog_entries()

    async def _dynamic_entries(self) -> list[dict]:
        skill_refs = await self.skills._list_skill_refs()
        user_refs = await self.users._list_user_refs()
        skill_pages = [
            {
                "url": f"{self.base_url}/skills/{ref['authorName']}/{ref['slug']}",
                "lastModified": ref.get("updatedAt"),
                "changeFrequency": "weekly",
                "priority": 0.8,
            }
            for ref in skill_refs
        ]
        user_pages = [
            {
                "url": f"{self.base_url}/users/{ref['username']}",
                "lastModified": ref.get("updatedAt"),
                "changeFrequency": "weekly",
                "priority": 0.6,
            }
            for ref in user_refs
        ]
        return skill_pages + user_pages

    async def sitemap_xml(self, now: Optional[datetime] = None) -> str:
        ElementTree.register_namespace("", SITEMAP_NS)
        urlset = ElementTree.Element(f"{{{SITEMAP_NS}}}urlset")
        for entry in await self.sitemap_entries(now):
            url = ElementTree.SubElement(urlset, f"{{{SITEMAP_NS}}}url")
            ElementTree.SubElement(url, f"{{{SITEMAP_NS}}}loc").text = entry["url"]
            if entry["lastModified"] is not None:
                ElementTree.SubElement(url, f"{{{SITEMAP_NS}}}lastmod").text = entry["lastModified"].isoformat()
            ElementTree.SubElement(url, f"{{{SITEMAP_NS}}}changefreq").text = entry["changeFrequency"]
            ElementTree.SubElement(url, f"{{{SITEMAP_NS}}}priority").text = f"{entry['priority']:.2f}".rstrip("0").rstrip(".")
        body = ElementTree.tostring(urlset, encoding="unicode")
        return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'

    def site_json_ld(self) -> list[dict]:
        return [json_ld.website(self.base_url), json_ld.organization(self.base_url)]

    def blog_index(self) -> list[dict]:
        return [
            {
                **post,
                "url": f"{self.base_url}/blog/{post['slug']}",
                "jsonLd": json_ld.blog_post(
                    self.base_url, post["title"], post["description"], post["date"], post["slug"],
                ),
            }
            for post in sorted(BLOG_POSTS, key=lambda p: p["date"], reverse=True)
        ]


def new_seo_service(base_url: str, skills: SkillRepository, users: UserRepository) -> SeoService:
    return SeoService(base_url, skills, users)
