from typing import Optional
from qaskills.base.exception import DataNotFoundError
from qaskills.repositories.skill_repository import SkillRepository
from qaskills.utils import json_ld

MAX_PAGE_SIZE = 100

class SkillService:
    def __init__(self, skills: SkillRepository, base_url: str):
        self.skills = skills
        self.base_url = base_url.rstrip("/")

    async def search(self, query: Optional[str] = None, limit: int = 20) -> dict:
        """Skills matching query in name or description, most installed first."""
        limit = max(1, min(limit, MAX_PAGE_SIZE))
        found = await self.skills._search_skills(query, limit)
        items = [(s.name, f"{self.base_url}/skills/{s.authorName}/{s.slug}") for s in found]
        return {
            "skills": [s.model_dump(mode="json") for s in found],
            "total": len(found),
            "jsonLd": json_ld.collection_page(
                "QA Testing Skills",
                "Curated QA testing skills for AI coding agents",
                f"{self.base_url}/skills",
                items,
            ),
        }

    async def get_detail(self, author: str, slug: str) -> dict:
        skill = await self.skills._get_skill(author, slug)
        if not skill:
            raise DataNotFoundError("Skill", f"{author}/{slug}")
        return {
            "skill": skill.model_dump(mode="json"),
            "jsonLd": [
                json_ld.skill(
                    self.base_url,
                    name=skill.name,
                    description=skill.description,
                    author=skill.authorName,
                    slug=skill.slug,
                    review_count=skill.reviewCount,
                    average_rating=skill.averageRating,
                    version=skill.version,
                ),
                json_ld.breadcrumbs([
                    ("Home", self.base_url),
                    ("Skills", f"{self.base_url}/skills"),
                    (skill.name, f"{self.base_url}/skills/{skill.authorName}/{skill.slug}"),
                ]),
            ],
        }


def new_skill_service(skills: SkillRepository, base_url: str) -> SkillService:
    return SkillService(skills, base_url)
