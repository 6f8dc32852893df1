#!/usr/bin/env python3
"""Seed the default categories and tags.

Each entry is upserted by slug, so running the script again renames
entries in place instead of duplicating them.
"""

import asyncio
import sys

import logfire

from quill.config import Settings
from quill.domain.service import TaxonomyService
from quill.persistence.database import create_engine, create_session_factory
from quill.persistence.repository import (
    PostgresCategoryRepository,
    PostgresTagRepository,
)
from quill.util.observability import configure_logfire

DEFAULT_CATEGORIES = [
    # Technology & Programming
    ("Web Development", "web-development"),
    ("Mobile Development", "mobile-development"),
    ("Artificial Intelligence", "artificial-intelligence"),
    ("Cybersecurity", "cybersecurity"),
    ("Cloud Computing", "cloud-computing"),
    ("Blockchain", "blockchain"),
    # Business & Finance
    ("Startups", "startups"),
    ("Entrepreneurship", "entrepreneurship"),
    ("Digital Marketing", "digital-marketing"),
    ("Finance & Investing", "finance-investing"),
    # Lifestyle & Personal Development
    ("Productivity", "productivity"),
    ("Mental Health", "mental-health"),
    ("Career Development", "career-development"),
    ("Travel", "travel"),
    # Education & Learning
    ("Programming Tutorials", "programming-tutorials"),
    ("Online Learning", "online-learning"),
    ("Language Learning", "language-learning"),
    # Design & Creativity
    ("UI/UX Design", "ui-ux-design"),
    ("Graphic Design", "graphic-design"),
    ("Photography", "photography"),
    ("Opinion", "opinion"),
    # Science & Research
    ("Data Science", "data-science"),
    ("Machine Learning", "machine-learning"),
    ("Scientific Research", "scientific-research"),
]

DEFAULT_TAGS = [
    # Programming Languages
    ("JavaScript", "javascript"),
    ("TypeScript", "typescript"),
    ("Python", "python"),
    ("Java", "java"),
    ("C#", "csharp"),
    ("PHP", "php"),
    ("Ruby", "ruby"),
    ("Go", "go"),
    ("Rust", "rust"),
    ("Swift", "swift"),
    ("Kotlin", "kotlin"),
    # Web Technologies
    ("React", "react"),
    ("Vue", "vue"),
    ("Angular", "angular"),
    ("Node.js", "nodejs"),
    ("Django", "django"),
    ("Flask", "flask"),
    ("GraphQL", "graphql"),
    ("REST API", "rest-api"),
    # Mobile Development
    ("React Native", "react-native"),
    ("Flutter", "flutter"),
    ("iOS", "ios"),
    ("Android", "android"),
    # AI & Data Science
    ("Machine Learning", "machine-learning"),
    ("Deep Learning", "deep-learning"),
    ("Data Science", "data-science"),
    ("Computer Vision", "computer-vision"),
    ("NLP", "nlp"),
    # Design & UX
    ("UI Design", "ui-design"),
    ("UX Design", "ux-design"),
    ("Figma", "figma"),
    # Career & Productivity
    ("Career Advice", "career-advice"),
    ("Remote Work", "remote-work"),
    ("Freelancing", "freelancing"),
    ("Productivity", "productivity"),
    # Technology Trends
    ("Web3", "web3"),
    ("AR/VR", "ar-vr"),
    ("IoT", "iot"),
    ("DevOps", "devops"),
    ("Cloud", "cloud"),
    ("Cybersecurity", "cybersecurity"),
    ("Blockchain", "blockchain"),
    # Learning & Education
    ("Tutorial", "tutorial"),
    ("Beginners", "beginners"),
    ("Resources", "resources"),
    ("Tips & Tricks", "tips-tricks"),
]


async def seed(settings: Settings) -> None:
    engine = create_engine(settings)
    session_factory = create_session_factory(engine)
    try:
        async with session_factory() as session:
            taxonomy_service = TaxonomyService(
                category_repository=PostgresCategoryRepository(session),
                tag_repository=PostgresTagRepository(session),
            )
            with logfire.span("seed_taxonomy.categories"):
                for name, slug in DEFAULT_CATEGORIES:
                    await taxonomy_service.upsert_category(name, slug)
            with logfire.span("seed_taxonomy.tags"):
                for name, slug in DEFAULT_TAGS:
                    await taxonomy_service.upsert_tag(name, slug)
            await session.commit()
    finally:
        await engine.dispose()

    logfire.info(
        "Taxonomy seeded",
        categories=len(DEFAULT_CATEGORIES),
        tags=len(DEFAULT_TAGS),
    )


def main() -> int:
    """Seed taxonomy and log any errors to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    try:
        asyncio.run(seed(settings))
        return 0
    except Exception as e:
        logfire.error(
            "Taxonomy seeding failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
