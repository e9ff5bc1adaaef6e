"""Sample categories and articles for a fresh store.

Idempotent: categories are created only when their slug is missing, and
sample articles only when the store has no articles at all.
"""

import logging

from newsdesk.application.interfaces import ContentRepository
from newsdesk.domain.entities import Article, ArticleFilter, PublishedFilter
from newsdesk.domain.text import derive_excerpt, estimate_read_time

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: list[tuple[str, str]] = [
    ("प्रौद्योगिकी", "technology"),
    ("वित्त", "finance"),
    ("व्यापार", "business"),
    ("राजनीति", "politics"),
    ("खेल", "sports"),
]

SAMPLE_ARTICLES: list[dict] = [
    {
        "title": "भारतीय प्रौद्योगिकी क्षेत्र में AI की क्रांति",
        "slug": "ai-revolution-indian-technology-sector",
        "category": "technology",
        "content": (
            "<p>कृत्रिम बुद्धिमत्ता (AI) भारतीय प्रौद्योगिकी क्षेत्र में एक नई क्रांति ला रही है। "
            "स्टार्टअप से लेकर बड़ी कंपनियों तक, सभी AI के माध्यम से अपने व्यापार को बदल रहे हैं।</p>"
            "<h2>मुख्य विकास</h2>"
            "<ul><li>स्वास्थ्य सेवा में निदान और उपचार</li><li>कृषि में फसल की निगरानी</li>"
            "<li>शिक्षा में व्यक्तिगत शिक्षण</li><li>वित्तीय सेवाओं में धोखाधड़ी की रोकथाम</li></ul>"
        ),
        "excerpt": (
            "कृत्रिम बुद्धिमत्ता भारतीय प्रौद्योगिकी क्षेत्र में क्रांतिकारी बदलाव ला रही है। "
            "जानें कैसे AI स्टार्टअप और बड़ी कंपनियों के व्यापार को बदल रहा है।"
        ),
        "author": "राहुल शर्मा",
        "tags": ["AI", "प्रौद्योगिकी", "भारत", "नवाचार"],
        "read_time": 5,
    },
    {
        "title": "डिजिटल पेमेंट्स में नया युग",
        "slug": "digital-payments-new-era",
        "category": "finance",
        "content": (
            "<p>भारत में डिजिटल पेमेंट्स ने एक नया आयाम प्राप्त किया है। "
            "UPI से लेकर डिजिटल वॉलेट तक, भुगतान के तरीके पूरी तरह से बदल गए हैं।</p>"
            "<h2>UPI की सफलता</h2>"
            "<p>यूनिफाइड पेमेंट्स इंटरफेस (UPI) ने भारत में डिजिटल भुगतान को लोकप्रिय बनाया है।</p>"
        ),
        "excerpt": (
            "भारत में डिजिटल भुगतान की दुनिया कैसे बदल रही है। "
            "UPI से CBDC तक - जानें नए युग की शुरुआत के बारे में।"
        ),
        "author": "प्रिया गुप्ता",
        "tags": ["UPI", "डिजिटल पेमेंट", "फिनटेक"],
        "read_time": 4,
    },
]


async def seed_sample_content(repository: ContentRepository) -> tuple[int, int]:
    """Create missing default categories and, on an empty store, the sample articles.

    Returns ``(categories_created, articles_created)``.
    """
    categories_created = 0
    for name, slug in DEFAULT_CATEGORIES:
        if await repository.get_category_by_slug(slug) is None:
            await repository.create_category(name, slug)
            categories_created += 1

    articles_created = 0
    existing = await repository.get_articles(ArticleFilter(published=PublishedFilter.ANY, limit=1))
    if not existing:
        for sample in SAMPLE_ARTICLES:
            category = await repository.get_category_by_slug(sample["category"])
            if category is None:
                continue
            await repository.create_article(
                Article(
                    title=sample["title"],
                    slug=sample["slug"],
                    content=sample["content"],
                    excerpt=sample.get("excerpt") or derive_excerpt(sample["content"]),
                    category_id=category.id,
                    author=sample["author"],
                    language="hi",
                    tags=sample["tags"],
                    read_time=sample.get("read_time") or estimate_read_time(sample["content"]),
                    published=True,
                )
            )
            articles_created += 1

    if categories_created or articles_created:
        logger.info(
            "Seeded %d categories and %d sample articles", categories_created, articles_created
        )
    else:
        logger.debug("Sample content already present")
    return categories_created, articles_created
