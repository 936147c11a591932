from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from api.models import Article, Tag, TagCount
from .taxonomy import ALL_CATEGORIES, CATEGORIES

@dataclass(frozen=True)
class FilterCriteria:
    """The filtering half of the view state"""
    category: str = ALL_CATEGORIES
    tags: tuple[Tag, ...] = field(default_factory=tuple)
    query: str = ""

def matches_category(article: Article, category: str) -> bool:
    return category == ALL_CATEGORIES or article.category == category

def matches_tags(article: Article, tags: Iterable[Tag]) -> bool:
    """Every active tag must be present on the article (AND, not OR)"""
    return all(article.has_tag(tag) for tag in tags)

def matches_search(article: Article, query: str) -> bool:
    if not query:
        return True
    haystack = f"{article.title} {article.summary} {article.body}".lower()
    return query.lower() in haystack

def filter_articles(articles: list[Article], criteria: FilterCriteria) -> list[Article]:
    """Articles passing every filter, in catalog order"""
    return [
        a for a in articles
        if matches_category(a, criteria.category)
        and matches_tags(a, criteria.tags)
        and matches_search(a, criteria.query)
    ]

def count_by_category(articles: list[Article]) -> dict[str, int]:
    """Per-category totals for the known categories; others are not counted"""
    counts = {key: 0 for key in CATEGORIES}
    for article in articles:
        if article.category in counts:
            counts[article.category] += 1
    return counts

def count_tags(articles: list[Article]) -> list[TagCount]:
    """Count of articles per tag, sorted by count descending"""
    counts = Counter()
    for article in articles:
        # an article lists a duplicated tag once for counting purposes
        for tag in dict.fromkeys(article.tags):
            counts[(tag.type, tag.value)] += 1
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [TagCount(type=t, value=v, count=n) for (t, v), n in ordered]
