import json
import logging
from pathlib import Path
from typing import Annotated

import requests
from pydantic import TypeAdapter, ValidationError

from api.models import Article
from .taxonomy import CATEGORIES, FALLBACK_BUCKET

logger = logging.getLogger(__name__)

_articles_adapter = TypeAdapter(list[Article])

def _is_url(source: str) -> bool:
    return source.startswith(('http://', 'https://'))

def fetch_document(source: str, timeout: float = 10) -> str:
    """Read the raw catalog document from a URL or a local path"""
    if _is_url(source):
        logger.info(f"Fetching catalog from: {source}")
        response = requests.get(source, headers={'Accept': 'application/json'}, timeout=timeout)
        response.raise_for_status()
        return response.text

    logger.info(f"Reading catalog from file: {source}")
    return Path(source).read_text(encoding='utf-8')

def parse_articles(document: str) -> list[Article]:
    """
    Parse a JSON array of article objects.

    Raises:
        ValueError: If the document is not valid JSON or not an array of articles
            (json.JSONDecodeError and pydantic.ValidationError are both ValueErrors)
    """
    data = json.loads(document)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of articles, got {type(data).__name__}")
    return _articles_adapter.validate_python(data)

def sort_by_release_date(articles: list[Article]) -> list[Article]:
    """Newest first; articles without a releaseDate sort after every dated one"""
    # sorted() stays stable with reverse=True, so equal dates keep source order
    return sorted(
        articles,
        key=lambda a: (bool(a.release_date), a.release_date or ''),
        reverse=True,
    )

def assign_ids(articles: list[Article]) -> list[Article]:
    """Number articles per category in list order: A001, A002, B001, ..."""
    counters = {}
    numbered = []
    for article in articles:
        bucket = article.category if article.category in CATEGORIES else FALLBACK_BUCKET
        counters[bucket] = counters.get(bucket, 0) + 1
        numbered.append(article.model_copy(update={'id': f"{bucket}{counters[bucket]:03d}"}))
    return numbered

def normalize(articles: list[Article]) -> list[Article]:
    return assign_ids(sort_by_release_date(articles))

def load_catalog(source: Annotated[str, "URL or path"], timeout: float = 10) -> list[Article]:
    """Fetch, parse and normalize the catalog; any failure yields an empty catalog"""
    try:
        document = fetch_document(source, timeout)
    except requests.RequestException as e:
        logger.error(f"Failed to fetch catalog from {source}: {e}")
        return []
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read catalog file {source}: {e}")
        return []

    try:
        articles = parse_articles(document)
    except ValidationError as e:
        logger.error(f"Catalog from {source} has invalid articles: {e.error_count()} validation errors")
        logger.debug(str(e))
        return []
    except ValueError as e:
        logger.error(f"Failed to parse catalog from {source}: {e}")
        return []

    articles = normalize(articles)
    logger.info(f"Loaded {len(articles)} articles from {source}")
    return articles
