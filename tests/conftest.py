"""Pytest configuration and fixtures."""

import pytest

from api.models import Article, Tag
from catalog.loader import normalize


def make_article(category="A", release_date="2024-01", tags=(), title="", summary="", body="", **extra) -> Article:
    return Article(
        category=category,
        release_date=release_date,
        tags=[Tag(type=t, value=v) for t, v in tags],
        title=title,
        summary=summary,
        body=body,
        **extra,
    )


@pytest.fixture
def articles() -> list[Article]:
    """A small normalized catalog spanning three categories."""
    return normalize([
        make_article("A", "2024-03", [("Tech", "LLM"), ("Status", "Released")],
                     title="Open model release", summary="Weights published", body="Long context"),
        make_article("B", "2024-01", [("Tech", "LLM"), ("Topic", "Evaluation")],
                     title="Reasoning benchmarks", summary="A survey", body="Arithmetic and MODEL reasoning"),
        make_article("A", "2024-02", [("Tech", "Diffusion")],
                     title="Image model", summary="Diffusion based", body="Art studios"),
        make_article("E", None, [("Domain", "Law")],
                     title="Regulation", summary="Obligations for providers", body=""),
    ])
