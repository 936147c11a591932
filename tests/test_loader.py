import json
import re

import pytest
import requests

from api.models import Article
from catalog import loader
from catalog.loader import assign_ids, load_catalog, normalize, parse_articles, sort_by_release_date
from conftest import make_article


def _write(tmp_path, data) -> str:
    path = tmp_path / "articles.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return str(path)


def test_sort_newest_first_and_undated_last():
    items = [
        make_article(title="old", release_date="2023-05"),
        make_article(title="none", release_date=None),
        make_article(title="new", release_date="2024-02"),
        make_article(title="empty", release_date=""),
        make_article(title="mid", release_date="2023-11"),
    ]

    ordered = [a.title for a in sort_by_release_date(items)]

    assert ordered == ["new", "mid", "old", "none", "empty"]


def test_sort_is_stable_for_equal_dates():
    items = [make_article(title=name, release_date="2024-01") for name in ("x", "y", "z")]

    assert [a.title for a in sort_by_release_date(items)] == ["x", "y", "z"]


def test_undated_articles_keep_source_order_after_dated_ones():
    items = [
        make_article(title="X", release_date=""),
        make_article(title="Y", release_date=""),
        make_article(title="dated", release_date="2020-01"),
    ]

    assert [a.title for a in sort_by_release_date(items)] == ["dated", "X", "Y"]


def test_assign_ids_numbers_per_category_in_order():
    items = [make_article("A"), make_article("B"), make_article("A"), make_article(None), make_article("")]

    ids = [a.id for a in assign_ids(items)]

    assert ids == ["A001", "B001", "A002", "X001", "X002"]


def test_unrecognised_category_uses_fallback_bucket():
    items = [make_article("Q"), make_article("A"), make_article("Q")]

    assert [a.id for a in assign_ids(items)] == ["X001", "A001", "X002"]


def test_ids_stay_unique_for_unknown_categories_sharing_a_prefix():
    items = [make_article("Q") for _ in range(1001)] + [make_article("Q1")]

    ids = [a.id for a in assign_ids(items)]

    assert len(set(ids)) == len(ids)
    assert ids[-1] == "X1002"


def test_ids_are_unique_and_well_formed(articles):
    ids = [a.id for a in articles]

    assert len(set(ids)) == len(ids)
    for article in articles:
        assert re.fullmatch(rf"{article.category}\d{{3}}", article.id)


def test_ids_encode_recency_rank(articles):
    by_title = {a.title: a.id for a in articles}

    assert by_title["Open model release"] == "A001"
    assert by_title["Image model"] == "A002"
    assert by_title["Reasoning benchmarks"] == "B001"
    assert by_title["Regulation"] == "E001"


def test_source_id_is_ignored(tmp_path):
    source = _write(tmp_path, [{"id": "custom", "category": "C", "title": "t"}])

    catalog = load_catalog(source)

    assert [a.id for a in catalog] == ["C001"]


def test_load_catalog_from_file(tmp_path):
    source = _write(tmp_path, [
        {
            "category": "A",
            "subcategory": "A-1",
            "subcategoryName": "言語モデル",
            "title": "first",
            "summary": "s",
            "body": "<p>b</p>",
            "tags": [{"type": "Tech", "value": "LLM"}],
            "links": ["https://example.org"],
            "releaseDate": "2024-01",
            "lastVerified": "2024-02-01",
        },
        {"category": "A", "title": "second", "releaseDate": "2024-05"},
    ])

    catalog = load_catalog(source)

    assert [(a.id, a.title) for a in catalog] == [("A001", "second"), ("A002", "first")]
    first = catalog[1]
    assert first.subcategory_name == "言語モデル"
    assert first.last_verified == "2024-02-01"
    assert first.links == ["https://example.org"]
    assert first.tags[0].type == "Tech"


def test_null_text_fields_become_empty(tmp_path):
    source = _write(tmp_path, [{"category": "B", "title": None, "tags": None, "links": None}])

    article = load_catalog(source)[0]

    assert article.title == ""
    assert article.tags == []
    assert article.links == []


def test_tag_without_type_is_tolerated(tmp_path):
    source = _write(tmp_path, [
        {"category": "A", "title": "typed", "tags": [{"type": "Tech", "value": "LLM"}]},
        {"category": "B", "title": "untyped", "tags": [{"value": "LLM"}, {"type": None, "value": "RAG"}]},
    ])

    catalog = load_catalog(source)

    assert [a.title for a in catalog] == ["typed", "untyped"]
    assert [(t.type, t.value) for t in catalog[1].tags] == [("", "LLM"), ("", "RAG")]


def test_missing_file_gives_empty_catalog(tmp_path):
    assert load_catalog(str(tmp_path / "missing.json")) == []


def test_invalid_json_gives_empty_catalog(tmp_path):
    path = tmp_path / "articles.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_catalog(str(path)) == []


def test_non_array_document_gives_empty_catalog(tmp_path):
    assert load_catalog(_write(tmp_path, {"articles": []})) == []


def test_invalid_article_gives_empty_catalog(tmp_path):
    assert load_catalog(_write(tmp_path, [{"category": "A", "tags": "LLM"}])) == []


def test_parse_articles_rejects_non_array():
    with pytest.raises(ValueError):
        parse_articles('{"category": "A"}')


class _FakeResponse:
    def __init__(self, text, status=200):
        self.text = text
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_load_catalog_over_http(monkeypatch):
    calls = []

    def fake_get(url, headers=None, timeout=None):
        calls.append((url, timeout))
        return _FakeResponse(json.dumps([{"category": "F", "title": "remote", "releaseDate": "2024"}]))

    monkeypatch.setattr(loader.requests, "get", fake_get)

    catalog = load_catalog("https://example.org/data/articles.json", timeout=3)

    assert [a.id for a in catalog] == ["F001"]
    assert calls == [("https://example.org/data/articles.json", 3)]


def test_http_error_gives_empty_catalog(monkeypatch):
    monkeypatch.setattr(loader.requests, "get", lambda *a, **kw: _FakeResponse("", status=500))

    assert load_catalog("https://example.org/articles.json") == []


def test_network_failure_gives_empty_catalog(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(loader.requests, "get", boom)

    assert load_catalog("http://example.org/articles.json") == []


def test_normalize_does_not_mutate_input():
    items = [make_article("A", "2023"), make_article("A", "2024")]

    normalize(items)

    assert [a.id for a in items] == ["", ""]
    assert isinstance(items[0], Article)
