"""View state and the controller that owns it.

Every user interaction maps to one named transition on CatalogController.
Each transition mutates the ViewState and returns a freshly derived
CatalogView, so callers always render from the result rather than from
the state object itself.
"""
import logging
from dataclasses import dataclass, field
from typing import Literal

from api.models import Article, CatalogView, Tag
from .filters import FilterCriteria, count_by_category, filter_articles
from .taxonomy import ALL_CATEGORIES

logger = logging.getLogger(__name__)

GRID = "grid"
DETAIL = "detail"

@dataclass
class ViewState:
    active_category: str = ALL_CATEGORIES
    active_tags: list[Tag] = field(default_factory=list)
    search_query: str = ""
    current_view: Literal["grid", "detail"] = GRID
    detail_id: str | None = None

    @property
    def criteria(self) -> FilterCriteria:
        return FilterCriteria(
            category=self.active_category,
            tags=tuple(self.active_tags),
            query=self.search_query,
        )

class CatalogController:
    def __init__(self, articles: list[Article]):
        self._articles = list(articles)
        self._by_id = {a.id: a for a in self._articles}
        self.state = ViewState()
        # totals come from the unfiltered catalog and never change after load
        self.total = len(self._articles)
        self.category_counts = count_by_category(self._articles)

    @property
    def articles(self) -> list[Article]:
        return list(self._articles)

    def get(self, article_id: str) -> Article | None:
        return self._by_id.get(article_id)

    def view(self) -> CatalogView:
        """Derive the current view from the catalog and the view state"""
        state = self.state
        items = filter_articles(self._articles, state.criteria)
        detail = self._by_id.get(state.detail_id) if state.current_view == DETAIL else None
        return CatalogView(
            mode=DETAIL if detail else GRID,
            articles=items,
            article=detail,
            total=self.total,
            filtered=len(items),
            category_counts=dict(self.category_counts),
            active_category=state.active_category,
            active_tags=list(state.active_tags),
            search_query=state.search_query,
            show_clear=bool(state.search_query),
        )

    def _show_grid(self) -> None:
        self.state.current_view = GRID
        self.state.detail_id = None

    def select_category(self, category: str) -> CatalogView:
        logger.debug(f"Selecting category {category}")
        self.state.active_category = category
        self._show_grid()
        return self.view()

    def set_search_query(self, text: str) -> CatalogView:
        self.state.search_query = (text or "").strip()
        logger.debug(f"Search query set to '{self.state.search_query}'")
        self._show_grid()
        return self.view()

    def clear_search(self) -> CatalogView:
        return self.set_search_query("")

    def toggle_tag(self, tag_type: str, value: str) -> CatalogView:
        """Add the tag to the active set, or remove it if already there; always lands on the grid"""
        tag = Tag(type=tag_type, value=value)
        tags = self.state.active_tags
        if tag in tags:
            tags.remove(tag)
            logger.debug(f"Removed tag {tag.label}")
        else:
            tags.append(tag)
            logger.debug(f"Added tag {tag.label}")
        self._show_grid()
        return self.view()

    def open_detail(self, article_id: str) -> CatalogView:
        if article_id not in self._by_id:
            logger.debug(f"Ignoring detail request for unknown article {article_id}")
            return self.view()
        self.state.current_view = DETAIL
        self.state.detail_id = article_id
        return self.view()

    def close_detail(self) -> CatalogView:
        self._show_grid()
        return self.view()
