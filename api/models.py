from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator

class Tag(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = ""
    value: str = ""

    @field_validator("type", "value", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    @property
    def label(self) -> str:
        return f"[{self.type}] {self.value}"

class Article(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""  # assigned by catalog.loader.assign_ids, never read from source
    category: str | None = None
    category_name: str | None = Field(default=None, alias="categoryName")
    subcategory: str = ""
    subcategory_name: str = Field(default="", alias="subcategoryName")
    title: str = ""
    summary: str = ""
    body: str = ""
    tags: list[Tag] = []
    links: list[str] = []
    release_date: str | None = Field(default=None, alias="releaseDate")
    last_verified: str = Field(default="", alias="lastVerified")

    @field_validator("subcategory", "subcategory_name", "title", "summary", "body", "last_verified", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("tags", "links", mode="before")
    @classmethod
    def _none_as_empty_list(cls, value):
        return [] if value is None else value

    def has_tag(self, tag: Tag) -> bool:
        return any(t.type == tag.type and t.value == tag.value for t in self.tags)

class ArticleCollection(BaseModel):
    articles: list[Article]
    total: int = 0
    filtered: int = 0

class CategoryInfo(BaseModel):
    key: str
    name: str
    icon: str
    cls: str
    count: int = 0

class TagCount(BaseModel):
    type: str
    value: str
    count: int

class CatalogView(BaseModel):
    """Snapshot derived from the catalog and the view state after a transition"""
    mode: Literal["grid", "detail"]
    articles: list[Article] = []
    article: Article | None = None
    total: int
    filtered: int
    category_counts: dict[str, int]
    active_category: str
    active_tags: list[Tag]
    search_query: str
    show_clear: bool
