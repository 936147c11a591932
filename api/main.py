import logging
from contextlib import asynccontextmanager
from typing import List, Optional
from fastapi import Depends, FastAPI, Form, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, RedirectResponse

from catalog import render
from catalog.filters import FilterCriteria, count_tags, filter_articles
from catalog.loader import load_catalog
from catalog.state import CatalogController
from catalog.taxonomy import ALL_CATEGORIES, category_infos
from config import Config
from .models import Article, ArticleCollection, CatalogView, CategoryInfo, Tag, TagCount

logger = logging.getLogger(__name__)

def create_app(config: Optional[Config] = None, articles: Optional[List[Article]] = None) -> FastAPI:
    """Build the viewer app; the catalog is loaded once before the first request is served"""
    config = config or Config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        catalog = articles if articles is not None else load_catalog(config.catalog_source, config.catalog_timeout)
        app.state.controller = CatalogController(catalog)
        logger.info(f"Catalog ready with {len(catalog)} articles")
        yield

    app = FastAPI(
        title="Catalog Viewer",
        description="Browse, filter and search a static article catalog",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # The JSON API is read-only
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    _register_routes(app)
    return app

def get_controller(request: Request) -> CatalogController:
    return request.app.state.controller

def _back_to_index() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)

def parse_tag(raw: str) -> Tag:
    """Parse a 'Type:Value' query parameter"""
    tag_type, sep, value = raw.partition(":")
    if not sep or not tag_type:
        raise HTTPException(status_code=400, detail=f"Invalid tag '{raw}', expected Type:Value")
    return Tag(type=tag_type, value=value)

def _register_routes(app: FastAPI) -> None:
    # Interactive routes are async so each transition runs to completion on the event loop
    # and two transitions never interleave.

    @app.get("/", response_class=HTMLResponse)
    async def index(controller: CatalogController = Depends(get_controller)):
        """Current view rendered as HTML"""
        return render.page(controller.view())

    @app.post("/category/{category}")
    async def select_category(category: str, controller: CatalogController = Depends(get_controller)):
        controller.select_category(category)
        return _back_to_index()

    @app.post("/search")
    async def search(q: str = Form(default="", description="Free-text query"),
                     controller: CatalogController = Depends(get_controller)):
        controller.set_search_query(q)
        return _back_to_index()

    @app.post("/search/clear")
    async def clear_search(controller: CatalogController = Depends(get_controller)):
        controller.clear_search()
        return _back_to_index()

    @app.post("/tags/toggle")
    async def toggle_tag(tag_type: str = Query(..., alias="type", description="Tag type, e.g. Tech"),
                         value: str = Query(..., description="Tag value"),
                         controller: CatalogController = Depends(get_controller)):
        controller.toggle_tag(tag_type, value)
        return _back_to_index()

    @app.post("/articles/{article_id}/open")
    async def open_detail(article_id: str, controller: CatalogController = Depends(get_controller)):
        controller.open_detail(article_id)
        return _back_to_index()

    @app.post("/back")
    async def close_detail(controller: CatalogController = Depends(get_controller)):
        controller.close_detail()
        return _back_to_index()

    @app.get("/api/state", response_model=CatalogView)
    async def current_state(controller: CatalogController = Depends(get_controller)):
        """Current derived view as JSON"""
        return controller.view()

    @app.get("/api/articles", response_model=ArticleCollection)
    def get_articles(
        category: str = Query(default=ALL_CATEGORIES, description="Category key or 'all'"),
        tag: List[str] = Query(default=[], description="Tag filter as Type:Value, repeatable"),
        q: str = Query(default="", description="Free-text query"),
        controller: CatalogController = Depends(get_controller),
    ):
        """Filter the catalog without touching the interactive view state"""
        criteria = FilterCriteria(
            category=category,
            tags=tuple(parse_tag(t) for t in tag),
            query=q.strip(),
        )
        items = filter_articles(controller.articles, criteria)
        return ArticleCollection(articles=items, total=controller.total, filtered=len(items))

    @app.get("/api/articles/{article_id}", response_model=Article)
    def get_article(article_id: str, controller: CatalogController = Depends(get_controller)):
        article = controller.get(article_id)
        if article is None:
            raise HTTPException(status_code=404, detail=f"Article {article_id} not found")
        return article

    @app.get("/api/categories", response_model=List[CategoryInfo])
    def get_categories(controller: CatalogController = Depends(get_controller)):
        """Fixed categories with article counts from the unfiltered catalog"""
        return category_infos(controller.category_counts)

    @app.get("/api/tags", response_model=List[TagCount])
    def get_tags(controller: CatalogController = Depends(get_controller)):
        """Get all tags with article counts, sorted by count descending"""
        return count_tags(controller.articles)

    @app.get("/health")
    def health_check(controller: CatalogController = Depends(get_controller)):
        return {"status": "healthy", "article_count": controller.total}

app = create_app(Config.load())
