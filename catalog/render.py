"""HTML rendering for the catalog viewer.

Pages are assembled from small string builders. Every field is escaped
except an article's summary and body, which may carry simple markup and
are passed through as-is.
"""
from html import escape
from urllib.parse import quote, urlencode

from api.models import Article, CatalogView, Tag
from .taxonomy import ALL_CATEGORIES, CATEGORIES, category_meta, tag_class

NO_TAGS_TEXT = "タグ未選択"
EMPTY_TEXT = "条件に一致する記事がありません"

STYLE = """
body { font-family: sans-serif; margin: 0; background: #f6f7f9; color: #222; }
header { display: flex; justify-content: space-between; padding: 1rem 2rem; background: #1f2a44; color: #fff; }
.layout { display: flex; }
.sidebar { width: 280px; padding: 1rem; background: #fff; border-right: 1px solid #ddd; }
main { flex: 1; padding: 1rem 2rem; }
form.inline { display: inline; }
.category-item { display: block; width: 100%; text-align: left; margin: 2px 0; }
.category-item.active { font-weight: bold; }
.card-grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(300px, 1fr)); gap: 1rem; }
.article-card { background: #fff; border: 1px solid #ddd; border-radius: 6px; padding: 1rem; }
.tag.active { outline: 2px solid #1f2a44; }
.hidden { display: none; }
"""

def _attr(value) -> str:
    return escape(str(value), quote=True)

def _post_button(action: str, label: str, cls: str, **params) -> str:
    if params:
        action = f"{action}?{urlencode(params)}"
    return (
        f'<form class="inline" method="post" action="{_attr(action)}">'
        f'<button type="submit" class="{_attr(cls)}">{label}</button></form>'
    )

def tag_button(tag: Tag, active: bool = False) -> str:
    cls = f"tag {tag_class(tag.type)}" + (" active" if active else "")
    return _post_button("/tags/toggle", escape(tag.label), cls, type=tag.type, value=tag.value)

def category_tree(view: CatalogView) -> str:
    items = []
    entries = [(ALL_CATEGORIES, "すべて", "*", view.total)]
    entries += [(key, meta['name'], meta['icon'], view.category_counts.get(key, 0)) for key, meta in CATEGORIES.items()]
    for key, name, icon, count in entries:
        cls = "category-item" + (" active" if key == view.active_category else "")
        label = (
            f'<span class="category-icon">{escape(icon)}</span> '
            f'<span class="category-name">{escape(name)}</span> '
            f'<span class="category-count" id="count{escape(key.capitalize())}">{count}</span>'
        )
        items.append(_post_button(f"/category/{quote(key, safe='')}", label, cls))
    return f'<nav class="category-tree" id="categoryTree">{"".join(items)}</nav>'

def search_box(view: CatalogView) -> str:
    clear_cls = "search-clear" + (" visible" if view.show_clear else " hidden")
    return (
        '<div class="search">'
        '<form method="post" action="/search">'
        f'<input id="searchInput" type="search" name="q" value="{_attr(view.search_query)}" placeholder="検索">'
        '</form>'
        f'{_post_button("/search/clear", "✕", clear_cls)}'
        '</div>'
    )

def active_tags_strip(view: CatalogView) -> str:
    if not view.active_tags:
        inner = f'<p class="no-tags">{NO_TAGS_TEXT}</p>'
    else:
        inner = "".join(
            _post_button(
                "/tags/toggle",
                f'{escape(t.label)} <span class="remove-tag">✕</span>',
                f"active-tag {tag_class(t.type)}",
                type=t.type,
                value=t.value,
            )
            for t in view.active_tags
        )
    return f'<div class="active-tags" id="activeTags">{inner}</div>'

def card(article: Article, active_tags: list[Tag]) -> str:
    cat = category_meta(article.category)
    tags = "".join(tag_button(t, t in active_tags) for t in article.tags)
    title = _post_button(f"/articles/{quote(article.id, safe='')}/open", escape(article.title), "card-title")
    return f"""
      <div class="article-card" data-id="{_attr(article.id)}">
        <div class="card-header">
          <div class="card-category {_attr(cat['cls'])}">{escape(cat['icon'])}</div>
          <h3>{title}</h3>
        </div>
        <div class="card-meta">
          <span class="card-subcategory">{escape(article.subcategory)} {escape(article.subcategory_name)}</span>
          <span class="card-date">{escape(article.last_verified)}</span>
        </div>
        <p class="card-summary">{article.summary}</p>
        <div class="card-tags">{tags}</div>
      </div>"""

def grid(view: CatalogView) -> str:
    if not view.articles:
        return f'<div class="empty-state" id="emptyState"><p>{EMPTY_TEXT}</p></div>'
    cards = "".join(card(a, view.active_tags) for a in view.articles)
    return f'<div class="card-grid" id="cardGrid">{cards}</div>'

def detail(article: Article) -> str:
    cat = category_meta(article.category)
    category_name = article.category_name or cat['name']
    links = "".join(
        f'<a class="detail-link" href="{_attr(link)}" target="_blank" rel="noopener">🔗 {escape(link)}</a>'
        for link in article.links
    )
    tags = "".join(tag_button(t) for t in article.tags)
    return f"""
      <div class="article-detail" id="articleDetail">
        {_post_button("/back", "← 一覧に戻る", "back-btn")}
        <div class="detail-header">
          <div class="detail-category-badge {_attr(cat['cls'])}">{escape(cat['icon'])} {escape(category_name)}</div>
          <h2 class="detail-title">{escape(article.title)}</h2>
          <div class="detail-summary">{article.summary}</div>
        </div>
        <div class="detail-body">{article.body}</div>
        <div class="detail-footer">
          <p class="detail-section-title">リンク</p>
          <div class="detail-links">{links}</div>
          <p class="detail-section-title">タグ</p>
          <div class="detail-tags">{tags}</div>
          <p class="detail-section-title">最終確認日</p>
          <p class="detail-date">{escape(article.last_verified)}</p>
        </div>
      </div>"""

def page(view: CatalogView, title: str = "AI Database Viewer") -> str:
    """Full HTML document for the current view"""
    content = detail(view.article) if view.mode == "detail" and view.article else grid(view)
    return f"""<!DOCTYPE html>
<html lang="ja">
<head>
  <meta charset="utf-8">
  <title>{escape(title)}</title>
  <style>{STYLE}</style>
</head>
<body>
  <header>
    <h1>{escape(title)}</h1>
    <div class="stats">
      <span>全 <strong id="statTotal">{view.total}</strong> 件</span>
      <span>表示 <strong id="statFiltered">{view.filtered}</strong> 件</span>
    </div>
  </header>
  <div class="layout">
    <aside class="sidebar" id="sidebar">
      {search_box(view)}
      {category_tree(view)}
      {active_tags_strip(view)}
    </aside>
    <main>{content}</main>
  </div>
</body>
</html>"""
