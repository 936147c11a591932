"""Fixed category and tag-type enumerations with their display metadata"""
from api.models import CategoryInfo

ALL_CATEGORIES = "all"

# Articles without a category get IDs in this bucket
FALLBACK_BUCKET = "X"

CATEGORIES = {
    'A': {'name': '生成モデル・システム', 'icon': 'A', 'cls': 'cat-a'},
    'B': {'name': '研究・論文', 'icon': 'B', 'cls': 'cat-b'},
    'C': {'name': '出版・ドキュメント', 'icon': 'C', 'cls': 'cat-c'},
    'D': {'name': '表現・応用芸術', 'icon': 'D', 'cls': 'cat-d'},
    'E': {'name': '法規制・ガバナンス', 'icon': 'E', 'cls': 'cat-e'},
    'F': {'name': '社会実装・メディア', 'icon': 'F', 'cls': 'cat-f'},
}

FALLBACK_CATEGORY = {'name': '', 'icon': '?', 'cls': 'cat-x'}

TAG_TYPES = ('Org', 'Tech', 'Domain', 'Topic', 'Status')

TAG_CLASSES = {tag_type: f'tag-{tag_type.lower()}' for tag_type in TAG_TYPES}

FALLBACK_TAG_CLASS = 'tag-status'

def category_meta(key: str | None) -> dict:
    """Display metadata for a category key, falling back to a generic style"""
    return CATEGORIES.get(key or '', FALLBACK_CATEGORY)

def tag_class(tag_type: str) -> str:
    return TAG_CLASSES.get(tag_type, FALLBACK_TAG_CLASS)

def category_infos(counts: dict[str, int]) -> list[CategoryInfo]:
    return [
        CategoryInfo(key=key, count=counts.get(key, 0), **meta)
        for key, meta in CATEGORIES.items()
    ]
