# tests/test_filters.py
from folio.app.models.post import Post
from folio.app.utils import filters


def make_post(title, category="General", tags=(), featured=False, content="", description=""):
    return Post(
        title=title,
        category=category,
        tags=list(tags),
        is_featured=featured,
        content=content,
        description=description,
        excerpt="",
    )


POSTS = [
    make_post("FastAPI tips", "Python", ["fastapi", "Web"], featured=True),
    make_post("Async SQLAlchemy", "Python", ["sql"], content="Using AsyncSession"),
    make_post("CSS grids", "Design", ["css"], featured=True),
    make_post("Color theory", "design", ["Design"], description="Picking palettes"),
    make_post("Old news", "General", [], featured=True),
]


def test_category_is_case_insensitive():
    titles = [p.title for p in filters.filter_posts(POSTS, category="DESIGN")]
    assert titles == ["CSS grids", "Color theory"]


def test_tag_is_case_insensitive():
    titles = [p.title for p in filters.filter_posts(POSTS, tag="web")]
    assert titles == ["FastAPI tips"]


def test_search_covers_text_fields_and_tags():
    assert [p.title for p in filters.filter_posts(POSTS, search="asyncsession")] == ["Async SQLAlchemy"]
    assert [p.title for p in filters.filter_posts(POSTS, search="PALETTE")] == ["Color theory"]
    assert [p.title for p in filters.filter_posts(POSTS, search="css")] == ["CSS grids"]


def test_filters_combine():
    result = filters.filter_posts(POSTS, category="python", search="tips")
    assert [p.title for p in result] == ["FastAPI tips"]


def test_no_filters_keeps_everything():
    assert filters.filter_posts(POSTS) == POSTS


def test_paginate_and_total_pages():
    assert filters.paginate(POSTS, 1, 2) == POSTS[:2]
    assert filters.paginate(POSTS, 3, 2) == POSTS[4:]
    assert filters.paginate(POSTS, 4, 2) == []
    assert filters.total_pages(5, 2) == 3
    assert filters.total_pages(0, 10) == 0


def test_featured_is_capped_at_three():
    featured = filters.featured(POSTS + [make_post("Extra", featured=True)])
    assert [p.title for p in featured] == ["FastAPI tips", "CSS grids", "Old news"]


def test_facets_are_distinct_in_order():
    assert filters.categories(POSTS) == ["Python", "Design", "design", "General"]
    assert filters.tag_facets(POSTS) == ["fastapi", "Web", "sql", "css", "Design"]


def test_tag_facets_capped():
    many = [make_post(f"p{i}", tags=[f"t{i}"]) for i in range(30)]
    assert len(filters.tag_facets(many)) == 20
