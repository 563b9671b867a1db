"""Admin reorder pages: registration and HTML rendering.

Each post type that can be reordered gets one :class:`ReorderPage`. Pages are
registered in an :class:`AdminMenu`, which the admin routes use to resolve a
slug to a page and to list what the current user may open.
"""

import logging
from dataclasses import dataclass, field
from html import escape

from reorder.models.post import Post, PostStatus
from reorder.schemas.post import SortDirection

logger = logging.getLogger(__name__)

EDIT_CAPABILITY = "edit_posts"

JQUERY_URL = "https://code.jquery.com/jquery-3.7.1.min.js"
JQUERY_UI_URL = "https://code.jquery.com/ui/1.13.2/jquery-ui.min.js"
NESTED_SORTABLE_URL = "https://cdnjs.cloudflare.com/ajax/libs/nestedSortable/2.0.0/jquery.mjs.nestedSortable.min.js"


@dataclass
class ReorderPage:
    """Options for the reorder page of one post type."""

    post_type: str = "post"
    order: SortDirection = SortDirection.ASC
    heading: str = "Reorder"
    initial: str = ""
    final: str = ""
    post_status: PostStatus = PostStatus.PUBLISH
    menu_label: str = "Reorder"
    icon: str = ""

    def __post_init__(self):
        self.order = SortDirection(self.order)
        self.post_status = PostStatus(self.post_status)

    @property
    def slug(self) -> str:
        if self.post_type == "post":
            return "reorder-posts"
        return f"reorder-{self.post_type}"

    @property
    def parent_slug(self) -> str:
        if self.post_type == "post":
            return "edit.php"
        return f"edit.php?post_type={self.post_type}"


@dataclass
class MenuEntry:
    """A registered admin submenu item."""

    parent_slug: str
    page_title: str
    menu_title: str
    capability: str
    slug: str
    page: ReorderPage


@dataclass
class AdminMenu:
    """Registry of admin pages, keyed by slug."""

    entries: dict[str, MenuEntry] = field(default_factory=dict)

    def register(self, page: ReorderPage) -> MenuEntry:
        """Add a reorder page as a submenu of its post type."""
        if page.slug in self.entries:
            raise ValueError(f"Admin page {page.slug} is already registered")

        entry = MenuEntry(
            parent_slug=page.parent_slug,
            page_title=page.heading,
            menu_title=page.menu_label,
            capability=EDIT_CAPABILITY,
            slug=page.slug,
            page=page,
        )
        self.entries[page.slug] = entry
        logger.debug(f"Registered admin page {page.slug} under {page.parent_slug}")
        return entry

    def get(self, slug: str) -> MenuEntry | None:
        return self.entries.get(slug)

    def visible_to(self, capabilities: set[str] | frozenset[str]) -> list[MenuEntry]:
        """Entries whose capability is among the given ones."""
        return [e for e in self.entries.values() if e.capability in capabilities]


def render_page(
    page: ReorderPage,
    posts: list[Post],
    nonce: str,
    ajax_url: str,
    static_url: str,
    max_levels: int,
) -> str:
    """Render the drag-and-drop page for a list of posts.

    The nonce and the ajax URL are passed to the script as data attributes of
    the list. ``initial`` and ``final`` are trusted HTML from configuration.
    """
    items = "".join(
        f'<li id="{post.id}"><div>{escape(post.title)}</div></li>' for post in posts
    )
    icon_style = ""
    if page.icon:
        icon_style = (
            f'<style type="text/css">#icon-reorder-posts {{ '
            f'background: url({escape(page.icon, quote=True)}) no-repeat; }}</style>'
        )

    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{escape(page.heading)}</title>
<link rel="stylesheet" href="{escape(static_url)}/admin.css">
{icon_style}
<script src="{JQUERY_URL}"></script>
<script src="{JQUERY_UI_URL}"></script>
<script src="{NESTED_SORTABLE_URL}"></script>
<script src="{escape(static_url)}/sort.js"></script>
</head>
<body>
<div class="wrap">
<div id="icon-reorder-posts" class="icon32"></div>
<h2>{escape(page.heading)} <span id="loading-animation" class="spinner" hidden></span></h2>
<div id="reorder-error"></div>
{page.initial}
<ul id="post-list" data-nonce="{escape(nonce, quote=True)}" data-ajax-url="{escape(ajax_url, quote=True)}" data-action="post_sort" data-max-levels="{max_levels}">{items}</ul>
{page.final}
</div>
</body>
</html>
"""
