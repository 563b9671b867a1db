"""Reorder page and ajax endpoint over HTTP."""

import json
import re

import pytest
from sqlalchemy.exc import OperationalError

from reorder.models import PostStatus
from reorder.services.post_service import PostService
from tests.helpers import login, sort_nonce


async def post_sort(client, nonce, order, action="post_sort"):
    data = {"action": action, "order": order}
    if nonce is not None:
        data["nonce"] = nonce
    return await client.post("/admin/ajax", data=data)


class TestReorderPage:
    """GET /admin/{slug}"""

    async def test_renders_posts_in_menu_order(self, client, editor, make_posts):
        await make_posts(
            (1, "Second", 2),
            (2, "First", 1),
            (3, "Hidden draft", 0, "post", PostStatus.DRAFT),
        )
        login(client, editor)

        response = await client.get("/admin/reorder-posts")

        assert response.status_code == 200
        html = response.text
        assert "<h2>Reorder Posts" in html
        assert re.findall(r'<li id="(\d+)">', html) == ["2", "1"]
        assert "Hidden draft" not in html
        assert 'data-action="post_sort"' in html
        assert "/static/sort.js" in html

    async def test_page_for_custom_post_type_uses_its_direction(self, client, editor, make_posts):
        await make_posts((1, "Low", 1, "page"), (2, "High", 5, "page"))
        login(client, editor)

        response = await client.get("/admin/reorder-page")

        assert re.findall(r'<li id="(\d+)">', response.text) == ["2", "1"]

    async def test_titles_are_escaped(self, client, editor, make_posts):
        await make_posts((1, "<script>alert(1)</script>", 0))
        login(client, editor)

        response = await client.get("/admin/reorder-posts")

        assert "<script>alert(1)</script>" not in response.text
        assert "&lt;script&gt;" in response.text

    async def test_embedded_nonce_is_accepted(self, client, editor, make_posts, menu_orders):
        await make_posts((1, "a", 0), (2, "b", 0))
        login(client, editor)

        page = await client.get("/admin/reorder-posts")
        nonce = re.search(r'data-nonce="([^"]+)"', page.text).group(1)
        response = await post_sort(client, nonce, "2,1")

        assert response.status_code == 200
        assert await menu_orders() == {1: 1, 2: 2}

    async def test_requires_login(self, client):
        response = await client.get("/admin/reorder-posts")

        assert response.status_code == 401

    async def test_requires_edit_capability(self, client, subscriber):
        login(client, subscriber)

        response = await client.get("/admin/reorder-posts")

        assert response.status_code == 403

    async def test_unknown_page(self, client, editor):
        login(client, editor)

        response = await client.get("/admin/reorder-nothing")

        assert response.status_code == 404


class TestAdminMenu:
    """GET /admin/menu"""

    async def test_lists_registered_pages(self, client, editor):
        login(client, editor)

        response = await client.get("/admin/menu")

        assert response.status_code == 200
        entries = {e["slug"]: e for e in response.json()}
        assert set(entries) == {"reorder-posts", "reorder-page"}
        assert entries["reorder-posts"]["parent_slug"] == "edit.php"
        assert entries["reorder-page"]["parent_slug"] == "edit.php?post_type=page"
        assert entries["reorder-page"]["menu_title"] == "Reorder Pages"
        assert entries["reorder-posts"]["url"].endswith("/admin/reorder-posts")


class TestPostSort:
    """POST /admin/ajax with action=post_sort"""

    async def test_example_order(self, client, editor, make_posts, menu_orders):
        await make_posts((42, "a", 0), (17, "b", 0), (9, "c", 0))
        login(client, editor)

        response = await post_sort(client, sort_nonce(editor), "42,17,9")

        assert response.status_code == 200
        assert response.json() == {
            "total": 3,
            "written": 3,
            "failed": [],
            "outcome": "full",
            "success": True,
        }
        assert await menu_orders() == {42: 3, 17: 2, 9: 1}

    async def test_nested_order(self, client, editor, make_posts, menu_orders, parents):
        await make_posts((1, "a", 0), (2, "b", 0), (3, "c", 0))
        login(client, editor)
        order = json.dumps([{"id": "3", "children": [{"id": "1"}]}, {"id": "2"}])

        response = await post_sort(client, sort_nonce(editor), order)

        assert response.status_code == 200
        assert await menu_orders() == {3: 3, 1: 2, 2: 1}
        assert (await parents())[1] == 3

    async def test_empty_order(self, client, editor, make_posts, menu_orders):
        await make_posts((1, "a", 7))
        login(client, editor)

        response = await post_sort(client, sort_nonce(editor), "")

        assert response.status_code == 200
        assert response.json()["total"] == 0
        assert await menu_orders() == {1: 7}

    async def test_invalid_nonce_writes_nothing(self, client, editor, make_posts, menu_orders):
        await make_posts((1, "a", 5), (2, "b", 6))
        login(client, editor)

        response = await post_sort(client, "forged", "1,2")

        assert response.status_code == 403
        assert await menu_orders() == {1: 5, 2: 6}

    async def test_missing_nonce(self, client, editor, make_posts, menu_orders):
        await make_posts((1, "a", 5))
        login(client, editor)

        response = await post_sort(client, None, "1")

        assert response.status_code == 403
        assert await menu_orders() == {1: 5}

    async def test_nonce_of_another_user(self, client, editor, subscriber, make_posts):
        await make_posts((1, "a", 5))
        login(client, editor)

        response = await post_sort(client, sort_nonce(subscriber), "1")

        assert response.status_code == 403

    async def test_subscriber_cannot_sort(self, client, subscriber, make_posts, menu_orders):
        await make_posts((1, "a", 5))
        login(client, subscriber)

        response = await post_sort(client, sort_nonce(subscriber), "1")

        assert response.status_code == 403
        assert await menu_orders() == {1: 5}

    async def test_malformed_order(self, client, editor, make_posts, menu_orders):
        await make_posts((1, "a", 5), (2, "b", 6))
        login(client, editor)

        response = await post_sort(client, sort_nonce(editor), "1,abc,2")

        assert response.status_code == 400
        assert await menu_orders() == {1: 5, 2: 6}

    @pytest.mark.parametrize(
        "order",
        ["1,\u00b2", "1,99999999999999999999999", "1,2147483648", '[{"id": "\u00b9"}]'],
    )
    async def test_non_numeric_or_oversized_ids(self, client, editor, make_posts, menu_orders, order):
        await make_posts((1, "a", 5))
        login(client, editor)

        response = await post_sort(client, sort_nonce(editor), order)

        assert response.status_code == 400
        assert await menu_orders() == {1: 5}

    async def test_deeply_nested_json(self, client, editor):
        login(client, editor)

        response = await post_sort(client, sort_nonce(editor), "[" * 100000 + "]" * 100000)

        assert response.status_code == 400

    async def test_ids_outside_list(self, client, editor, make_posts, menu_orders):
        await make_posts((1, "a", 5), (2, "page", 6, "page"))
        login(client, editor)

        response = await post_sort(client, sort_nonce(editor), "1,2")

        assert response.status_code == 422
        assert response.json()["detail"]["ids"] == [2]
        assert await menu_orders() == {1: 5, 2: 6}

    async def test_nonce_scope_selects_list(self, client, editor, make_posts, menu_orders):
        await make_posts((1, "a", 0, "page"), (2, "b", 0, "page"))
        login(client, editor)

        response = await post_sort(client, sort_nonce(editor, post_type="page"), "1,2")

        assert response.status_code == 200
        assert await menu_orders() == {1: 2, 2: 1}

    async def test_unknown_action(self, client, editor):
        login(client, editor)

        response = await post_sort(client, sort_nonce(editor), "1", action="delete_everything")

        assert response.status_code == 400

    async def test_partial_write(self, client, editor, make_posts, menu_orders, monkeypatch):
        await make_posts((1, "a", 0), (2, "b", 0))
        original = PostService._write_order

        async def flaky(self, entry, menu_order, with_parent):
            if entry.post_id == 1:
                raise OperationalError("UPDATE posts", {}, Exception("database is locked"))
            return await original(self, entry, menu_order, with_parent)

        monkeypatch.setattr(PostService, "_write_order", flaky)
        login(client, editor)

        response = await post_sort(client, sort_nonce(editor), "1,2")

        assert response.status_code == 207
        body = response.json()
        assert body["outcome"] == "partial"
        assert body["written"] == 1
        assert body["failed"] == [{"id": 1, "error": "OperationalError"}]
        assert await menu_orders() == {1: 0, 2: 1}

    async def test_nothing_written(self, client, editor, make_posts, monkeypatch):
        await make_posts((1, "a", 0))

        async def broken(self, entry, menu_order, with_parent):
            raise OperationalError("UPDATE posts", {}, Exception("disk I/O error"))

        monkeypatch.setattr(PostService, "_write_order", broken)
        login(client, editor)

        response = await post_sort(client, sort_nonce(editor), "1")

        assert response.status_code == 500
        assert response.json()["outcome"] == "none"
