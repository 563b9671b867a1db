"""Shared fixtures: a SQLite database per test and an ASGI client bound to it."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from reorder.db import get_db
from reorder.main import create_app
from reorder.models import Base, Post, PostStatus, User, UserRole
from reorder.services.auth import auth_service
from reorder.services.reorder_page import ReorderPage


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    # Let SQLAlchemy drive transactions so SAVEPOINTs behave on SQLite.
    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def app(session_maker):
    app = create_app(
        pages=[
            ReorderPage(post_type="post", heading="Reorder Posts"),
            ReorderPage(post_type="page", order="DESC", menu_label="Reorder Pages"),
        ]
    )

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


async def _create_user(session_maker, email: str, role: UserRole) -> User:
    async with session_maker() as session:
        user = User(
            email=email,
            hashed_password=auth_service.hash_password("password123"),
            role=role,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


@pytest_asyncio.fixture
async def editor(session_maker) -> User:
    return await _create_user(session_maker, "editor@example.com", UserRole.EDITOR)


@pytest_asyncio.fixture
async def subscriber(session_maker) -> User:
    return await _create_user(session_maker, "subscriber@example.com", UserRole.SUBSCRIBER)


@pytest.fixture
def make_posts(session_maker):
    """Insert posts given as (id, title, menu_order[, post_type[, post_status]]) tuples."""

    async def _make(*rows) -> None:
        async with session_maker() as session:
            for row in rows:
                post_id, title, menu_order, *rest = row
                post_type = rest[0] if len(rest) > 0 else "post"
                post_status = rest[1] if len(rest) > 1 else PostStatus.PUBLISH
                session.add(
                    Post(
                        id=post_id,
                        title=title,
                        menu_order=menu_order,
                        post_type=post_type,
                        post_status=post_status,
                    )
                )
            await session.commit()

    return _make


@pytest.fixture
def menu_orders(session_maker):
    """Read back {id: menu_order} for all posts."""

    async def _read() -> dict[int, int]:
        async with session_maker() as session:
            result = await session.execute(select(Post.id, Post.menu_order))
            return {row.id: row.menu_order for row in result}

    return _read


@pytest.fixture
def parents(session_maker):
    """Read back {id: parent_id} for all posts."""

    async def _read() -> dict[int, int | None]:
        async with session_maker() as session:
            result = await session.execute(select(Post.id, Post.parent_id))
            return {row.id: row.parent_id for row in result}

    return _read
