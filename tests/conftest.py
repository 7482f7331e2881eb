"""Pytest fixtures: in-memory SQLite and a fake Admin API client."""

import os

os.environ.setdefault("SYNC_DATABASE_URL", "sqlite://")

from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shop_catalog.api.dependencies import get_admin_client
from shop_catalog.common.exceptions import RemoteAPIError
from shop_catalog.db.database import Base, get_db
from shop_catalog.db.Models.product_models import Product  # noqa: F401
from shop_catalog.main import app


def make_node(
    gid: str = "gid://shopify/Product/1",
    title: str = "Snowboard",
    vendor: str = "Acme",
    description: Optional[str] = "Fast board",
    image_src: Optional[str] = "https://cdn.example.com/board.png",
    price: Optional[str] = "19.99",
) -> Dict[str, Any]:
    images = {"edges": []}
    if image_src is not None:
        images["edges"].append({"node": {"src": image_src, "altText": "alt"}})
    variants = {"edges": []}
    if price is not None:
        variants["edges"].append({"node": {"price": price}})
    return {
        "id": gid,
        "title": title,
        "vendor": vendor,
        "description": description,
        "images": images,
        "variants": variants,
    }


def make_page(nodes: List[Dict[str, Any]], has_next: bool = False) -> Dict[str, Any]:
    return {
        "products": {
            "edges": [{"node": n, "cursor": f"cursor-{i}"} for i, n in enumerate(nodes)],
            "pageInfo": {"hasNextPage": has_next},
        }
    }


class FakeAdminClient:
    """Отдаёт заранее заданные страницы вместо Admin API."""

    def __init__(self, pages: List[Dict[str, Any]], error: Optional[Exception] = None) -> None:
        self.pages = list(pages)
        self.error = error
        self.calls: List[Optional[Dict[str, Any]]] = []

    def execute_graphql(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self.calls.append(variables)
        if self.error is not None:
            raise self.error
        return self.pages[len(self.calls) - 1]


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_admin():
    return FakeAdminClient([make_page([make_node()])])


@pytest.fixture
def failing_admin():
    return FakeAdminClient([], error=RemoteAPIError("Failed to fetch products.", cause=RuntimeError("Throttled")))


@pytest.fixture
def client(engine, fake_admin):
    SessionTesting = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    def _get_db():
        s = SessionTesting()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_admin_client] = lambda: fake_admin
    yield TestClient(app)
    app.dependency_overrides.clear()
