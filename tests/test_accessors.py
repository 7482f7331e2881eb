from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from shop_catalog.db.CRUD import delete_product, get_product, list_products
from shop_catalog.db.Models.product_models import Product


def _seed(db, n):
    db.add_all(
        [Product(product_id=f"gid://shopify/Product/{i}", title=f"P{i}", vendor="Acme", price=float(i)) for i in range(n)]
    )
    db.commit()


def test_list_never_returns_more_than_ten(db):
    _seed(db, 15)

    assert len(list_products(db)["data"]) == 10
    assert len(list_products(db, limit=50)["data"]) == 10
    assert len(list_products(db, limit=3)["data"]) == 3


def test_list_is_in_insertion_order_with_camelcase_keys(db):
    _seed(db, 3)

    rows = list_products(db)["data"]

    assert [r["title"] for r in rows] == ["P0", "P1", "P2"]
    assert rows[0]["productId"] == "gid://shopify/Product/0"
    assert set(rows[0]) == {"id", "productId", "title", "vendor", "description", "image", "price"}


def test_list_reports_store_failure():
    broken = MagicMock()
    broken.scalars.side_effect = OperationalError("SELECT", {}, Exception("db down"))

    result = list_products(broken)

    assert result["success"] is False
    assert result["status"] == 500
    assert result["data"] == []


def test_get_product_found_and_missing(db):
    _seed(db, 1)
    pk = db.query(Product).first().id

    found = get_product(db, pk)
    missing = get_product(db, 999)

    assert found["success"] is True
    assert found["data"]["id"] == pk
    assert missing["success"] is False
    assert missing["status"] == 404


def test_delete_returns_removed_row(db):
    _seed(db, 2)
    pk = db.query(Product).order_by(Product.id).first().id

    result = delete_product(db, pk)

    assert result["success"] is True
    assert result["data"]["id"] == pk
    assert db.get(Product, pk) is None
    assert db.query(Product).count() == 1


def test_delete_unknown_id_returns_failure_envelope(db):
    result = delete_product(db, 12345)

    assert result["success"] is False
    assert result["status"] == 404
    assert result["message"] == "Product 12345 not found"


def test_delete_store_error_is_contained():
    broken = MagicMock()
    broken.get.side_effect = OperationalError("SELECT", {}, Exception("db down"))

    result = delete_product(broken, 1)

    assert result["success"] is False
    assert result["status"] == 500
    broken.rollback.assert_called_once()


def test_drop_and_create_db_on_app_engine():
    from shop_catalog.db.CRUD import create_db, drop_db

    assert drop_db() == "Database dropped successfully"
    assert create_db() == "Database created successfully"


def test_out_of_range_id_returns_failure_envelope(db):
    _seed(db, 1)

    deleted = delete_product(db, 10**30)
    fetched = get_product(db, 10**30)

    assert deleted["success"] is False
    assert deleted["status"] == 500
    assert fetched["success"] is False
    assert fetched["status"] == 500
    assert db.query(Product).count() == 1


def test_list_contains_non_sqlalchemy_errors():
    broken = MagicMock()
    broken.scalars.side_effect = RuntimeError("driver exploded")

    result = list_products(broken)

    assert result["success"] is False
    assert result["error"] == "driver exploded"
    broken.rollback.assert_called_once()
