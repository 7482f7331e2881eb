from __future__ import annotations

from itertools import islice
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette import status

from shop_catalog.common.exceptions import (
    CatalogError,
    PersistenceError,
    ProductNotFoundError,
    RemoteAPIError,
)
from shop_catalog.common.logger import logger
from shop_catalog.common.Schemas.product_schemas import Envelope, FlatProduct, ProductOut
from shop_catalog.common.tools.shopify_client import ShopifyAdminClient, iter_catalog_pages
from shop_catalog.db.database import Base, engine
from shop_catalog.db.Models.product_models import Product
from shop_catalog.settings.config import PRODUCTS_LIST_LIMIT, PRODUCTS_PAGE_SIZE

# ---------- служебные операции ----------

def create_db() -> str:
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as exp:
        if "already exists" in str(exp):
            logger.info("Database already exists")
            return "Database already exists"
        raise
    else:
        return "Database created successfully"

def drop_db() -> str:
    try:
        Base.metadata.drop_all(bind=engine)
    except Exception as exp:
        if "does not exist" in str(exp):
            logger.info("Database does not exist")
            return "Database does not exist"
        raise
    else:
        return "Database dropped successfully"

# ---------- конверт ответа ----------

def _ok(status_code: int, message: str, data: Any = None) -> Dict[str, Any]:
    return Envelope(status=status_code, success=True, message=message, data=data).to_response()

def _fail(err: CatalogError, data: Any = None) -> Dict[str, Any]:
    return Envelope(
        status=err.status_code,
        success=False,
        message=err.message,
        data=data,
        error=err.detail,
    ).to_response()

def _dump(product: Product) -> Dict[str, Any]:
    return ProductOut.model_validate(product).model_dump(by_alias=True)

# ---------- разбор ответа API ----------

def _first_node(connection: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    edges = (connection or {}).get("edges") or []
    if not edges:
        return None
    return edges[0].get("node")

def flatten_product(node: Dict[str, Any]) -> FlatProduct:
    """
    node из products.edges -> плоская запись.
    altText картинки запрашивается, но не сохраняется.
    """
    image = _first_node(node.get("images")) or {}
    variant = _first_node(node.get("variants")) or {}
    return FlatProduct(
        product_id=node.get("id") or "",
        title=node.get("title"),
        vendor=node.get("vendor"),
        description=node.get("description"),
        image=image.get("src") or None,
        price=variant.get("price"),
    )

# ---------- публичный импорт ----------

def import_catalog_page(
    db: Session,
    admin: ShopifyAdminClient,
    page_size: int = PRODUCTS_PAGE_SIZE,
    max_pages: int = 1,
) -> Dict[str, Any]:
    """
    Тянет товары из Admin API и одной пачкой пишет в products.
    По умолчанию только первая страница (10 шт.), дубли не проверяются:
    повторный импорт создаёт те же product_id ещё раз.
    """
    try:
        nodes: List[Dict[str, Any]] = []
        for page in islice(iter_catalog_pages(admin, page_size=page_size), max(max_pages, 1)):
            nodes.extend(page)
        items = [flatten_product(node) for node in nodes if isinstance(node, dict)]
    except ValidationError as e:
        logger.error("Unexpected product shape: %s", e)
        return _fail(RemoteAPIError("Unexpected product data.", cause=e), data={"importedCount": 0})
    except CatalogError as e:
        logger.error("Catalog import failed: %s", e.detail)
        return _fail(e, data={"importedCount": 0})
    except (AttributeError, TypeError) as e:
        logger.error("Malformed catalog page: %s", e, exc_info=True)
        return _fail(RemoteAPIError("Unexpected product data.", cause=e), data={"importedCount": 0})

    try:
        if items:
            db.bulk_save_objects([Product(**item.model_dump()) for item in items])
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Bulk insert failed: %s", e, exc_info=True)
        return _fail(PersistenceError("Failed to upload products.", cause=e), data={"importedCount": 0})
    except Exception as e:
        db.rollback()
        logger.error("Bulk insert unexpected error: %s", e, exc_info=True)
        return _fail(PersistenceError("Failed to upload products.", cause=e), data={"importedCount": 0})

    logger.info("import_catalog_page: imported=%s", len(items))
    return _ok(
        status.HTTP_201_CREATED,
        "Products uploaded successfully!",
        data={
            "importedCount": len(items),
            "products": [item.model_dump() for item in items],
        },
    )

# ---------- чтение / удаление ----------

def list_products(db: Session, limit: int = PRODUCTS_LIST_LIMIT) -> Dict[str, Any]:
    limit = max(0, min(limit, PRODUCTS_LIST_LIMIT))
    try:
        rows = db.scalars(select(Product).order_by(Product.id).limit(limit)).all()
    except SQLAlchemyError as e:
        logger.error("list_products failed: %s", e, exc_info=True)
        return _fail(PersistenceError("Failed to load products.", cause=e), data=[])
    except Exception as e:
        db.rollback()
        logger.error("list_products unexpected error: %s", e, exc_info=True)
        return _fail(PersistenceError("Failed to load products.", cause=e), data=[])
    return _ok(status.HTTP_200_OK, f"Found {len(rows)} products", data=[_dump(p) for p in rows])

def get_product(db: Session, product_pk: int) -> Dict[str, Any]:
    try:
        product = db.get(Product, product_pk)
    except SQLAlchemyError as e:
        logger.error("get_product(%s) failed: %s", product_pk, e, exc_info=True)
        return _fail(PersistenceError("Failed to load product.", cause=e))
    except Exception as e:
        db.rollback()
        logger.error("get_product(%s) unexpected error: %s", product_pk, e, exc_info=True)
        return _fail(PersistenceError("Failed to load product.", cause=e))
    if product is None:
        return _fail(ProductNotFoundError(f"Product {product_pk} not found"))
    return _ok(status.HTTP_200_OK, "Product found", data=_dump(product))

def delete_product(db: Session, product_pk: int) -> Dict[str, Any]:
    try:
        product = db.get(Product, product_pk)
        if product is None:
            return _fail(ProductNotFoundError(f"Product {product_pk} not found"))
        removed = _dump(product)
        db.delete(product)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("delete_product(%s) failed: %s", product_pk, e, exc_info=True)
        return _fail(PersistenceError("Failed to delete product.", cause=e))
    except Exception as e:
        db.rollback()
        logger.error("delete_product(%s) unexpected error: %s", product_pk, e, exc_info=True)
        return _fail(PersistenceError("Failed to delete product.", cause=e))

    logger.info("Deleted product id=%s product_id=%s", product_pk, removed["productId"])
    return _ok(status.HTTP_200_OK, "Product deleted successfully!", data=removed)
