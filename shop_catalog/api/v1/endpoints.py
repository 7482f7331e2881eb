from __future__ import annotations

from json import JSONDecodeError
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette import status
from starlette.requests import Request

from shop_catalog.api.dependencies import get_admin_client
from shop_catalog.common.exceptions import BadRequestError
from shop_catalog.common.logger import logger
from shop_catalog.common.Schemas.product_schemas import Envelope
from shop_catalog.common.tools.shopify_client import ShopifyAdminClient
from shop_catalog.db.CRUD import (
    create_db,
    delete_product,
    get_product,
    import_catalog_page,
    list_products,
)
from shop_catalog.db.database import get_db
from shop_catalog.settings.config import PRODUCTS_LIST_LIMIT

router: APIRouter = APIRouter()
logger.info("Starting app .....")


def _respond(envelope: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=envelope["status"], content=envelope)


async def _read_product_pk(request: Request) -> Optional[int]:
    """productId из JSON или формы. Это локальный id строки."""
    raw: Any = None
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except (JSONDecodeError, ValueError):
            body = None
        if isinstance(body, dict):
            raw = body.get("productId")
    elif content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        raw = form.get("productId")
    if raw is None or raw == "":
        return None
    try:
        return int(str(raw))
    except ValueError:
        raise BadRequestError("productId must be an integer")


# ---------------- Products ---------------- #

@router.get("/products", tags=["products"])
async def get_products(
    limit: int = Query(default=PRODUCTS_LIST_LIMIT, ge=0),
    db: Session = Depends(get_db),
    _admin: ShopifyAdminClient = Depends(get_admin_client),
) -> JSONResponse:
    return _respond(list_products(db, limit=limit))


@router.get("/products/{product_pk}", tags=["products"])
async def get_one_product(
    product_pk: int,
    db: Session = Depends(get_db),
    _admin: ShopifyAdminClient = Depends(get_admin_client),
) -> JSONResponse:
    return _respond(get_product(db, product_pk))


@router.api_route("/products", methods=["POST", "DELETE", "PUT", "PATCH"], tags=["products"])
async def products_action(
    request: Request,
    db: Session = Depends(get_db),
    admin: ShopifyAdminClient = Depends(get_admin_client),
) -> JSONResponse:
    """
    POST без тела — загрузить первую страницу товаров из магазина.
    DELETE с productId — удалить строку.
    Остальное — 405.
    """
    if request.method == "POST":
        return _respond(import_catalog_page(db, admin))

    if request.method == "DELETE":
        product_pk = await _read_product_pk(request)
        if product_pk is not None:
            return _respond(delete_product(db, product_pk))

    return _respond(
        Envelope(
            status=status.HTTP_405_METHOD_NOT_ALLOWED,
            success=False,
            message="Method not allowed",
            error="Method not allowed",
        ).to_response()
    )


# ---------------- DB utils ---------------- #

@router.get("/status_DB", tags=["database"])
async def get_db_status(
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """
    Проверка соединения с БД. Полезно для health-check.
    """
    try:
        db.scalar(text("SELECT 1"))
        return {"status": status.HTTP_200_OK, "DB_dialect": db.get_bind().dialect.name}
    except Exception as e:
        logger.error("DB health-check failed - %s", e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error connecting to DB: {e}",
        )


@router.post("/create_DB", tags=["database"])
async def create_tables() -> Dict[str, Any]:
    """
    Создаёт таблицу products при необходимости.
    """
    try:
        message = create_db()
        return {"status_code": status.HTTP_200_OK, "transaction": message}
    except Exception:
        logger.error("create_DB failed", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Error creating tables"
        )
