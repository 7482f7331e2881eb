from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shop_catalog.api.v1 import endpoints
from shop_catalog.common.exceptions import CatalogError
from shop_catalog.common.logger import logger
from shop_catalog.common.Schemas.product_schemas import Envelope
from shop_catalog.db.database import Base, engine
from shop_catalog.db.Models import product_models as _product_models  # модели до create_all


@asynccontextmanager
async def lifespan(_app: FastAPI):
    Base.metadata.create_all(bind=engine)
    yield
    engine.dispose()
    logger.info("DB engine disposed")


app = FastAPI(title="Shop Catalog API", version="0.1.0", lifespan=lifespan)
app.include_router(endpoints.router, prefix="/api/v1")


@app.exception_handler(CatalogError)
async def catalog_error_handler(_request: Request, exc: CatalogError) -> JSONResponse:
    logger.warning("%s: %s", type(exc).__name__, exc.detail)
    body = Envelope(status=exc.status_code, success=False, message=exc.message, error=exc.detail)
    return JSONResponse(status_code=exc.status_code, content=body.to_response())
