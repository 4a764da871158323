import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vibeshop.api.health import router as health_router
from vibeshop.api.routes_cart import router as cart_router
from vibeshop.api.routes_catalogue import router as catalogue_router
from vibeshop.api.routes_checkout import router as checkout_router
from vibeshop.config import settings
from vibeshop.db import SessionLocal, init_db
from vibeshop.exceptions import ShopError
from vibeshop.services.catalog_service import CatalogService
from vibeshop.utils.log_config import configure_logging

log = logging.getLogger("vibeshop")


def bootstrap():
    """Create tables and, when enabled, seed the sample catalog into an empty store."""
    init_db()
    if not settings.SEED_SAMPLE_DATA:
        return
    db = SessionLocal()
    try:
        CatalogService(db).seed_sample_products()
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    bootstrap()
    log.info("Vibe Shop API ready on %s", settings.DATABASE_URL)
    yield


app = FastAPI(title="Vibe Shop - Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ShopError)
async def shop_error_handler(request: Request, exc: ShopError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    return JSONResponse(status_code=400, content={"error": "Invalid request", "message": problems})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    log.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error", "message": str(exc)})


app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(catalogue_router, prefix="/api/products", tags=["catalogue"])

app.include_router(cart_router, tags=["cart"])

app.include_router(checkout_router, prefix="/api/checkout", tags=["checkout"])


def run():
    import uvicorn

    uvicorn.run("vibeshop.main:app", host=settings.APP_HOST, port=settings.APP_PORT)


if __name__ == "__main__":
    run()
