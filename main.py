import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import DashboardError
from app.core.logging import configure_logging
from app.endpoints import auth, market, stocks, watchlist
from app.middleware.exceptions import (
    dashboard_exception_handler,
    global_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.schemas.response import HealthSchema
from app.services.stock import stock_service
from app.store.provider import StoreProvider, build_store_provider

logger = logging.getLogger(__name__)

def create_app(settings: Settings = default_settings, store_provider: Optional[StoreProvider] = None) -> FastAPI:
    configure_logging(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json"
    )
    app.state.settings = settings
    app.state.store_provider = store_provider or build_store_provider(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(Exception, global_exception_handler)
    app.add_exception_handler(DashboardError, dashboard_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(stocks.router, prefix=f"{settings.API_PREFIX}/stocks", tags=["Stocks"])
    app.include_router(watchlist.router, prefix=f"{settings.API_PREFIX}/watchlist", tags=["Watchlist"])
    app.include_router(market.router, prefix=settings.API_PREFIX, tags=["Market"])
    app.include_router(auth.router, prefix=f"{settings.API_PREFIX}/auth", tags=["Auth"])

    @app.get("/health", response_model=HealthSchema)
    async def health():
        return HealthSchema(status="ok", store=app.state.store_provider.backend.value)

    @app.on_event("startup")
    async def startup_event():
        provider: StoreProvider = app.state.store_provider
        provider.initialize()
        if settings.SEED_DEFAULT_STOCKS:
            with provider.session() as store:
                stock_service.seed_default_stocks(store)
        logger.info(f"{settings.PROJECT_NAME} started with {provider.backend.value} store")

    @app.on_event("shutdown")
    async def shutdown_event():
        app.state.store_provider.shutdown()

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
