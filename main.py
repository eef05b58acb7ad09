import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import FRONTEND_ORIGIN, PORT
from app.core.errors import register_exception_handlers
from app.database import create_db_engine, create_session_factory, init_db
from app.routes.products import router as products_router, item_router as product_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(database_url: Optional[str] = None, **engine_kwargs) -> FastAPI:
    """
    Build the API with its own engine.
    The connection pool lives as long as the application and is disposed on shutdown.
    """
    engine = create_db_engine(database_url, **engine_kwargs)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Create tables (a failure is logged, the server still starts)
        init_db(engine)
        yield
        engine.dispose()

    app = FastAPI(title="Inventory Management API", lifespan=lifespan)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[FRONTEND_ORIGIN],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(products_router, prefix="/api/products", tags=["products"])
    app.include_router(product_router, prefix="/api/product", tags=["products"])

    @app.get("/")
    def read_root():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Server running: http://localhost:{PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
