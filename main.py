"""Application entry point for the Nutrition Assistant API.

Defines the FastAPI app, middleware, exception handlers and includes the
routers from the `api` package. The `lifespan` handler creates tables on
startup.
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.chat import router as chat_router
from api.meals import router as meals_router
from api.recommended_menus import router as recommended_menus_router
from api.users import router as users_router
from core.config import get_settings
from core.error_handlers import register_exception_handlers
from core.exceptions import DatabaseError
from core.logger import get_logger
from database import init_db
from database.deps import get_db_read

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Fastapi lifespan context: initialize resources before serving requests."""
    init_db()
    settings = get_settings()
    logger.info("Nutrition API started (ai_enabled=%s)", settings.ai_enabled)
    yield


app = FastAPI(title="Nutrition Assistant API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log incoming requests and their responses."""
    logger.info("%s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Request error: %s %s", request.method, request.url.path)
        raise
    logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response


@app.get("/health")
def health(db: Session = Depends(get_db_read)):
    """Return basic health status and database connectivity.

    Raises:
        DatabaseError: If database connection fails.
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.exception("Health check failed")
        raise DatabaseError("Database health check failed", operation="health") from exc
    return {"status": "healthy", "database": "connected"}


app.include_router(users_router)
app.include_router(meals_router)
app.include_router(recommended_menus_router)
app.include_router(chat_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
