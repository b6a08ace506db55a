import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from streamsphere.core.config import settings
from streamsphere.core.errors import ApiError
from streamsphere.core.logging import configure_logging
from streamsphere.database import init_db
from streamsphere.routers.auth import router as auth_router
from streamsphere.routers.users import router as users_router
from streamsphere.routers.movies import router as movies_router
from streamsphere.routers.tmdb import router as tmdb_router

configure_logging()
logger = logging.getLogger(__name__)

API_PREFIX = "/api"

app = FastAPI(
    title="StreamSphere API",
    version="0.1.0",
)

# Allow requests coming from the Next.js front-end origin(s)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
def on_startup():
    init_db()

@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "code": exc.code},
        headers=exc.headers,
    )

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": f"{where}: {message}" if where else message,
            "code": "VALIDATION_ERROR",
        },
    )

@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("%s %s error", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": f"Internal server error: {exc}", "code": "INTERNAL_ERROR"},
    )

app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(users_router, prefix=API_PREFIX)
app.include_router(movies_router, prefix=API_PREFIX)
app.include_router(tmdb_router, prefix=API_PREFIX)
