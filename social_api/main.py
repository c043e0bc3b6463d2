import os
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .controllers import account_deletion, admin, comments, follows
from .database import engine, Base
from .exceptions import ApiError
from .responses import error_response, preflight_response

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="Social API")

# Handlers are called from the web app and the admin dashboard on any origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return error_response(exc.message, exc.status_code, exc.details)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return error_response("Invalid request body", 400)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(str(exc.detail), exc.status_code)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error on {request.url.path}")
    return error_response("Internal server error", 500, str(exc))


@app.options("/{full_path:path}", include_in_schema=False)
def preflight(full_path: str):
    return preflight_response()


# Create database tables
Base.metadata.create_all(bind=engine)

# Include routers
app.include_router(follows.router, prefix="/functions", tags=["social"])
app.include_router(comments.router, prefix="/functions", tags=["social"])
app.include_router(account_deletion.router, prefix="/functions", tags=["accounts"])
app.include_router(admin.router, prefix="/functions", tags=["admin"])
