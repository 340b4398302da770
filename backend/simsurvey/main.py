"""simsurvey FastAPI application."""
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from simsurvey.api import router
from simsurvey.config import settings
from simsurvey.errors import SurveyError

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("%s starting (region=%s, groups table=%s)", settings.app_name, settings.aws_region, settings.groups_table)
    yield


app = FastAPI(
    title=settings.app_name,
    description="Simulated-AI survey: researcher question groups, participant answers and ratings, admin controls.",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
)
_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)


# Every error body is {"message": ...}
@app.exception_handler(SurveyError)
async def survey_error_handler(request: Request, exc: SurveyError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail
    if exc.status_code == 404 and message == "Not Found":
        message = f"Route not found for {request.method} {request.url.path}"
    return JSONResponse(status_code=exc.status_code, content={"message": message}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg', '')}" for e in exc.errors()
    )
    return JSONResponse(status_code=400, content={"message": "Invalid request", "error": problems})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal Server Error", "error": str(exc)},
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("simsurvey.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
