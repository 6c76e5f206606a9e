import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import Body, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config import settings
from core.reportschema.errors import FieldError
from core.reportschema.integrity import (
    validate_core_config_references,
    validate_plugin_config_references,
    validate_report_references,
)
from core.reportschema.scoring import score_categories
from core.reportschema.validation import Invalid, Validated

# -------------------------------------------------------------------
# Logging
# -------------------------------------------------------------------

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("reportschema")

# -------------------------------------------------------------------
# FastAPI App
# -------------------------------------------------------------------

app = FastAPI(
    title="Report Schema API",
    version="1.0.0",
    description="Validate plugin configs, core configs and collected audit reports; score report categories.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------------------------------------------------------------------
# Models
# -------------------------------------------------------------------

class ErrorItem(BaseModel):
    fieldPath: str
    kind: str
    family: str
    message: str


class ValidationResponse(BaseModel):
    valid: bool
    errors: List[ErrorItem] = []


class ScoreResponse(BaseModel):
    categories: Dict[str, float]


def to_error_item(e: FieldError) -> ErrorItem:
    return ErrorItem(fieldPath=e.field_path, kind=e.kind, family=e.family, message=e.message)


def respond(result: Validated, response: Response, document: str) -> ValidationResponse:
    if isinstance(result, Invalid):
        logger.info("Rejected %s: %d error(s)", document, len(result.errors))
        response.status_code = 422
        return ValidationResponse(valid=False, errors=[to_error_item(e) for e in result.errors])
    logger.info("Accepted %s", document)
    return ValidationResponse(valid=True)

# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------

@app.get("/")
def root():
    return {"status": "ok", "service": "Report Schema API", "version": "1.0.0"}


@app.get("/health")
def health():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "limits": {
            "slug": settings.MAX_SLUG_LENGTH,
            "title": settings.MAX_TITLE_LENGTH,
            "description": settings.MAX_DESCRIPTION_LENGTH,
        },
    }


@app.post("/validate/report", response_model=ValidationResponse)
def validate_report_route(response: Response, payload: Any = Body(...)):
    return respond(validate_report_references(payload), response, "report")


@app.post("/validate/plugin", response_model=ValidationResponse)
def validate_plugin_route(response: Response, payload: Any = Body(...)):
    return respond(validate_plugin_config_references(payload), response, "plugin config")


@app.post("/validate/core-config", response_model=ValidationResponse)
def validate_core_config_route(response: Response, payload: Any = Body(...)):
    return respond(validate_core_config_references(payload), response, "core config")


@app.post("/score/report", response_model=ScoreResponse)
def score_report_route(payload: Any = Body(...)):
    result = validate_report_references(payload)
    if isinstance(result, Invalid):
        raise HTTPException(
            status_code=422,
            detail=[to_error_item(e).model_dump() for e in result.errors],
        )
    scores = score_categories(result.value)
    logger.info("Scored report: %d categories", len(scores))
    return ScoreResponse(categories=scores)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "status_code": exc.status_code, "path": str(request.url)},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
