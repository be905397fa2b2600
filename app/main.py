# app/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.api.api_router import api_router
from sqlalchemy.exc import SQLAlchemyError
from app.core.exceptions import AigcError, StorageError, ValidationError
from app.db import init_db
from app.schemas.common import json_result
import logging
from app.core.logging import configure_logging

configure_logging()

app = FastAPI(title="Document AIGC Chat", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")


@app.exception_handler(AigcError)
async def aigc_error_handler(request: Request, exc: AigcError):
    if exc.status_code >= 500:
        logging.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logging.info("%s %s refused: %s", request.method, request.url.path, exc.message)
    body = json_result(errcode=exc.errcode, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logging.error("%s %s database error: %s", request.method, request.url.path, exc)
    body = json_result(errcode=StorageError.errcode, message=StorageError.default_message)
    return JSONResponse(status_code=StorageError.status_code, content=body.model_dump())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    fields = ", ".join(".".join(str(p) for p in e.get("loc", ())) for e in errors)
    body = json_result(
        errcode=ValidationError.errcode,
        message=f"invalid or missing parameter: {fields}",
    )
    return JSONResponse(status_code=ValidationError.status_code, content=body.model_dump())


@app.on_event("startup")
def on_startup():
    logging.info("Starting up: initializing DB...")
    init_db.init_tables()
    logging.info("Startup complete")
