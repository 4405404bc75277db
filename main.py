import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

import models  # noqa: F401  registers every table on Base.metadata
from config import CORS_ORIGINS
from database import Base, engine
from utils.logger import setup_api_logger

from routes import (
    users,
    trips,
    join_requests,
    participants,
    notifications,
    chat_messages,
)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Travel Mates API (Trips, Join Requests, Notifications, Chat)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# setup file logger for API failures
api_logger = setup_api_logger()


async def _body_text(request: Request) -> str:
    try:
        body = await request.body()
    except Exception:
        body = b""
    return body.decode('utf-8', errors='replace')


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    # log request info and stacktrace; the client only gets a generic message
    body = await _body_text(request)
    tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    api_logger.error("Unhandled exception on %s %s | body=%s | error=%s\n%s",
                     request.method, request.url.path, body, str(exc), tb)
    return JSONResponse(status_code=500, content={"message": "Server error"})


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    body = await _body_text(request)
    api_logger.warning("HTTPException on %s %s | status=%s | body=%s | detail=%s",
                       request.method, request.url.path, exc.status_code,
                       body, str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail},
                        headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    api_logger.warning("Validation error on %s %s | errors=%s",
                       request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"message": "Missing or invalid fields", "errors": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


@app.get("/")
def read_root():
    return {"message": "Travel Mates API is running"}


app.include_router(users.router)
app.include_router(trips.router)
app.include_router(join_requests.router)
app.include_router(join_requests.router2)
app.include_router(participants.router)
app.include_router(notifications.router)
app.include_router(chat_messages.router)
app.include_router(chat_messages.router2)
