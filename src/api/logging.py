"""SQLite request logging for API."""

import sqlite3
import time
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone

from fastapi import HTTPException, Request, status
from notion_client import APIResponseError

from api.models.responses import ErrorCodes
from core.config import DB_PATH
from core.validation import DuplicateEntryError, InvalidArgumentError, NoEntriesError


@dataclass
class RequestLog:
    """Captured request/response data for logging."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    month: str | None = None
    status_code: int = 0
    error_code: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0
    entry_count: int | None = None
    total_hours: float | None = None
    details: list[tuple[str, str]] = field(default_factory=list)  # (type, message)


def log_request(log: RequestLog) -> None:
    """Write request log to SQLite database."""
    conn = sqlite3.connect(DB_PATH)
    try:
        cursor = conn.cursor()

        cursor.execute(
            """
            INSERT INTO api_requests (
                request_id, timestamp, endpoint, method, client_ip, month,
                status_code, error_code, error_message, processing_time_ms,
                entry_count, total_hours
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
            (
                log.request_id,
                log.timestamp,
                log.endpoint,
                log.method,
                log.client_ip,
                log.month,
                log.status_code,
                log.error_code,
                log.error_message,
                log.processing_time_ms,
                log.entry_count,
                log.total_hours,
            ),
        )

        for detail_type, message in log.details:
            cursor.execute(
                """
                INSERT INTO api_request_details (request_id, detail_type, message)
                VALUES (?, ?, ?)
            """,
                (log.request_id, detail_type, message),
            )

        conn.commit()
    finally:
        conn.close()


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def to_http_exception(exc: Exception) -> HTTPException:
    """Map a service error to the API's error envelope."""
    if isinstance(exc, InvalidArgumentError):
        details = [line.strip() for line in str(exc).split("\n") if line.strip()]
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid request", "code": ErrorCodes.INVALID_REQUEST, "details": details},
        )
    if isinstance(exc, DuplicateEntryError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "error": str(exc),
                "code": ErrorCodes.DUPLICATE_ENTRY,
                "details": [f"Existing entry: {exc.existing_id}"],
            },
        )
    if isinstance(exc, NoEntriesError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": str(exc), "code": ErrorCodes.NO_DATA, "details": []},
        )
    if isinstance(exc, APIResponseError):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "error": "Time tracking store request failed",
                "code": ErrorCodes.STORE_ERROR,
                "details": [str(exc)],
            },
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": "Internal server error", "code": ErrorCodes.INTERNAL_ERROR, "details": []},
    )


@asynccontextmanager
async def logged_request(request: Request, endpoint: str):
    """
    Record a request in the SQLite log and map service errors to HTTP errors.

    Yields the RequestLog so the route can add month/entry counts.
    """
    start_time = time.time()
    request_log = RequestLog(
        endpoint=endpoint,
        method=request.method,
        client_ip=get_client_ip(request),
    )

    try:
        yield request_log
        request_log.status_code = request_log.status_code or status.HTTP_200_OK

    except HTTPException as e:
        request_log.status_code = e.status_code
        if isinstance(e.detail, dict):
            request_log.error_code = e.detail.get("code")
            request_log.error_message = e.detail.get("error")
            for detail in e.detail.get("details", []):
                request_log.details.append(("validation_error", detail))
        else:
            request_log.error_message = str(e.detail)
        raise

    except Exception as e:
        http_error = to_http_exception(e)
        request_log.status_code = http_error.status_code
        request_log.error_code = http_error.detail["code"]
        request_log.error_message = str(e)
        detail_type = "store_error" if isinstance(e, APIResponseError) else "validation_error"
        for detail in http_error.detail["details"]:
            request_log.details.append((detail_type, detail))
        raise http_error from e

    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        # Always log the request
        try:
            log_request(request_log)
        except Exception:
            # Don't fail the request if logging fails
            pass
