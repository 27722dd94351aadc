#!/usr/bin/env python3
"""
Uniform API response envelope helpers
"""

from typing import Any, Dict
from datetime import datetime, timezone
from fastapi.responses import JSONResponse


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


def error_body(code: str, message: str, details: str = "") -> Dict[str, Any]:
    body = {
        "success": False,
        "error": {
            "code": code,
            "message": message,
        },
        "timestamp": utc_timestamp()
    }
    if details:
        body["error"]["details"] = details
    return body


class APIResponse:
    """Uniform API response helpers"""

    @staticmethod
    def success(data: Any = None, message: str = "", status_code: int = 200) -> JSONResponse:
        """Success response"""
        response_data = {
            "success": True,
            "data": data,
            "timestamp": utc_timestamp()
        }
        if message:
            response_data["message"] = message

        return JSONResponse(
            status_code=status_code,
            content=response_data
        )

    @staticmethod
    def error(code: str, message: str, details: str = "", status_code: int = 400) -> JSONResponse:
        """Error response"""
        return JSONResponse(
            status_code=status_code,
            content=error_body(code, message, details)
        )
