"""Exception handlers mapping privilege errors to HTTP responses.

Routes may call context.demand(...) directly for checks that depend on
request data; the handler turns the resulting PrivilegeDeniedError into a
403 with the same body as require_privilege:

    {
        "detail": {
            "code": "PRIVILEGE_DENIED",
            "message": "Action 'publish' is not allowed on 'Post'"
        }
    }
"""

from __future__ import annotations

__all__ = [
    "PRIVILEGE_DENIED",
    "privilege_denied_handler",
]

from fastapi import Request
from fastapi.responses import JSONResponse

from privileged.exceptions import PrivilegeDeniedError

PRIVILEGE_DENIED = "PRIVILEGE_DENIED"


async def privilege_denied_handler(request: Request, exc: PrivilegeDeniedError) -> JSONResponse:
    """Render PrivilegeDeniedError as 403."""
    return JSONResponse(
        status_code=403,
        content={"detail": {"code": PRIVILEGE_DENIED, "message": str(exc)}},
    )
