from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Response

from ordermgt.app.services.codec import encode

JSON_MEDIA_TYPE = "application/json"


def build_response(
    status_code: int,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    """Assemble a wire response; JSON Content-Type is set whenever there is a body."""
    if body is None:
        return Response(status_code=status_code, headers=headers)
    return Response(
        content=encode(body),
        status_code=status_code,
        headers=headers,
        media_type=JSON_MEDIA_TYPE,
    )
