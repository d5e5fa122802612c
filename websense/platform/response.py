from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from websense.platform.utils.timestamps import utc_timestamp


def api_response(
    *,
    data: Optional[Any] = None,
    message: str = "Operation successful",
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """
    Standard envelope used by the service routes (health, dashboard, errors
    raised outside the analysis handlers).
    Automatically sets status = "success" if < 400 else "error"
    """
    status_str = "success" if status_code < 400 else "error"
    data = jsonable_encoder(data) if data is not None else {}

    return JSONResponse(
        status_code=status_code,
        content={
            "status_code": status_code,
            "status": status_str,
            "message": message,
            "data": data,
        },
    )


def analysis_error(url: str, message: str, *, with_status: bool = True) -> JSONResponse:
    """
    Failure body returned by every analysis handler. Always HTTP 200 so the
    frontend renders the message instead of treating it as a transport error.

    ``with_status`` adds ``success: false`` and a timestamp, which every
    analysis except Lighthouse reports.
    """
    content: dict[str, Any] = {"url": url}
    if with_status:
        content["success"] = False
    content["error"] = True
    content["message"] = message
    if with_status:
        content["timestamp"] = utc_timestamp()
    return JSONResponse(status_code=status.HTTP_200_OK, content=content)


def analysis_result(payload: Any) -> JSONResponse:
    """Serialize a pydantic result with its camelCase wire names."""
    if hasattr(payload, "model_dump"):
        payload = payload.model_dump(by_alias=True)
    return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(payload))
