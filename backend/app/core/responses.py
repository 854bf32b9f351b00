"""
responses.py — Uniform Response Envelope

Every endpoint answers with the same body shape:

    {"status": <int>, "message": <str>, "<data_key>": <payload>?, "errors": [<str>]?}

- The data key is resource specific ("user", "sabores", "usuario") and only
  present when the operation produced something to return.
- `errors` is only present when the caller supplies error detail.
- The HTTP status code of the response always equals `status`.
"""

from typing import Any, Dict, List, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class ResponseFormatter:
    """
    Builds envelopes for one resource.

    Example:
        formatter = ResponseFormatter("sabores")
        formatter.success("Sabor encontrado com sucesso!!", flavor.to_public_dict())
    """

    def __init__(self, data_key: str):
        self.data_key = data_key

    def success(self, message: str, data: Any = None, status: int = 200) -> Dict[str, Any]:
        response = {
            "status": status,
            "message": message,
        }
        if data is not None:
            response[self.data_key] = data
        return response

    def error(self, message: str, errors: Optional[List[str]] = None, status: int = 400) -> Dict[str, Any]:
        response = {
            "status": status,
            "message": message,
        }
        if errors is not None:
            response["errors"] = errors
        return response


def respond(envelope: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    """
    Wrap an envelope into a JSONResponse carrying the same HTTP status.
    """
    return JSONResponse(
        status_code=envelope["status"],
        content=jsonable_encoder(envelope),
        headers=headers,
    )
