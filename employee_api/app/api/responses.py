"""
JSON responses for employee resources.

Benefit costs are ``Decimal`` values.  Starlette's ``JSONResponse`` and
pydantic's JSON mode would turn them into floats or strings, so
``DecimalJSONResponse`` writes them with simplejson as exact JSON
numbers.  ``render`` dumps response models (by alias, keeping
``Decimal``) into such a response.
"""

from typing import Any, Mapping, Optional, Sequence, Union

import simplejson
from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class DecimalJSONResponse(JSONResponse):
    def render(self, content: Any) -> bytes:
        return simplejson.dumps(
            content,
            use_decimal=True,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")


def render(
    content: Union[BaseModel, Sequence[BaseModel]],
    status_code: int = status.HTTP_200_OK,
    headers: Optional[Mapping[str, str]] = None,
) -> DecimalJSONResponse:
    if isinstance(content, BaseModel):
        payload = content.model_dump(by_alias=True)
    else:
        payload = [item.model_dump(by_alias=True) for item in content]
    return DecimalJSONResponse(payload, status_code=status_code, headers=headers)
