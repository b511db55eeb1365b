"""
FastAPI dependencies shared by the endpoints.

The service and the validation pipeline are built once in
``create_app`` and kept on ``app.state``; the getters below hand them to
endpoints.  ``validated_body`` wraps a request model so its payload is
validated before the endpoint body runs.
"""

from typing import Optional, Type

from fastapi import Body, Depends, Request
from pydantic import BaseModel

from employee_api.app.core.validation import ValidationPipeline
from employee_api.app.services.employee_service import EmployeeService

RECORD_ID_PARAM = "employee_id"


def get_employee_service(request: Request) -> EmployeeService:
    return request.app.state.employee_service


def get_validation_pipeline(request: Request) -> ValidationPipeline:
    return request.app.state.validation_pipeline


def path_record_id(request: Request) -> Optional[int]:
    """Identity of the record addressed by the route, if it has one.

    Non-integer values return ``None``; FastAPI rejects them when it
    parses the endpoint's own path parameter.
    """
    raw = request.path_params.get(RECORD_ID_PARAM)
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def validated_body(model: Type[BaseModel]):
    """Build a dependency that parses the body as ``model`` and validates it.

    The route's record identity is passed to the pipeline explicitly so
    rules that consult stored state know which record is being changed.
    A failing payload raises ``ValidationFailure``, which the handler
    registered in ``create_app`` turns into a 400 response; the endpoint
    itself never runs.
    """

    async def dependency(
        request: Request,
        payload: model = Body(...),
        pipeline: ValidationPipeline = Depends(get_validation_pipeline),
    ) -> BaseModel:
        await pipeline.ensure_valid({"payload": payload}, record_id=path_record_id(request))
        return payload

    dependency.__name__ = f"validated_{model.__name__}"
    return dependency
