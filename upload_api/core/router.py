"""Router with automatic form parsing and response handling."""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

import orjson
from pydantic import BaseModel
from robyn import Request, Response, SubRouter, status_codes
from robyn.robyn import HttpMethod

from upload_api.core.forms import parse_form
from upload_api.core.logger import LogIcon, logger
from upload_api.core.settings import settings as st
from upload_api.models.core import ErrorResponse
from upload_api.models.form import FormFields
from upload_api.models.upload import UPLOAD_PROCESSING_FAILED

FORM_ENDPOINTS: set[str] = set()

JSON_HEADERS = {"content-type": "application/json"}


def parse_endpoint_signature(sig: inspect.Signature) -> set[str]:
    """Parse function signature for form parameters."""
    return {name for name, param in sig.parameters.items() if param.annotation is FormFields}


def parse_request_form(
    form_params: set[str],
    request: Request,
    kwargs: dict[str, Any],
) -> Response | None:
    """Build FormFields from the request's form parts into kwargs.

    Any failure while reading the parts becomes a 500 reply.
    """
    if not form_params:
        return None

    try:
        fields = parse_form(request, st.UPLOAD_FIELD)
    except Exception:
        logger.exception("Failed to parse form body", icon=LogIcon.ERROR, path=request.url.path)
        return json_response(
            ErrorResponse(error=UPLOAD_PROCESSING_FAILED),
            status_code=status_codes.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    for param_name in form_params:
        kwargs[param_name] = fields

    return None


def json_response(payload: BaseModel | dict, status_code: int = status_codes.HTTP_200_OK) -> Response:
    """Serialize a model or dict into a JSON Response."""
    match payload:
        case BaseModel():
            description = payload.model_dump_json(by_alias=True)
        case _:
            description = orjson.dumps(payload).decode()
    return Response(status_code=status_code, headers=dict(JSON_HEADERS), description=description)


def parse_response(result: Any) -> Response:
    """Convert handler result to Response."""
    match result:
        case Response():
            return result
        case BaseModel():
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers=dict(JSON_HEADERS),
                description=result.model_dump_json(indent=4, by_alias=True),
            )
        case dict():
            return json_response(result)
        case _:
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers={"content-type": "text/plain"},
                description=str(result),
            )


HTTP_METHODS = (
    HttpMethod.GET,
    HttpMethod.POST,
    HttpMethod.PUT,
    HttpMethod.DELETE,
    HttpMethod.PATCH,
    HttpMethod.HEAD,
    HttpMethod.OPTIONS,
    HttpMethod.TRACE,
    HttpMethod.CONNECT,
)


def _create_method_wrapper(original_method: Callable, router_prefix: str = "") -> Callable:
    @wraps(original_method)
    def method_wrapper(*args, **kwargs) -> Callable:
        endpoint = args[0] if args else kwargs.get("endpoint", "")
        decorator = original_method(*args, **kwargs)

        def handler_decorator(handler: Callable) -> Callable:
            sig = inspect.signature(handler)
            form_params = parse_endpoint_signature(sig)
            has_request_param = "request" in sig.parameters

            if form_params:
                full_path = f"{router_prefix}{endpoint}".replace("//", "/")
                FORM_ENDPOINTS.add(full_path)

            @wraps(handler)
            async def wrapped_handler(request: Request, **h_kwargs):
                if form_params and (error := parse_request_form(form_params, request, h_kwargs)):
                    return error

                # Pass request to handler only if it declared it
                if has_request_param:
                    h_kwargs["request"] = request

                result = await handler(**h_kwargs)
                return parse_response(result)

            # Build signature: always include request for Robyn injection
            new_params = [inspect.Parameter("request", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=Request)]
            new_params.extend(
                param for name, param in sig.parameters.items() if name != "request" and name not in form_params
            )

            wrapped_handler.__signature__ = sig.replace(parameters=new_params)  # type: ignore[attr-defined]
            return decorator(wrapped_handler)

        return handler_decorator

    return method_wrapper


class Router(SubRouter):
    """Enhanced SubRouter with automatic form parsing and response handling."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._prefix = kwargs.get("prefix", "")
        self._wrap_methods()

    def _wrap_methods(self) -> None:
        """Wrap HTTP methods with parsing logic."""
        for method in HTTP_METHODS:
            method_name = str(method).split(".")[-1].lower()
            if hasattr(self, method_name):
                original_method = getattr(self, method_name)
                wrapped_method = _create_method_wrapper(original_method, self._prefix)
                setattr(self, method_name, wrapped_method)
