"""Form upload middleware for OpenAPI multipart/form-data patching."""

import orjson
from robyn import Response

from upload_api.core.logger import LogIcon, logger
from upload_api.core.router import FORM_ENDPOINTS
from upload_api.core.settings import settings as st
from upload_api.middlewares.base import BaseMiddleware


def multipart_request_body(field: str) -> dict:
    """OpenAPI requestBody for a single required file field."""
    return {
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {
                        field: {
                            "type": "string",
                            "format": "binary",
                            "description": "File to inspect",
                        }
                    },
                    "required": [field],
                }
            }
        },
        "required": True,
    }


def patch_openapi(spec: dict, endpoints: set[str] | frozenset[str], field: str) -> dict:
    """Set a multipart requestBody on every operation of the given endpoints."""
    paths = spec.get("paths", {})
    for endpoint in endpoints:
        for operation in paths.get(endpoint, {}).values():
            operation["requestBody"] = multipart_request_body(field)
    return spec


class FormUploadOpenAPIMiddleware(BaseMiddleware):
    """Patches OpenAPI responses to use multipart/form-data for form endpoints."""

    endpoints = frozenset(["/openapi.json"])

    def __init__(self, field: str | None = None) -> None:
        super().__init__()
        self.field = field or st.UPLOAD_FIELD

    def after(self, response: Response) -> Response:
        if not FORM_ENDPOINTS:
            return response

        try:
            spec = orjson.loads(response.description)
        except orjson.JSONDecodeError:
            logger.warning("OpenAPI document is not JSON, left unpatched", icon=LogIcon.WARNING)
            return response

        response.description = orjson.dumps(patch_openapi(spec, FORM_ENDPOINTS, self.field)).decode()
        return response
