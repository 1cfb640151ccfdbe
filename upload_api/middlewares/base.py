"""Base middleware architecture for Robyn applications."""

from abc import ABC
from collections.abc import Callable

from robyn import Request, Response, Robyn

from upload_api.core.logger import LogIcon, logger


class BaseMiddleware(ABC):
    """Base class for middlewares with before/after hooks.

    Subclasses override ``before``, ``after`` or both; the handler only
    registers the hooks that were overridden.
    """

    endpoints: frozenset[str] = frozenset()

    def __init__(self, endpoints: frozenset[str] | list[str] | None = None) -> None:
        if endpoints is not None:
            self.endpoints = frozenset(endpoints)

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if not (cls.overrides("before") or cls.overrides("after")):
            raise TypeError(f"{cls.__name__} must implement at least one of before/after")

    @classmethod
    def overrides(cls, hook: str) -> bool:
        """Check if a hook was overridden."""
        return getattr(cls, hook) is not getattr(BaseMiddleware, hook)

    def before(self, request: Request) -> Request | Response:
        """Called before request handling. Return Request to continue or Response to short-circuit."""
        return request

    def after(self, response: Response) -> Response:
        """Called after request handling. Return modified Response."""
        return response


class MiddlewareHandler:
    """Manages middleware registration for a Robyn application."""

    def __init__(self, app: Robyn) -> None:
        self._app = app
        self._middlewares: list[BaseMiddleware] = []

    @property
    def middlewares(self) -> list[BaseMiddleware]:
        return self._middlewares

    def register(self, middleware: BaseMiddleware) -> "MiddlewareHandler":
        """Register a middleware instance. Returns self for chaining."""
        if not middleware.endpoints:
            raise ValueError(f"{middleware.__class__.__name__} declares no endpoints")

        self._middlewares.append(middleware)
        for endpoint in sorted(middleware.endpoints):
            if middleware.overrides("before"):
                self._register_before(endpoint, middleware.before)
            if middleware.overrides("after"):
                self._register_after(endpoint, middleware.after)

        logger.info(
            f"Registered middleware: {middleware.__class__.__name__}",
            icon=LogIcon.ADAPTER,
            endpoints=sorted(middleware.endpoints),
        )
        return self

    def _register_before(self, endpoint: str, handler: Callable) -> None:
        """Register a before_request handler for an endpoint."""
        @self._app.before_request(endpoint)
        async def before_wrapper(request: Request) -> Request | Response:
            return handler(request)

    def _register_after(self, endpoint: str, handler: Callable) -> None:
        """Register an after_request handler for an endpoint."""
        @self._app.after_request(endpoint)
        def after_wrapper(response: Response) -> Response:
            return handler(response)
