"""Lifespan management with event-based architecture for robyn-upload-api."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Coroutine
from typing import Any

from robyn import Robyn

from upload_api.core.logger import LogIcon, logger
from upload_api.core.settings import settings as st

AsyncHandler = Callable[[], Coroutine[Any, Any, None]]


class State:
    """Application state container with attribute access, shared by every request."""

    __slots__ = ("_data",)

    def __init__(self) -> None:
        object.__setattr__(self, "_data", {})

    def __getattr__(self, name: str) -> Any:
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(f"State has no attribute '{name}'") from None

    def __setattr__(self, name: str, value: Any) -> None:
        self._data[name] = value

    def __contains__(self, name: str) -> bool:
        return name in self._data

    def __iter__(self):
        return iter(self._data.keys())

    def __repr__(self) -> str:
        return f"State({self._data})"

    def get(self, name: str, default: Any = None) -> Any:
        return self._data.get(name, default)

    def clear(self) -> None:
        self._data.clear()


class BaseEvent[T](ABC):
    """Abstract base class for lifespan events."""

    name: str
    state: State

    @abstractmethod
    async def startup(self) -> T:
        """Initialize and return the event instance."""
        ...

    async def shutdown(self, instance: T) -> None:  # noqa: B027
        """Optional cleanup. Override if cleanup is needed."""

    @classmethod
    def has_shutdown(cls) -> bool:
        """Check if shutdown was overridden."""
        return cls.shutdown is not BaseEvent.shutdown


class Lifespan:
    """Runs registered events at startup and tears them down in reverse order."""

    def __init__(self, app: Robyn) -> None:
        self._app = app
        self._event_classes: list[type[BaseEvent[Any]]] = []
        self._events: list[BaseEvent[Any]] = []
        self._state = State()
        # Included routers copy global dependencies, so the state is shared before any include
        app.inject_global(state=self._state)

    def register(self, event_cls: type[BaseEvent[Any]]) -> "Lifespan":
        """Register an event class. Returns self for chaining.

        Event names become State attributes, so they must be unique.
        """
        if any(registered.name == event_cls.name for registered in self._event_classes):
            raise ValueError(f"Event '{event_cls.name}' is already registered")
        self._event_classes.append(event_cls)
        return self

    @property
    def state(self) -> State:
        return self._state

    @property
    def events(self) -> list[BaseEvent[Any]]:
        return self._events

    async def _teardown(self) -> None:
        for event in reversed(self._events):
            if event.has_shutdown() and event.name in self._state:
                logger.info(f"Shutting down: {event.name}", icon=LogIcon.PROCESSING)
                await event.shutdown(getattr(self._state, event.name))
                logger.info(f"Shutdown complete: {event.name}", icon=LogIcon.SUCCESS)
        self._events.clear()
        self._state.clear()

    @property
    def startup(self) -> AsyncHandler:
        """Return async startup handler function.

        If an event fails to start, the events already started are shut
        down before the error propagates.
        """

        async def _startup() -> None:
            logger.info(
                "Starting application lifespan",
                icon=LogIcon.START,
                version=st.API_VERSION,
                events=len(self._event_classes),
            )
            for event_cls in self._event_classes:
                event = event_cls()
                event.state = self._state

                logger.info(f"Starting event: {event.name}", icon=LogIcon.PROCESSING)
                try:
                    instance = await event.startup()
                except Exception:
                    logger.exception(f"Event failed: {event.name}", icon=LogIcon.ERROR)
                    await self._teardown()
                    raise
                setattr(self._state, event.name, instance)
                self._events.append(event)
                logger.info(f"Event ready: {event.name}", icon=LogIcon.SUCCESS)

            logger.info("App state ready", icon=LogIcon.COMPLETE)

        return _startup

    @property
    def shutdown(self) -> AsyncHandler:
        """Return async shutdown handler function."""

        async def _shutdown() -> None:
            logger.info("Cleaning up app state", icon=LogIcon.TOOL)

            if not self._events:
                logger.info("No state to cleanup", icon=LogIcon.WARNING)
                return

            await self._teardown()
            logger.info("Cleanup complete", icon=LogIcon.COMPLETE)

        return _shutdown


def create_lifespan(app: Robyn) -> Lifespan:
    """Create lifespan manager for event registration."""
    return Lifespan(app)
