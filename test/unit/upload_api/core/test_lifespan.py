"""Tests for lifespan management."""

from unittest.mock import MagicMock

import pytest

from upload_api.core.lifespan import BaseEvent, Lifespan, State, create_lifespan
from upload_api.events.ingestor import UploadIngestorEvent
from upload_api.services.ingestor import UploadIngestor


def _event(event_name: str, value: str, calls: list[str] | None = None) -> type[BaseEvent[str]]:
    """Build an event class recording its shutdown in ``calls``."""

    class RecordingEvent(BaseEvent[str]):
        name = event_name

        async def startup(self) -> str:
            return value

        async def shutdown(self, instance: str) -> None:
            if calls is not None:
                calls.append(instance)

    return RecordingEvent


class FailingEvent(BaseEvent[str]):
    name = "failing"

    async def startup(self) -> str:
        raise RuntimeError("cannot start")


# -----------------------------------------------------------------------------
# State Tests
# -----------------------------------------------------------------------------


class TestState:
    """Tests for the State class."""

    def test_set_and_get_attribute(self) -> None:
        state = State()
        state.ingestor = "value"
        assert state.ingestor == "value"
        assert "ingestor" in state

    def test_missing_attribute_raises(self) -> None:
        with pytest.raises(AttributeError, match="State has no attribute 'missing'"):
            _ = State().missing

    def test_get_with_default(self) -> None:
        state = State()
        assert state.get("missing") is None
        assert state.get("missing", "default") == "default"

    def test_iter_and_repr(self) -> None:
        state = State()
        state.a = 1
        state.b = 2
        assert set(state) == {"a", "b"}
        assert "a" in repr(state)

    def test_clear(self) -> None:
        state = State()
        state.a = 1
        state.clear()
        assert "a" not in state


# -----------------------------------------------------------------------------
# BaseEvent Tests
# -----------------------------------------------------------------------------


class TestBaseEvent:
    """Tests for BaseEvent abstract class."""

    def test_has_shutdown_false_when_not_overridden(self) -> None:
        assert not UploadIngestorEvent.has_shutdown()

    def test_has_shutdown_true_when_overridden(self) -> None:
        assert _event("with_shutdown", "x").has_shutdown()


# -----------------------------------------------------------------------------
# Lifespan Tests
# -----------------------------------------------------------------------------


class TestLifespan:
    """Tests for Lifespan class."""

    def test_create_lifespan_returns_lifespan(self) -> None:
        lifespan = create_lifespan(MagicMock())
        assert isinstance(lifespan, Lifespan)
        assert list(lifespan.state) == []
        assert lifespan.events == []

    def test_state_injected_on_creation(self) -> None:
        """Verify routers included after creation see the same state object."""
        app = MagicMock()

        lifespan = Lifespan(app)

        app.inject_global.assert_called_once_with(state=lifespan.state)

    def test_register_returns_self_for_chaining(self) -> None:
        lifespan = Lifespan(MagicMock())
        assert lifespan.register(_event("a", "a")) is lifespan

    def test_register_duplicate_name_raises(self) -> None:
        """Verify two events cannot share a state attribute."""
        lifespan = Lifespan(MagicMock()).register(_event("a", "first"))

        with pytest.raises(ValueError, match="already registered"):
            lifespan.register(_event("a", "second"))

    async def test_startup_fills_injected_state(self) -> None:
        """Verify startup stores event results on the already injected state."""
        app = MagicMock()
        lifespan = Lifespan(app).register(_event("greeting", "hello"))
        injected = app.inject_global.call_args.kwargs["state"]

        await lifespan.startup()

        assert injected is lifespan.state
        assert lifespan.state.greeting == "hello"

    async def test_shutdown_runs_in_reverse_order(self) -> None:
        calls: list[str] = []
        lifespan = Lifespan(MagicMock()).register(_event("a", "a", calls)).register(_event("b", "b", calls))

        await lifespan.startup()
        await lifespan.shutdown()

        assert calls == ["b", "a"]
        assert "a" not in lifespan.state

    async def test_failed_startup_shuts_down_started_events(self) -> None:
        """Verify events started before a failure are cleaned up."""
        app = MagicMock()
        calls: list[str] = []
        lifespan = Lifespan(app).register(_event("a", "a", calls)).register(FailingEvent)

        with pytest.raises(RuntimeError, match="cannot start"):
            await lifespan.startup()

        assert calls == ["a"]
        assert lifespan.events == []
        assert "a" not in lifespan.state

    async def test_shutdown_handles_no_state(self) -> None:
        # Should not raise
        await Lifespan(MagicMock()).shutdown()


# -----------------------------------------------------------------------------
# UploadIngestorEvent Tests
# -----------------------------------------------------------------------------


class TestUploadIngestorEvent:
    """Tests for the ingestor lifespan event."""

    async def test_startup_builds_ingestor_for_configured_field(self, monkeypatch) -> None:
        monkeypatch.setattr("upload_api.events.ingestor.st.UPLOAD_FIELD", "attachment")

        ingestor = await UploadIngestorEvent().startup()

        assert isinstance(ingestor, UploadIngestor)
        assert ingestor.field == "attachment"

    async def test_registered_as_state_ingestor(self) -> None:
        lifespan = Lifespan(MagicMock()).register(UploadIngestorEvent)

        await lifespan.startup()

        assert isinstance(lifespan.state.ingestor, UploadIngestor)
