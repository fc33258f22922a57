"""
Event side channel for snspush.

PushInterface reports per-target outcomes (message sent, send failed, user
added, ...) through an EventEmitter instead of through return values, so a
broadcast can complete normally while still letting callers observe every
individual failure.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any

from ._logging import logger

Listener = Callable[..., Any]


class EventType(str, Enum):
    BROADCAST_STARTED = "broadcastStart"
    BROADCAST_ENDED = "broadcastEnd"
    MESSAGE_SENT = "messageSent"  # (target_arn, message_id)
    SEND_FAILED = "sendFailed"  # (target_arn, error)
    USER_ADDED = "userAdded"  # (endpoint_arn, device_id)
    ADD_USER_FAILED = "addUserFailed"  # (device_id, error)
    USER_DELETED = "userDeleted"  # (endpoint_arn)


class EventEmitter:
    """
    Registry of listeners per event type.

    Listeners are invoked synchronously, in registration order, with the
    positional arguments passed to emit(). Nothing is queued or replayed:
    an event emitted while nobody listens is simply dropped.
    """

    def __init__(self) -> None:
        self._listeners: dict[EventType, list[Listener]] = {}

    def on(self, event: EventType | str, listener: Listener) -> Listener:
        """
        Registers a listener. Returns it so it can be passed to off() later.

        Usage:
            emitter.on(EventType.SEND_FAILED, lambda arn, err: failed.append(arn))
        """
        self._listeners.setdefault(EventType(event), []).append(listener)
        return listener

    def once(self, event: EventType | str, listener: Listener) -> Listener:
        """Registers a listener that is removed after its first invocation. Returns it for off()."""
        event_type = EventType(event)

        def wrapper(*args: Any) -> Any:
            self.off(event_type, wrapper)
            return listener(*args)

        wrapper.listener = listener  # type: ignore[attr-defined]
        self.on(event_type, wrapper)
        return listener

    def off(self, event: EventType | str, listener: Listener) -> bool:
        """
        Removes a listener. Listeners registered with once() are matched by the
        callable originally passed in.

        Returns:
            True if the listener was registered, False otherwise
        """
        listeners = self._listeners.get(EventType(event), [])
        for index, registered in enumerate(listeners):
            if registered == listener or getattr(registered, "listener", None) == listener:
                del listeners[index]
                return True
        return False

    def emit(self, event: EventType | str, *args: Any) -> bool:
        """
        Invokes every listener registered for the event.

        A listener that raises is logged and skipped; the remaining listeners
        still run and the error does not reach the emitting operation.

        Returns:
            True if at least one listener was registered
        """
        event_type = EventType(event)
        # Copy so listeners may unregister themselves while being called
        listeners = list(self._listeners.get(event_type, []))
        for listener in listeners:
            try:
                listener(*args)
            except Exception:
                logger.exception(
                    "Event listener raised", extra={"event": event_type.value}
                )
        return bool(listeners)

    def listener_count(self, event: EventType | str) -> int:
        return len(self._listeners.get(EventType(event), []))

    def remove_all_listeners(self, event: EventType | str | None = None) -> None:
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(EventType(event), None)
