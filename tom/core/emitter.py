# tom/core/emitter.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Publish/subscribe with upward bubbling.

Every emitter forwards each event it emits to its ``parent`` (if it has
one), tagged with the originating emitter, so a listener registered on a
node observes the events of that node and all of its descendants in
emission order. Nothing stops propagation.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from tom.core.types import Handler

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class _Listener:
    """Internal record of one subscription. ``event_name`` None means all events."""

    event_name: Optional[Any]
    handler: Handler
    once: bool = False
    with_target: bool = False

    def matches(self, event_name: Any) -> bool:
        return self.event_name is None or self.event_name == event_name


class Emitter:
    """
    Minimal event emitter whose events bubble to the parent emitter.

    Subclasses that take part in a tree expose a ``parent`` attribute; a
    standalone emitter has no parent and so only notifies its own listeners.
    """

    def __init__(self) -> None:
        self._listeners: List[_Listener] = []

    def on(
        self,
        event_name: Any = None,
        handler: Optional[Handler] = None,
        *,
        once: bool = False,
        with_target: bool = False,
    ) -> None:
        """
        Register an event listener.

        Calling ``on(handler)`` with a single callable subscribes to every
        event; such listeners receive the event name as their first argument.

        :param event_name: The event name to watch. None catches all events.
        :param handler: The function to call when the event is emitted.
        :param once: If True, the handler is removed after its first call.
        :param with_target: If True, the originating emitter is passed before
            the event arguments.
        :raises TypeError: If no handler is given or it is not callable.
        """
        if handler is None and callable(event_name):
            handler, event_name = event_name, None
        if handler is None:
            raise TypeError("handler function required")
        if not callable(handler):
            raise TypeError("handler arg must be a function")
        self._listeners.append(_Listener(event_name, handler, once, with_target))

    add_event_listener = on

    def once(self, event_name: Any = None, handler: Optional[Handler] = None, *, with_target: bool = False) -> None:
        """Register a listener that is removed after it fires once."""
        self.on(event_name, handler, once=True, with_target=with_target)

    def remove_event_listener(self, event_name: Any, handler: Handler) -> None:
        """
        Remove the first listener registered for exactly this name and handler.

        :param event_name: The event name, or None for a catch-all listener.
        :param handler: The handler originally registered.
        """
        for listener in self._listeners:
            if listener.event_name == event_name and listener.handler is handler:
                self._listeners.remove(listener)
                return

    def emit(self, event_name: Any, *args: Any) -> None:
        """
        Emit an event to local listeners, then bubble it to the parent.

        :param event_name: The event name.
        :param args: Arguments passed to each handler.
        """
        self._emit_target(event_name, self, *args)

    def _emit_target(self, event_name: Any, target: "Emitter", *args: Any) -> None:
        """Dispatch an event originating from ``target`` and forward it upwards."""
        if self._listeners:
            fired_once = []
            # Snapshot so handlers may subscribe/unsubscribe while dispatching.
            for listener in list(self._listeners):
                if not listener.matches(event_name):
                    continue
                # Removed by an earlier handler of this same event.
                if listener not in self._listeners:
                    continue
                handler_args = list(args)
                if listener.with_target:
                    handler_args.insert(0, target)
                if listener.event_name is None:
                    handler_args.insert(0, event_name)
                listener.handler(*handler_args)
                if listener.once:
                    fired_once.append(listener)
            for listener in fired_once:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        parent = getattr(self, "parent", None)
        if isinstance(parent, Emitter):
            parent._emit_target(event_name, target, *args)

    def propagate(self, event_name: Any, source: "Emitter") -> None:
        """
        Re-emit ``event_name`` events from another emitter on this one.

        :param event_name: The event name to propagate.
        :param source: The emitter to propagate from.
        """
        logger.debug("Propagating %r events from %r to %r", event_name, source, self)
        source.on(event_name, lambda *args: self.emit(event_name, *args))
