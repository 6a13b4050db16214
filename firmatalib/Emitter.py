class Listener:
    """Single subscription held by an `Emitter`."""

    def __init__(self, handler, once=False):
        self.handler = handler
        self.once = once

class Emitter:
    """Publish/subscribe registry keyed by event name.

    Event names are plain strings, and many of them are built at runtime from
    a pin number, an I2C address or a device number (for example
    `"analog-read-3"` or `"I2C-reply-83"`). Each name maps to an ordered list
    of listeners. A listener is either persistent (`on()`) and stays until it
    is removed, or one-shot (`once()`) and is removed just before its first
    call.

    This class holds no locks. Callers that emit from more than one thread
    must serialize access themselves."""

    def __init__(self):
        # these attributes are intended to be private
        self._listeners = {}

    def on(self, event, handler):
        """Subscribes a handler until it is removed.

        :param event: Event name
        :type event: str

        :param handler: Function called with the event arguments
        :type handler: callable

        :returns: The handler, so it can be kept for `remove_listener()`
        :rtype: callable
        """

        self._listeners.setdefault(event, []).append(Listener(handler))
        return handler

    def once(self, event, handler):
        """Subscribes a handler for the next emission of an event only.

        :param event: Event name
        :type event: str

        :param handler: Function called with the event arguments
        :type handler: callable

        :returns: The handler, so it can be kept for `remove_listener()`
        :rtype: callable
        """

        self._listeners.setdefault(event, []).append(Listener(handler, once=True))
        return handler

    def remove_listener(self, event, handler) -> bool:
        """Removes the first subscription of a handler to an event.

        :returns: Whether a subscription was found and removed
        :rtype: bool
        """

        listeners = self._listeners.get(event, [])
        for i, listener in enumerate(listeners):
            if listener.handler == handler:
                del listeners[i]
                if len(listeners) == 0:
                    del self._listeners[event]
                return True
        return False

    def remove_all_listeners(self, event=None) -> None:
        """Removes every subscription to one event, or to all events."""

        if event is None:
            self._listeners.clear()
        elif event in self._listeners:
            del self._listeners[event]

    def listener_count(self, event) -> int:
        return len(self._listeners.get(event, []))

    def event_names(self) -> list:
        return list(self._listeners.keys())

    def emit(self, event, *args) -> bool:
        """Calls every handler subscribed to an event.

        :param event: Event name
        :type event: str

        :returns: Whether any handler was subscribed
        :rtype: bool

        Handlers run in subscription order. The listener list is copied
        first, so handlers may subscribe or unsubscribe while being called;
        new subscriptions take effect from the next emission."""

        listeners = self._listeners.get(event)
        if not listeners:
            return False

        for listener in list(listeners):
            if listener.once:
                # drop one-shot listeners before calling them so that a
                # handler which emits the same event does not run twice
                self._discard(event, listener)
            listener.handler(*args)

        return True

    def _discard(self, event, listener) -> None:
        listeners = self._listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)
            if len(listeners) == 0:
                del self._listeners[event]
