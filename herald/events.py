"""
Herald events: synchronous publish/subscribe owned by a single command.

An Emitter maps event names to the ordered handlers subscribed to them.
publish(name, value) calls each handler with the single value argument, in
subscription order, before returning. There is no queue and no reentrancy
guard: a handler that publishes again runs the nested publish to completion
first.

Handler exceptions are not caught; they propagate to the publisher and the
remaining handlers for that publish do not run.
"""
from collections import defaultdict


class Emitter:
    """
    Per-command event dispatcher.

    Example
        >>> seen = []
        >>> emitter = Emitter()
        >>> emitter.subscribe("count", seen.append)
        >>> emitter.publish("count", "3")
        True
        >>> seen
        ['3']
    """

    __slots__ = ("_handlers",)

    def __init__(self):
        self._handlers = defaultdict(list)

    def subscribe(self, name, handler, /):
        if not isinstance(name, str):
            raise TypeError("subscribe() first argument must be a string")
        if not callable(handler):
            raise TypeError("subscribe() second argument must be callable")
        self._handlers[name].append(handler)

    def unsubscribe(self, name, handler, /):
        """
        Remove the earliest subscription of handler under name; return whether one was found.
        """
        try:
            self._handlers.get(name, []).remove(handler)
        except ValueError:
            return False
        if not self._handlers[name]:
            del self._handlers[name]
        return True

    def publish(self, name, value=None, /):
        """
        Invoke every handler subscribed to name with value.

        Returns True when at least one handler ran. Handlers subscribed while
        the publish is running are not called for this publish.
        """
        if not isinstance(name, str):
            raise TypeError("publish() first argument must be a string")
        handlers = tuple(self._handlers.get(name, ()))
        for handler in handlers:
            handler(value)
        return bool(handlers)

    def handlers(self, name, /):
        return tuple(self._handlers.get(name, ()))

    def __contains__(self, name):
        return name in self._handlers

    def __repr__(self):
        return "emitter(%s)" % ", ".join(f"{name}={len(handlers)}" for name, handlers in self._handlers.items())


__all__ = (
    "Emitter",
)
