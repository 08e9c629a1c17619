# core/hooks.py

import inspect
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, Dict, List

from common.logger import LoggerFactory, LogLevel


class HookEvent(str, Enum):
    """Lifecycle points around a single test case execution."""

    BEFORE_TEST = "before_test"
    AFTER_TEST = "after_test"


HookCallback = Callable[..., Any]


class TestHookRegistry:
    """
    Registry of before/after callbacks run around every test case.

    Callbacks may be plain functions or coroutines. ``before_test`` callbacks
    receive ``(collection, test_case)``; ``after_test`` callbacks receive
    ``(collection, test_case, result)``. A failing callback does not stop the
    remaining callbacks; its message is returned so the caller can attach it
    to the result.
    """

    def __init__(self, verbose: bool = False):
        self._hooks: Dict[HookEvent, List[HookCallback]] = defaultdict(list)
        self.logger = LoggerFactory.get_logger(
            name="core.hooks",
            level=LogLevel.DEBUG if verbose else LogLevel.INFO,
        )

    def register(self, event: HookEvent, callback: HookCallback) -> None:
        self._hooks[HookEvent(event)].append(callback)

    def before_test(self, callback: HookCallback) -> HookCallback:
        """Decorator form of ``register(HookEvent.BEFORE_TEST, ...)``."""
        self.register(HookEvent.BEFORE_TEST, callback)
        return callback

    def after_test(self, callback: HookCallback) -> HookCallback:
        """Decorator form of ``register(HookEvent.AFTER_TEST, ...)``."""
        self.register(HookEvent.AFTER_TEST, callback)
        return callback

    def has_hooks(self, event: HookEvent) -> bool:
        return bool(self._hooks.get(HookEvent(event)))

    async def run(self, event: HookEvent, *args: Any) -> List[str]:
        """Run every callback for ``event`` and return the failure messages."""
        event = HookEvent(event)
        failures: List[str] = []
        for callback in self._hooks.get(event, []):
            name = getattr(callback, "__name__", repr(callback))
            try:
                outcome = callback(*args)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as e:
                self.logger.error(
                    f"{event.value} hook '{name}' failed: {e}", hook=name
                )
                failures.append(f"{event.value} hook '{name}' failed: {e}")
        return failures

