from __future__ import annotations

import asyncio
import inspect
import logging
import threading
from typing import Any, Awaitable, Callable, Optional, Protocol, Union

logger = logging.getLogger(__name__)

Completion = Callable[[bool], None]
CompletionRequest = Callable[[Completion], Any]


class Authenticator(Protocol):
    """Host-supplied gate consulted before the diagnostics menu is shown."""

    async def authenticate(self) -> bool:
        """Return True if the menu may be presented."""


class CompletionAuthenticator:
    """
    Adapts a completion-callback style handler into an awaitable authenticator.

    The host's `request(completion)` is called once per `authenticate()`; it must eventually
    call `completion(True|False)`, synchronously or later, from any thread. Only the first
    call counts. If the host never calls it, `authenticate()` never resolves.
    """

    def __init__(self, request: CompletionRequest):
        self._request = request

    async def authenticate(self) -> bool:
        loop = asyncio.get_running_loop()
        fut: asyncio.Future[bool] = loop.create_future()
        lock = threading.Lock()
        resolved = False

        def _set(value: bool) -> None:
            if not fut.done():
                fut.set_result(value)

        def completion(authenticated: bool) -> None:
            nonlocal resolved
            with lock:
                if resolved:
                    logger.debug("Authentication completion called more than once; ignoring")
                    return
                resolved = True
            try:
                loop.call_soon_threadsafe(_set, bool(authenticated))
            except RuntimeError:
                # Loop already closed: the awaiting side is gone.
                logger.debug("Authentication completed after the event loop closed; ignoring")

        result = self._request(completion)
        if inspect.isawaitable(result):
            await result
        return await fut


class CallableAuthenticator:
    """Wraps a plain sync or async callable returning a bool."""

    def __init__(self, fn: Callable[[], Union[bool, Awaitable[bool]]]):
        self._fn = fn

    async def authenticate(self) -> bool:
        result = self._fn()
        if inspect.isawaitable(result):
            result = await result
        return bool(result)


async def authorize_presentation(authenticator: Optional[Authenticator], timeout: Optional[float] = None) -> bool:
    """
    Resolve the host's authentication outcome.

    No authenticator means no gating. A timeout resolves to False: the menu is never shown
    implicitly. Cancellation propagates to the caller.
    """
    if authenticator is None:
        return True
    try:
        if timeout is None:
            ok = await authenticator.authenticate()
        else:
            ok = await asyncio.wait_for(authenticator.authenticate(), timeout)
    except asyncio.TimeoutError:
        logger.debug("Authentication timed out after %.1fs; not presenting", timeout)
        return False
    if not ok:
        logger.debug("Authentication denied; not presenting")
    return bool(ok)
