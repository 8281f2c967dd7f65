"""Process-wide diagnostic hook for uncaught internal failures."""

from __future__ import annotations

import logging
import sys
import threading
from types import TracebackType

logger = logging.getLogger(__name__)

_install_lock = threading.Lock()
_installed = False


def _log_uncaught(
    exc_type: type[BaseException],
    exc_value: BaseException,
    exc_traceback: TracebackType | None,
    where: str,
) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        return
    logger.critical(
        "uncaught %s in %s",
        exc_type.__name__,
        where,
        exc_info=(exc_type, exc_value, exc_traceback),
    )


def install_diagnostic_hook() -> None:
    """Log uncaught exceptions before the previously installed hooks run.

    Safe to call any number of times, from any thread; only the first call
    installs anything. Conversion results are unaffected.
    """
    global _installed
    with _install_lock:
        if _installed:
            return
        previous_excepthook = sys.excepthook
        previous_threading_hook = threading.excepthook

        def excepthook(
            exc_type: type[BaseException],
            exc_value: BaseException,
            exc_traceback: TracebackType | None,
        ) -> None:
            _log_uncaught(exc_type, exc_value, exc_traceback, "main thread")
            previous_excepthook(exc_type, exc_value, exc_traceback)

        def threading_excepthook(args: threading.ExceptHookArgs) -> None:
            if args.exc_value is not None:
                name = args.thread.name if args.thread is not None else "thread"
                _log_uncaught(args.exc_type, args.exc_value, args.exc_traceback, name)
            previous_threading_hook(args)

        sys.excepthook = excepthook
        threading.excepthook = threading_excepthook
        _installed = True
