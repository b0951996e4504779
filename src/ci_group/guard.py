"""Collapsible log groups that always close.

An unterminated group swallows every line logged after it, so the end
marker is tied to the lifetime of a Group object rather than to the
caller remembering to print it:

    with ci_group.open("Build"):
        build()   # if this raises, the group still closes

The end marker is written exactly once, by whichever comes first:
close(), leaving the with-block, garbage collection of the guard, or
interpreter shutdown. Hard kills (os._exit, SIGKILL) skip it.

Marker writes never raise. A broken or missing stdout means the markers
are silently dropped and the caller's work carries on.
"""

from __future__ import annotations

import sys
import threading
import weakref
from collections.abc import Callable, Mapping
from types import TracebackType
from typing import Any, TypeVar

from ci_group.provider import Provider, detect

T = TypeVar("T")

# Reentrant: a guard finalized by GC can fire while this thread is mid-write.
_STDOUT_LOCK = threading.RLock()


def _emit(line: str) -> None:
    """Write one marker line to stdout and flush, discarding any failure."""
    with _STDOUT_LOCK:
        stream = sys.stdout
        if stream is None:
            return
        try:
            stream.write(line + "\n")
            stream.flush()
        except Exception:
            # Must never replace an exception already unwinding the caller.
            pass


class Group:
    """A collapsible log group. Closes itself when it goes out of scope."""

    def __init__(self, title: str, *, environ: Mapping[str, str] | None = None) -> None:
        self._provider = detect(environ)
        self.title = title

        start = self._provider.start_marker(title)
        if start is not None:
            _emit(start)

        end = self._provider.end_marker()
        if end is not None:
            # Holds no reference to self, so it also fires on GC and at exit.
            self._finalizer = weakref.finalize(self, _emit, end)
        else:
            self._finalizer = weakref.finalize(self, _noop)

    @property
    def provider(self) -> Provider:
        return self._provider

    @property
    def closed(self) -> bool:
        return not self._finalizer.alive

    def close(self) -> None:
        """Emit the end marker. Subsequent calls do nothing."""
        self._finalizer()

    def __enter__(self) -> Group:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<Group {self.title!r} provider={self._provider.value} {state}>"


def _noop() -> None:
    return None


def open(title: str, *, environ: Mapping[str, str] | None = None) -> Group:
    """Open a log group titled ``title``.

    The start marker is written and flushed before this returns, so it
    precedes any output the caller produces next. The title is written
    verbatim: a title containing marker syntax (``::endgroup::``) or a
    newline will confuse the log viewer, and avoiding that is up to the
    caller.

    Args:
        title: Group heading shown in the log viewer.
        environ: Environment used for provider detection (default:
            os.environ).

    Returns:
        The Group guard. Use it in a with-statement or keep a reference
        for as long as the group should stay open.
    """
    return Group(title, environ=environ)


def group(title: str, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run ``func(*args, **kwargs)`` inside a log group and return its result."""
    with open(title):
        return func(*args, **kwargs)
