"""Debounce calls made while a user is typing.

A :class:`Debouncer` wraps a function and a wait window. In trailing mode
(the default) every call restarts the window and the function runs once, with
the arguments of the last call, after the window passes quietly. In immediate
mode the first call of a burst runs at once and later calls are dropped until
the window passes quietly.

Timers come from a scheduler: any object with ``call_later(delay, callback)``
returning a handle that has ``cancel()``.
"""
import asyncio
import threading


class ThreadingScheduler:
    def call_later(self, delay: float, callback):
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class AsyncioScheduler:
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay: float, callback):
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class Debouncer:
    def __init__(self, func, wait: float = 0.25, immediate: bool = False, scheduler=None):
        if wait < 0:
            raise ValueError("wait must not be negative")
        self.func = func
        self.wait = wait
        self.immediate = immediate
        self._scheduler = scheduler or ThreadingScheduler()
        self._lock = threading.Lock()
        self._handle = None
        self._call = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def __call__(self, *args, **kwargs):
        with self._lock:
            call_now = self.immediate and self._handle is None
            if self._handle is not None:
                self._handle.cancel()
            self._call = None if self.immediate else (args, kwargs)
            handle = None

            def later():
                with self._lock:
                    # A newer call replaced this timer after it had already fired.
                    if self._handle is not handle:
                        return
                    self._handle = None
                    call, self._call = self._call, None
                if call is not None:
                    self.func(*call[0], **call[1])

            handle = self._scheduler.call_later(self.wait, later)
            self._handle = handle
        if call_now:
            self.func(*args, **kwargs)

    def cancel(self):
        """Drop the pending call, if any."""
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            self._handle = None
            self._call = None
