"""Thread banks whose threads share a global limit kept by a manager."""

from __future__ import annotations

import threading
from typing import Any, Callable


class ThreadManager:
    """Grants thread slots to banks, up to a global maximum."""

    def __init__(self, maxthreads: int) -> None:
        self.maxthreads = maxthreads
        self._nthreads = 0
        self._queue: list[ThreadBank] = []
        self._lock = threading.Lock()

    def _is_runnable(self, bank: "ThreadBank") -> bool:
        return bank.is_ready() and (
            bank.nprivileged < bank.maxprivileged or self._nthreads < self.maxthreads
        )

    def _launch(self, bank: "ThreadBank") -> None:
        if bank.nprivileged < bank.maxprivileged:
            bank.nprivileged += 1
        else:
            self._nthreads += 1
        bank._gate.release()

    def enqueue(self, bank: "ThreadBank") -> None:
        """Let bank start a thread now, or queue it until a slot frees up."""
        with self._lock:
            if self._is_runnable(bank):
                self._launch(bank)
            else:
                self._queue.append(bank)

    def release(self, bank: "ThreadBank") -> None:
        """Return the slot held by a finished thread of bank and wake waiting banks."""
        with self._lock:
            if bank.nprivileged > 0:
                bank.nprivileged -= 1
            else:
                self._nthreads -= 1
            waiting = []
            for queued in self._queue:
                if self._is_runnable(queued):
                    self._launch(queued)
                else:
                    waiting.append(queued)
            self._queue = waiting

    def nthreads(self) -> int:
        """Return the number of global (non-privileged) slots in use."""
        with self._lock:
            return self._nthreads


class ThreadBank:
    """Runs functions on threads, limited locally and by a shared manager."""

    def __init__(self, manager: ThreadManager, maxthreads: int = 1000, maxprivileged: int = 1) -> None:
        self.manager = manager
        self.maxthreads = maxthreads
        self.maxprivileged = maxprivileged
        self.nprivileged = 0
        self._nthreads = 0
        self._count_lock = threading.Lock()
        self._mx = threading.Lock()
        self._gate = threading.Semaphore(0)
        self._threads: list[threading.Thread] = []

    @property
    def nthreads(self) -> int:
        with self._count_lock:
            return self._nthreads

    def _run(self, func: Callable[..., Any], args: tuple) -> None:
        try:
            func(*args)
        finally:
            with self._count_lock:
                self._nthreads -= 1
            self.manager.release(self)

    def add(self, func: Callable[..., Any], *args: Any) -> None:
        """Start func(*args) on a new thread, blocking until a slot is granted."""
        with self._mx:
            self.manager.enqueue(self)
            self._gate.acquire()
            with self._count_lock:
                self._nthreads += 1
            thread = threading.Thread(target=self._run, args=(func, args))
            self._threads.append(thread)
            thread.start()

    def is_ready(self) -> bool:
        return self.nthreads < self.maxthreads

    def info(self) -> str:
        """Describe local and global thread counts."""
        n = self.nthreads
        return (
            f"    (threads: {n - self.nprivileged}+{self.nprivileged} local, "
            f"{self.manager.nthreads()} global)"
        )

    def join(self) -> None:
        """Wait for every thread started by this bank."""
        for thread in self._threads:
            thread.join()

    def __enter__(self) -> "ThreadBank":
        return self

    def __exit__(self, *args: Any) -> None:
        self.join()