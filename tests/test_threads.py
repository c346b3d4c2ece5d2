import threading
import time

from mlgutil.threads import ThreadBank, ThreadManager


class Tracker:
    def __init__(self):
        self.lock = threading.Lock()
        self.active = 0
        self.peak = 0
        self.results = []

    def task(self, x):
        with self.lock:
            self.active += 1
            self.peak = max(self.peak, self.active)
        time.sleep(0.01)
        with self.lock:
            self.active -= 1
            self.results.append(x * x)


def test_all_tasks_run():
    manager = ThreadManager(4)
    tracker = Tracker()
    with ThreadBank(manager) as bank:
        for i in range(10):
            bank.add(tracker.task, i)
    assert sorted(tracker.results) == [i * i for i in range(10)]
    assert manager.nthreads() == 0
    assert bank.nthreads == 0
    assert bank.nprivileged == 0


def test_bank_limit_is_respected():
    manager = ThreadManager(100)
    tracker = Tracker()
    with ThreadBank(manager, maxthreads=2, maxprivileged=1) as bank:
        for i in range(8):
            bank.add(tracker.task, i)
    assert tracker.peak <= 2
    assert len(tracker.results) == 8


def test_manager_limit_is_respected():
    manager = ThreadManager(1)
    tracker = Tracker()
    with ThreadBank(manager, maxthreads=10, maxprivileged=0) as bank:
        for i in range(6):
            bank.add(tracker.task, i)
    assert tracker.peak == 1
    assert len(tracker.results) == 6
    assert manager.nthreads() == 0


def test_privileged_slot_works_without_global_slots():
    manager = ThreadManager(0)
    tracker = Tracker()
    with ThreadBank(manager, maxthreads=5, maxprivileged=1) as bank:
        for i in range(4):
            bank.add(tracker.task, i)
    assert tracker.peak == 1
    assert sorted(tracker.results) == [0, 1, 4, 9]


def test_multiple_arguments():
    manager = ThreadManager(2)
    out = []
    lock = threading.Lock()

    def add(a, b, c):
        with lock:
            out.append(a + b + c)

    with ThreadBank(manager) as bank:
        bank.add(add, 1, 2, 3)
        bank.add(add, 4, 5, 6)
    assert sorted(out) == [6, 15]
    assert bank.nthreads == 0
    assert manager.nthreads() == 0


def test_info_when_idle():
    manager = ThreadManager(3)
    bank = ThreadBank(manager)
    assert bank.info() == "    (threads: 0+0 local, 0 global)"
    assert bank.is_ready()