import threading
import time

from cspnet.semaphore import BinarySemaphore


def test_starts_available_and_is_taken_once():
    sem = BinarySemaphore()
    assert sem.available is True
    assert sem.wait(0) is True
    assert sem.available is False
    assert sem.wait(0) is False


def test_post_makes_available_again():
    sem = BinarySemaphore()
    assert sem.wait(0) is True
    sem.post()
    assert sem.wait(0) is True


def test_double_post_counts_once():
    sem = BinarySemaphore(available=False)
    sem.post()
    sem.post()
    assert sem.wait(0) is True
    assert sem.wait(0) is False


def test_wait_times_out():
    sem = BinarySemaphore(available=False)
    start = time.monotonic()
    assert sem.wait(100) is False
    assert time.monotonic() - start >= 0.09


def test_post_from_other_thread_wakes_waiter():
    sem = BinarySemaphore(available=False)
    timer = threading.Timer(0.05, sem.post)
    timer.start()
    try:
        assert sem.wait() is True
    finally:
        timer.join()
    assert sem.available is False