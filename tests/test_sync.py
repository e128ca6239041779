import threading

from osdemos.sync import Synchronizer, Zemaphore


def _run(target):
    finished = threading.Event()

    def body():
        target()
        finished.set()

    thread = threading.Thread(target=body, daemon=True)
    thread.start()
    return thread, finished


def test_zemaphore_wait_consumes_count():
    z = Zemaphore(2)
    z.wait()
    z.wait()
    assert z.value == 0


def test_zemaphore_post_increments_count():
    z = Zemaphore(0)
    z.post()
    z.post()
    assert z.value == 2


def test_zemaphore_wait_blocks_until_post():
    z = Zemaphore(0)
    thread, finished = _run(z.wait)
    assert not finished.wait(0.1)
    z.post()
    assert finished.wait(2)
    thread.join(2)
    assert z.value == 0


def test_zemaphore_limits_concurrency():
    z = Zemaphore(1)
    z.wait()
    thread, finished = _run(z.wait)
    assert not finished.wait(0.1)
    z.post()
    assert finished.wait(2)
    thread.join(2)


def test_synchronizer_signal_then_wait_resets():
    s = Synchronizer()
    s.signal()
    assert s.done
    s.wait()
    assert not s.done


def test_synchronizer_wakes_waiting_thread():
    s = Synchronizer()
    thread, finished = _run(s.wait)
    assert not finished.wait(0.1)
    s.signal()
    assert finished.wait(2)
    thread.join(2)
    assert not s.done


def test_synchronizer_second_wait_blocks_after_reset():
    s = Synchronizer()
    s.signal()
    s.wait()
    thread, finished = _run(s.wait)
    assert not finished.wait(0.1)
    s.signal()
    assert finished.wait(2)
    thread.join(2)
    assert not thread.is_alive()