import threading

import pytest

from osdemos.threads_api import (
    AtomicInt,
    cas_demo,
    count_together,
    main,
    return_args_demo,
    simple_args_demo,
    thread_create_demo,
    two_threads_demo,
)


def test_thread_create_prints_args_then_done(capsys):
    thread_create_demo(10, 20)
    assert capsys.readouterr().out == "10 20\ndone\n"


@pytest.mark.parametrize("value", [0, 7, 100, -5])
def test_simple_args_returns_one_more(value, capsys):
    result = simple_args_demo(value)
    assert result - value == 1
    out = capsys.readouterr().out.splitlines()
    assert out == [str(value), f"returned {result}"]


def test_return_args_demo(capsys):
    assert return_args_demo(10, 20) == (1, 2)
    out = capsys.readouterr().out
    assert out == "args 10 20\nreturned 1 2\n"


def test_two_threads_demo_output(capsys):
    two_threads_demo()
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "main: begin"
    assert lines[-1] == "main: end"
    assert sorted(lines[1:-1]) == ["A", "B"]


def test_count_together_zero_loops():
    assert count_together(0) == 0


def test_count_together_bounds(capsys):
    result = count_together(1000)
    assert 1 <= result <= 2 * 1000
    out = capsys.readouterr().out
    assert f"[counter: {result}]" in out
    assert "A: done" in out and "B: done" in out


def test_atomic_int_swap_and_failure():
    cell = AtomicInt(5)
    assert cell.compare_and_swap(5, 9) is True
    assert cell.value == 9
    assert cell.compare_and_swap(5, 1) is False
    assert cell.value == 9


def test_atomic_int_concurrent_increments_lose_nothing():
    cell = AtomicInt(0)

    def bump():
        for _ in range(500):
            while True:
                current = cell.value
                if cell.compare_and_swap(current, current + 1):
                    break

    workers = [threading.Thread(target=bump) for _ in range(4)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    assert cell.value == 4 * 500


def test_cas_demo(capsys):
    assert cas_demo() == (True, False, 100)
    out = capsys.readouterr().out
    assert "after successful cas: 100 (success: 1)" in out
    assert "after failing cas: 100 (old: 0)" in out


def test_main_runs_cas():
    assert main(["cas"]) == 0


@pytest.mark.parametrize("argv", [[], ["bogus"], ["t1"], ["t0", "extra"]])
def test_main_usage_errors(argv):
    assert main(argv) == 1