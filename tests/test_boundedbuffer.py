import pytest

from osdemos.boundedbuffer import BoundedBuffer, main, run_cv, run_semaphore


def test_fill_get_fifo_with_wraparound():
    buf = BoundedBuffer(3)
    for value in (1, 2, 3):
        buf.fill(value)
    assert buf.is_full
    assert buf.get() == 1
    buf.fill(4)
    assert [buf.get() for _ in range(3)] == [2, 3, 4]
    assert buf.is_empty
    assert len(buf) == 0


def test_get_from_empty_raises():
    with pytest.raises(IndexError):
        BoundedBuffer(2).get()


def test_fill_full_raises():
    buf = BoundedBuffer(1)
    buf.fill(7)
    with pytest.raises(IndexError):
        buf.fill(8)
    assert buf.get() == 7


def test_zero_size_rejected():
    with pytest.raises(ValueError):
        BoundedBuffer(0)


@pytest.mark.parametrize("single_cv", [False, True])
def test_run_cv_single_consumer_gets_everything_in_order(single_cv):
    taken = run_cv(2, 50, 1, single_cv=single_cv, timeout=10)
    assert taken == (list(range(50)),)


def test_run_cv_two_consumers_partition_values():
    taken = run_cv(3, 200, 2, timeout=10)
    assert len(taken) == 2
    assert sorted(taken[0] + taken[1]) == list(range(200))
    for values in taken:
        assert values == sorted(values)


def test_run_semaphore_partitions_values_and_prints(capsys):
    taken = run_semaphore(4, 30, 3)
    assert sorted(v for values in taken for v in values) == list(range(30))
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 30 + 3
    assert sum(line.endswith(" -1") for line in lines) == 3


def test_run_semaphore_rejects_too_many_consumers():
    with pytest.raises(ValueError):
        run_semaphore(1, 1, 11)


def test_main_usage_error(capsys):
    assert main(["cv", "1"]) == 1
    assert "usage" in capsys.readouterr().err


def test_main_runs_cv():
    assert main(["cv", "2", "10", "2"]) == 0