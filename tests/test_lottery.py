import pytest

from osdemos.lottery import GlibcRandom, Lottery, main, run


class _FixedRandom:
    def __init__(self, *values):
        self._values = list(values)

    def random(self):
        return self._values.pop(0)


def _standard_lottery():
    lottery = Lottery()
    for tickets in (50, 100, 25):
        lottery.insert(tickets)
    return lottery


def test_glibc_random_seed_one_sequence():
    rng = GlibcRandom(1)
    assert rng.random() == 1804289383
    assert rng.random() == 846930886


def test_glibc_random_seed_zero_behaves_like_one():
    a = GlibcRandom(0)
    b = GlibcRandom(1)
    assert [a.random() for _ in range(20)] == [b.random() for _ in range(20)]


def test_glibc_random_is_deterministic_and_in_range():
    a = GlibcRandom(12345)
    b = GlibcRandom(12345)
    first = [a.random() for _ in range(200)]
    assert first == [b.random() for _ in range(200)]
    assert all(0 <= value < 2**31 for value in first)


def test_glibc_random_negative_seed_in_range():
    rng = GlibcRandom(-7)
    values = [rng.random() for _ in range(50)]
    assert all(0 <= value < 2**31 for value in values)


def test_insert_puts_newest_first():
    lottery = _standard_lottery()
    assert lottery.tickets == (25, 100, 50)
    assert lottery.total == 175
    assert lottery.format_list() == "List: [25] [100] [50] "


def test_empty_list_format():
    assert Lottery().format_list() == "List: "


@pytest.mark.parametrize(
    "value, expected",
    [(0, (0, 25)), (24, (24, 25)), (25, (25, 100)), (124, (124, 100)),
     (125, (125, 50)), (174, (174, 50)), (175, (0, 25))],
)
def test_draw_walks_list_in_order(value, expected):
    assert _standard_lottery().draw(_FixedRandom(value)) == expected


def test_draw_without_tickets_raises():
    with pytest.raises(ValueError):
        Lottery().draw(GlibcRandom(1))


def test_run_output_shape():
    lines = list(run(1, 3))
    assert len(lines) == 1 + 3 * 3
    assert lines[0] == "List: [25] [100] [50] "
    for index in range(3):
        block = lines[1 + 3 * index: 4 + 3 * index]
        assert block[0] == lines[0]
        assert block[2] == ""
        label, winner, tickets = block[1].split()
        assert label == "winner:"
        assert 0 <= int(winner) < 175
        assert int(tickets) in (25, 100, 50)


def test_run_matches_draws_with_same_seed():
    lines = list(run(42, 5))
    rng = GlibcRandom(42)
    lottery = _standard_lottery()
    expected = [f"winner: {w} {t}" for w, t in (lottery.draw(rng) for _ in range(5))]
    assert lines[2::3] == expected


def test_main_requires_two_arguments(capsys):
    assert main(["1"]) == 1
    assert "usage: lottery <seed> <loops>" in capsys.readouterr().err


def test_main_prints_run(capsys):
    assert main(["1", "2"]) == 0
    out = capsys.readouterr().out
    assert out == "\n".join(run(1, 2)) + "\n"