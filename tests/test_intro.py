import time

from osdemos.intro import address_layout, cpu_loop, main, mem_loop, run_counter, write_hello


def test_cpu_loop_zero_iterations_prints_nothing(capsys):
    cpu_loop("A", 0)
    assert capsys.readouterr().out == ""


def test_cpu_loop_prints_and_spins(capsys):
    start = time.time()
    cpu_loop("A", 1)
    assert capsys.readouterr().out == "A\n"
    assert time.time() - start >= 1


def test_write_hello_writes_file(tmp_path):
    path = tmp_path / "file"
    written = write_hello(str(path))
    assert path.read_bytes() == b"hello world\n"
    assert written == len(b"hello world\n")
    assert path.stat().st_mode & 0o077 == 0


def test_write_hello_truncates_existing(tmp_path):
    path = tmp_path / "file"
    path.write_bytes(b"x" * 100)
    write_hello(str(path))
    assert path.read_bytes() == b"hello world\n"


def test_mem_loop_without_iterations_keeps_value(capsys):
    assert mem_loop(5, 0) == 5
    assert "addr pointed to by p: 0x" in capsys.readouterr().out


def test_mem_loop_increments(capsys):
    assert mem_loop(5, 1) == 6
    assert capsys.readouterr().out.splitlines()[-1].endswith("value of p: 6")


def test_run_counter_bounds():
    assert run_counter(0) == 0
    result = run_counter(1000)
    assert 0 < result <= 2000


def test_address_layout_distinct():
    layout = address_layout()
    assert set(layout) == {"code", "heap", "stack"}
    assert len(set(layout.values())) == 3
    assert all(value > 0 for value in layout.values())


def test_main_threads(capsys):
    assert main(["threads", "100"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Initial value : 0"
    assert lines[1].startswith("Final value   : ")


def test_main_io_and_va(tmp_path, capsys):
    path = tmp_path / "out"
    assert main(["io", str(path)]) == 0
    assert path.read_bytes() == b"hello world\n"
    assert main(["va"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("location of code : 0x")
    assert lines[2].startswith("location of stack: 0x")


def test_main_usage_errors(capsys):
    assert main([]) == 1
    assert main(["cpu"]) == 1
    assert main(["mem", "1", "2"]) == 1
    assert "usage: mem <value>" in capsys.readouterr().err