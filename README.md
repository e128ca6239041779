# osdemos

A collection of small, self-contained programs that show classic
operating-system ideas in action. Each one is short enough to read in a
sitting and is meant to be run, changed and run again.

What is covered:

- **Processes** – creating child processes with `fork`, waiting for them,
  replacing a child with `wc` and redirecting its output
  (`osdemos.processes`).
- **Scheduling** – a lottery scheduler driven by a reproducible random stream
  (`osdemos.lottery`).
- **Virtualisation basics** – a CPU hog, a memory counter, a small file write
  forced to disk, a racy shared counter and a look at object placement
  (`osdemos.intro`).
- **Persistence** – a stack of 32-bit integers kept in a memory-mapped file
  that survives between runs (`osdemos.pstack`).
- **Threads** – creating and joining threads, passing arguments and return
  values, a shared counter race and compare-and-swap (`osdemos.threads_api`).
- **Concurrency bugs** – atomicity violations, ordering violations and
  deadlock, with fixed variants for the first two (`osdemos.thread_bugs`).
- **Condition variables** – joining a child with and without a state
  variable and a lock (`osdemos.cv_demos`), and producer/consumer over a
  bounded buffer (`osdemos.boundedbuffer`).
- **Semaphores** – a semaphore built from a lock and a condition variable
  (`osdemos.sync.Zemaphore`), a self-resetting one-shot signal
  (`osdemos.sync.Synchronizer`), binary semaphores, throttling, a
  reader/writer lock (`osdemos.semaphores`) and the dining philosophers
  (`osdemos.philosophers`).
- **Distribution** – a tiny UDP client and server (`osdemos.udp`).

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

The process demonstrations use `os.fork` and run the `wc` program, so they
need a POSIX system with `wc` on the `PATH`.

## Commands

Each command prints a usage line and exits with status 1 when its arguments
are wrong.

| Command               | Arguments                                                                 |
|-----------------------|---------------------------------------------------------------------------|
| `osdemos-lottery`     | `<seed> <loops>`                                                          |
| `osdemos-pstack`      | `[value \| pop] ...`                                                      |
| `osdemos-processes`   | `{p1\|p2\|p3\|p4} [file]`                                                 |
| `osdemos-intro`       | `cpu <string>`, `io [path]`, `mem <value>`, `threads <loops>`, `va`       |
| `osdemos-udp-server`  | `[port [count]]`                                                          |
| `osdemos-udp-client`  | `[host [port [local_port]]]`                                              |
| `osdemos-threads`     | `{create\|simple_args\|return_args\|t0\|t1 <loopcount>\|cas}`             |
| `osdemos-thread-bugs` | `{atomicity\|atomicity_fixed\|deadlock\|ordering\|ordering_fixed}`        |
| `osdemos-cv`          | `{join\|join_modular\|join_no_lock\|join_no_state_var\|join_spin}`        |
| `osdemos-pc`          | `{cv\|single_cv\|sema} <buffersize> <loops> <consumers>`                  |
| `osdemos-dining`      | `{deadlock\|no_deadlock} <num_loops> [-v]`                                |
| `osdemos-sema`        | `{binary\|join\|zemaphore\|throttle <n> <value>\|rwlock <reads> <writes>}`|

### Lottery scheduling

```
osdemos-lottery 1 10
```

runs ten draws with seed 1 among jobs holding 25, 100 and 50 tickets (the
newest job is listed first), printing the job list and each winning ticket
with the ticket count of the job that holds it.

### The persistent stack

The stack lives in `ps.img` in the current directory, which must already
exist. Its size must be at least the size of the native `size_t` count at its
start, and a multiple of 4; a page is a good choice:

```
truncate -s 4096 ps.img
osdemos-pstack 7 13 47 pop
osdemos-pstack pop pop 99
```

Every `pop` prints the value removed; any other argument is pushed as an
integer. Pushes onto a full stack and pops from an empty one are ignored.
What is left stays in the file for the next run.

### Processes

`p1` forks and greets from both sides, `p2` also makes the parent wait, `p3`
runs `wc` on a file in the child, and `p4` does the same with the child's
output sent to `./p4.output`. Without a file argument `wc` counts the
`osdemos/processes.py` module itself.

### UDP

```
osdemos-udp-server
osdemos-udp-client
```

The server listens on port 10000 and answers each datagram with
`goodbye world`; without a count it runs until interrupted. The client binds
port 20000, sends `hello world` to `localhost:10000` and prints the reply.
Messages are sent as 1000-byte, zero-padded datagrams.

### Demonstrations that never end on their own

- `osdemos-intro cpu` and `osdemos-intro mem` loop forever.
- `osdemos-thread-bugs deadlock`, `osdemos-cv join_no_lock`,
  `osdemos-cv join_no_state_var`, `osdemos-pc single_cv` and
  `osdemos-dining deadlock` may block forever; that is what they show.
  The corresponding functions take a `timeout` to make them give up instead.

`osdemos-thread-bugs atomicity` and `osdemos-thread-bugs ordering` end with an
error message and status 1 when the bug strikes, as it does with the default
timings.

## Using the pieces from Python

```python
import threading

from osdemos.sync import Zemaphore
from osdemos.semaphores import RWLock
from osdemos.lottery import GlibcRandom, Lottery
from osdemos.boundedbuffer import run_cv
from osdemos.philosophers import dine

done = Zemaphore(0)
threading.Thread(target=done.post).start()
done.wait()

lock = RWLock()
lock.acquire_readlock()
lock.release_readlock()

lottery = Lottery()
for tickets in (50, 100, 25):
    lottery.insert(tickets)
print(lottery.format_list())
print(lottery.draw(GlibcRandom(1)))   # (winning ticket, tickets of winning job)

print(run_cv(buffer_size=2, loops=10, consumers=2, timeout=5))
print(dine(100, ordered=True, timeout=5))   # meals eaten per philosopher
```

`GlibcRandom` reproduces the C library's `srandom`/`random` stream, so a
given seed always yields the same sequence of winners.

`osdemos.pstack.PersistentStack` is a context manager over a backing file;
`osdemos.udp.UdpEndpoint` is a context manager over a bound datagram socket,
and `osdemos.udp.fill_sock_addr` resolves a host name to an IPv4 address.

## What it does not do

These are teaching programs, not tools. The UDP pair exchanges exactly one
kind of message and has no retries or timeouts; the persistent stack does no
locking between processes and does not create its own backing file; and
`osdemos.intro.address_layout` reports Python object identities, which only
stand in for the code, heap and stack addresses of a native process.