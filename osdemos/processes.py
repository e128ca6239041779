"""Process creation with fork, wait and exec."""

import os
import sys
import time

DEFAULT_OUTPUT = "./p4.output"
_DEMOS = ("p1", "p2", "p3", "p4")


def _say(text):
    print(text)
    sys.stdout.flush()


def _child_exit(status):
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(status)


def fork_hello():
    """Fork once and greet from both sides; return the child's pid in the parent."""
    _say(f"hello world (pid:{os.getpid()})")
    rc = os.fork()
    if rc == 0:
        try:
            _say(f"hello, I am child (pid:{os.getpid()})")
        finally:
            _child_exit(0)
    _say(f"hello, I am parent of {rc} (pid:{os.getpid()})")
    return rc


def fork_and_wait():
    """Fork, let the parent wait for the child; return ``(child pid, waited pid)``."""
    _say(f"hello world (pid:{os.getpid()})")
    rc = os.fork()
    if rc == 0:
        try:
            _say(f"hello, I am child (pid:{os.getpid()})")
            time.sleep(1)
        finally:
            _child_exit(0)
    wc, _status = os.waitpid(rc, 0)
    _say(f"hello, I am parent of {rc} (wc:{wc}) (pid:{os.getpid()})")
    return rc, wc


def fork_exec(path):
    """Fork and run ``wc path`` in the child; return ``(child pid, waited pid)``."""
    _say(f"hello world (pid:{os.getpid()})")
    rc = os.fork()
    if rc == 0:
        try:
            _say(f"hello, I am child (pid:{os.getpid()})")
            try:
                os.execvp("wc", ["wc", path])
            except OSError:
                sys.stdout.write("this shouldn't print out")
        finally:
            _child_exit(0)
    wc, _status = os.waitpid(rc, 0)
    _say(f"hello, I am parent of {rc} (wc:{wc}) (pid:{os.getpid()})")
    return rc, wc


def fork_redirect(source, output):
    """Run ``wc source`` in a child whose standard output goes to ``output``.

    Returns the pid the parent waited for.
    """
    sys.stdout.flush()
    rc = os.fork()
    if rc == 0:
        try:
            fd = os.open(output, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o700)
            if fd != 1:
                os.dup2(fd, 1)
                os.close(fd)
            os.execvp("wc", ["wc", source])
        finally:
            os._exit(0)
    wc, _status = os.waitpid(rc, 0)
    return wc


def main(argv=None):
    """Command entry point: ``processes {p1|p2|p3|p4} [file]``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args or args[0] not in _DEMOS or len(args) > 2:
        print("usage: processes {p1|p2|p3|p4} [file]", file=sys.stderr)
        return 1
    name = args[0]
    target = args[1] if len(args) > 1 else __file__
    try:
        if name == "p1":
            fork_hello()
        elif name == "p2":
            fork_and_wait()
        elif name == "p3":
            fork_exec(target)
        else:
            fork_redirect(target, DEFAULT_OUTPUT)
    except OSError:
        print("fork failed", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())