"""UDP endpoints and a hello/goodbye client and server built on them."""

import socket
import sys

BUFFER_SIZE = 1000
SERVER_PORT = 10000
CLIENT_PORT = 20000


def _pad(text):
    data = text.encode()[:BUFFER_SIZE]
    return data + bytes(BUFFER_SIZE - len(data))


def _c_string(data):
    return data.split(b"\0", 1)[0].decode("latin-1")


class UdpEndpoint:
    """An IPv4 datagram socket bound to ``port`` on every local address."""

    def __init__(self, port):
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self._sock.bind(("", port))
        except OSError:
            self._sock.close()
            raise

    @property
    def address(self):
        """The ``(host, port)`` the endpoint is bound to."""
        return self._sock.getsockname()

    def fileno(self):
        """The underlying socket's file descriptor."""
        return self._sock.fileno()

    def read(self, size):
        """Receive one datagram of at most ``size`` bytes; return ``(data, sender)``."""
        return self._sock.recvfrom(size)

    def write(self, addr, data):
        """Send ``data`` to ``addr``; return the number of bytes sent."""
        return self._sock.sendto(data, addr)

    def close(self):
        """Close the socket."""
        self._sock.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def fill_sock_addr(hostname, port):
    """Resolve ``hostname`` to an IPv4 ``(address, port)``; None gives a cleared address."""
    if hostname is None:
        return ("0.0.0.0", 0)
    return (socket.gethostbyname(hostname), port)


def _usage(text):
    print(f"usage: {text}", file=sys.stderr)
    return 1


def client_main(argv=None):
    """Send ``hello world`` to the server and print its reply.

    Arguments: ``[host [port [local_port]]]``.
    """
    args = sys.argv[1:] if argv is None else list(argv)
    usage = "client [host [port [local_port]]]"
    if len(args) > 3:
        return _usage(usage)
    host = args[0] if args else "localhost"
    try:
        port = int(args[1]) if len(args) > 1 else SERVER_PORT
        local_port = int(args[2]) if len(args) > 2 else CLIENT_PORT
    except ValueError:
        return _usage(usage)
    try:
        endpoint = UdpEndpoint(local_port)
    except OSError as exc:
        print(f"client:: {exc}", file=sys.stderr)
        return 1
    with endpoint:
        try:
            server = fill_sock_addr(host, port)
        except OSError as exc:
            print(f"client:: {exc}", file=sys.stderr)
            return 1
        message = "hello world"
        print(f"client:: send message [{message}]")
        try:
            endpoint.write(server, _pad(message))
        except OSError:
            print("client:: failed to send")
            return 1
        print("client:: wait for reply...", flush=True)
        data, _ = endpoint.read(BUFFER_SIZE)
        print(f"client:: got reply [size:{len(data)} contents:({_c_string(data)})")
    return 0


def server_main(argv=None):
    """Answer every message with ``goodbye world``.

    Arguments: ``[port [count]]``; without a count the server runs forever.
    """
    args = sys.argv[1:] if argv is None else list(argv)
    usage = "server [port [count]]"
    if len(args) > 2:
        return _usage(usage)
    try:
        port = int(args[0]) if args else SERVER_PORT
        count = int(args[1]) if len(args) > 1 else None
    except ValueError:
        return _usage(usage)
    try:
        endpoint = UdpEndpoint(port)
    except OSError as exc:
        print(f"server:: {exc}", file=sys.stderr)
        return 1
    with endpoint:
        served = 0
        while count is None or served < count:
            print("server:: waiting...", flush=True)
            data, addr = endpoint.read(BUFFER_SIZE)
            print(f"server:: read message [size:{len(data)} contents:({_c_string(data)})]")
            if data:
                endpoint.write(addr, _pad("goodbye world"))
                print("server:: reply", flush=True)
            served += 1
    return 0


if __name__ == "__main__":
    sys.exit(server_main())