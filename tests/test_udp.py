import select
import threading

import pytest

from osdemos.udp import BUFFER_SIZE, UdpEndpoint, client_main, fill_sock_addr, server_main


def _free_port():
    with UdpEndpoint(0) as endpoint:
        return endpoint.address[1]


def test_binding_taken_port_raises():
    with UdpEndpoint(0) as first:
        with pytest.raises(OSError):
            UdpEndpoint(first.address[1])


def test_fill_sock_addr():
    assert fill_sock_addr(None, 10000) == ("0.0.0.0", 0)
    assert fill_sock_addr("localhost", 10000) == ("127.0.0.1", 10000)
    with pytest.raises(OSError):
        fill_sock_addr("no-such-host.invalid", 10000)


def test_client_main_sends_and_prints_reply(capsys):
    received = []
    with UdpEndpoint(0) as server:

        def answer():
            data, addr = server.read(BUFFER_SIZE)
            received.append(data)
            server.write(addr, b"goodbye world" + bytes(BUFFER_SIZE - 13))

        thread = threading.Thread(target=answer, daemon=True)
        thread.start()
        result = client_main(["127.0.0.1", str(server.address[1]), "0"])
        thread.join(timeout=5)
    out = capsys.readouterr().out
    assert result == 0
    assert len(received[0]) == BUFFER_SIZE
    assert received[0].split(b"\0", 1)[0] == b"hello world"
    assert "client:: send message [hello world]" in out
    assert f"client:: got reply [size:{BUFFER_SIZE} contents:(goodbye world)" in out


def test_server_main_replies_once(capsys):
    port = _free_port()
    result = []
    thread = threading.Thread(
        target=lambda: result.append(server_main([str(port), "1"])), daemon=True
    )
    thread.start()
    message = b"hello\0"
    reply = None
    with UdpEndpoint(0) as client:
        for _ in range(50):
            client.write(("127.0.0.1", port), message)
            ready, _, _ = select.select([client], [], [], 1.0)
            if ready:
                reply, _ = client.read(BUFFER_SIZE)
                break
    thread.join(timeout=5)
    out = capsys.readouterr().out
    assert result == [0]
    assert reply.startswith(b"goodbye world\0")
    assert len(reply) == BUFFER_SIZE
    assert f"server:: read message [size:{len(message)} contents:(hello)]" in out


def test_mains_reject_bad_arguments(capsys):
    assert client_main(["a", "1", "2", "3"]) == 1
    assert server_main(["not-a-port"]) == 1
    assert "usage" in capsys.readouterr().err