import asyncio
from types import MappingProxyType

import pytest

from miniftp.core.session import ServerState
from miniftp.core.transport import FrameStream
from miniftp.server.server import Server
from miniftp.utils.exceptions import FtpConnectionError

USERS = MappingProxyType({'alice': 'wonderland'})


async def _with_server(exchange):
    server = Server(users=USERS)
    listener = await server.listen('127.0.0.1', 0)
    port = listener.sockets[0].getsockname()[1]
    reader, writer = await asyncio.open_connection('127.0.0.1', port)
    try:
        return await exchange(reader, writer)
    finally:
        writer.close()
        await writer.wait_closed()
        listener.close()
        await listener.wait_closed()


async def _send(reader, writer, frame: bytes) -> bytes:
    writer.write(frame)
    await writer.drain()
    return await asyncio.wait_for(reader.readexactly(4), 5)


def test_user_exchange():
    async def exchange(reader, writer):
        return [
            await _send(reader, writer, b'user ghost\0'),
            await _send(reader, writer, b'user alice\0'),
            await _send(reader, writer, b'user alice\0'),
        ]

    assert asyncio.run(_with_server(exchange)) == [b'500\0', b'200\0', b'600\0']


def test_bad_frames_are_skipped():
    async def exchange(reader, writer):
        writer.write(b'frobnicate x\0')
        writer.write(b'user \xff\0')
        writer.write(b'open 127.0.0.1 21\0')
        writer.write(b'dir\0')
        writer.write(b'pass wonderland\0')
        return await _send(reader, writer, b'user alice\0')

    assert asyncio.run(_with_server(exchange)) == b'200\0'


class _Writer:
    def __init__(self, drain_error: Exception | None = None):
        self.sent = []
        self.closed = False
        self.drain_error = drain_error

    def write(self, data):
        self.sent.append(data)

    async def drain(self):
        if self.drain_error is not None:
            raise self.drain_error

    def get_extra_info(self, name):
        return ('127.0.0.1', 40000)

    def is_closing(self):
        return self.closed

    def close(self):
        self.closed = True

    async def wait_closed(self):
        pass


def _reader(data: bytes) -> asyncio.StreamReader:
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    reader.feed_eof()
    return reader


def test_serve_session_until_close():
    async def _exercise():
        writer = _Writer()
        stream = FrameStream(_reader(b'user alice\0mget a, b\0'), writer)
        return await Server(users=USERS).serve_session(stream), writer.sent

    session, sent = asyncio.run(_exercise())
    assert session.state is ServerState.USER_SENT
    assert sent == [b'200\0']


def test_frame_with_huge_port_is_skipped():
    async def _exercise():
        writer = _Writer()
        frame = b'open 127.0.0.1 ' + b'9' * 5000 + b'\0'
        stream = FrameStream(_reader(frame + b'user alice\0'), writer)
        return await Server(users=USERS).serve_session(stream), writer.sent

    session, sent = asyncio.run(_exercise())
    assert session.state is ServerState.USER_SENT
    assert sent == [b'200\0']


def test_reply_write_failure_ends_session():
    async def _exercise():
        reader = _reader(b'user alice\0user alice\0')
        writer = _Writer(drain_error=ConnectionResetError('peer reset'))
        with pytest.raises(FtpConnectionError):
            await Server(users=USERS).serve_session(FrameStream(reader, writer))
        return writer.sent, await reader.readuntil(b'\0')

    sent, unread = asyncio.run(_exercise())
    assert sent == [b'200\0']
    assert unread == b'user alice\0'


def test_handle_client_closes_after_write_failure():
    async def _exercise():
        reader = _reader(b'user alice\0user alice\0')
        writer = _Writer(drain_error=ConnectionResetError('peer reset'))
        await Server(users=USERS).handle_client(reader, writer)
        return writer

    writer = asyncio.run(_exercise())
    assert writer.closed
    assert writer.sent == [b'200\0']
