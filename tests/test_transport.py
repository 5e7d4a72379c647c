import asyncio

import pytest

from miniftp.core.transport import FrameStream
from miniftp.utils.exceptions import FtpConnectionError


def _stream(data: bytes, *, eof: bool = True, limit: int = 2**16, read_timeout: float | None = None) -> FrameStream:
    reader = asyncio.StreamReader(limit=limit)
    reader.feed_data(data)
    if eof:
        reader.feed_eof()
    return FrameStream(reader, writer=None, read_timeout=read_timeout)


def test_read_frames_then_partial_then_close():
    async def _exercise():
        stream = _stream(b'user alice\0dir\0tail')
        return [await stream.read_frame() for _ in range(4)]

    assert asyncio.run(_exercise()) == [b'user alice\0', b'dir\0', b'tail', b'']


def test_read_frame_on_closed_stream_is_empty():
    async def _exercise():
        return await _stream(b'').read_frame()

    assert asyncio.run(_exercise()) == b''


def test_read_exactly():
    async def _exercise():
        stream = _stream(b'200\0500\0')
        return await stream.read_exactly(4), await stream.read_exactly(4)

    assert asyncio.run(_exercise()) == (b'200\0', b'500\0')


def test_read_exactly_short_read_is_connection_error():
    async def _exercise():
        await _stream(b'20').read_exactly(4)

    with pytest.raises(FtpConnectionError):
        asyncio.run(_exercise())


def test_read_timeout_is_connection_error():
    async def _exercise():
        await _stream(b'', eof=False, read_timeout=0.05).read_frame()

    with pytest.raises(FtpConnectionError, match='Таймаут'):
        asyncio.run(_exercise())


def test_oversized_frame_is_connection_error():
    async def _exercise():
        await _stream(b'x' * 64 + b'\0', limit=16).read_frame()

    with pytest.raises(FtpConnectionError):
        asyncio.run(_exercise())
