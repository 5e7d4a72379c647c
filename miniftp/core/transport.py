import asyncio
import contextlib
from collections.abc import Awaitable
from typing import TypeVar

from miniftp.utils.config import config
from miniftp.utils.constants import FRAME_DELIMITER
from miniftp.utils.exceptions import FtpConnectionError

T = TypeVar('T')


class FrameStream:
    """Буферизованный поток кадров поверх пары asyncio reader/writer"""

    def __init__(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter, read_timeout: float | None = None
    ):
        self.reader = reader
        self.writer = writer
        self.read_timeout = read_timeout

    @classmethod
    async def connect(cls, host: str, port: int, timeout: float | None = None) -> 'FrameStream':
        """Подключается к host:port и возвращает поток кадров"""
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port, limit=config.max_frame_size),
                timeout if timeout is not None else config.connect_timeout,
            )
        except asyncio.TimeoutError as e:
            raise FtpConnectionError(f'Таймаут подключения к {host}:{port}') from e
        except OSError as e:
            raise FtpConnectionError(f'Ошибка подключения к {host}:{port}: {e}') from e
        return cls(reader, writer, config.read_timeout)

    @property
    def peername(self) -> tuple:
        return self.writer.get_extra_info('peername') or ('?', 0)

    async def _read(self, operation: Awaitable[T]) -> T:
        if not self.read_timeout:
            return await operation
        try:
            return await asyncio.wait_for(operation, self.read_timeout)
        except asyncio.TimeoutError as e:
            raise FtpConnectionError(f'Таймаут чтения ({self.read_timeout} с)') from e

    async def read_frame(self) -> bytes:
        """Читает кадр вместе с нулевым байтом.

        Возвращает b'' если собеседник закрыл соединение между кадрами и
        неполный кадр без завершающего нуля, если соединение закрылось посреди
        кадра.
        """
        try:
            return await self._read(self.reader.readuntil(FRAME_DELIMITER))
        except asyncio.IncompleteReadError as e:
            return e.partial
        except asyncio.LimitOverrunError as e:
            raise FtpConnectionError(f'Кадр превышает {config.max_frame_size} байт') from e
        except OSError as e:
            raise FtpConnectionError(f'Ошибка чтения: {e}') from e

    async def read_exactly(self, size: int) -> bytes:
        """Читает ровно size байт"""
        try:
            return await self._read(self.reader.readexactly(size))
        except asyncio.IncompleteReadError as e:
            raise FtpConnectionError('Соединение закрыто сервером') from e
        except OSError as e:
            raise FtpConnectionError(f'Ошибка чтения: {e}') from e

    async def write_all(self, data: bytes):
        """Записывает данные в буфер отправки"""
        try:
            self.writer.write(data)
        except OSError as e:
            raise FtpConnectionError(f'Ошибка записи: {e}') from e

    async def flush(self):
        """Дожидается отправки буфера"""
        try:
            await self.writer.drain()
        except OSError as e:
            raise FtpConnectionError(f'Ошибка записи: {e}') from e

    async def close(self):
        """Закрывает соединение"""
        if self.writer.is_closing():
            return
        self.writer.close()
        with contextlib.suppress(OSError):
            await self.writer.wait_closed()
