import asyncio
from collections.abc import Callable, Coroutine, Mapping
from pathlib import Path
from typing import Any

from miniftp.core.command import (
    ChangeDir,
    Command,
    Get,
    ListDir,
    MultiGet,
    MultiPut,
    Password,
    Put,
    User,
)
from miniftp.core.session import ServerSession
from miniftp.core.transport import FrameStream
from miniftp.server.auth import UserTable
from miniftp.server.protocol import ServerProtocol
from miniftp.utils.config import config
from miniftp.utils.exceptions import FtpConnectionError
from miniftp.utils.logger import server_logger

Handler = Callable[[Any, ServerSession, FrameStream, tuple], Coroutine[Any, Any, None]]


class Server:
    """Асинхронный TCP сервер mini-ftp"""

    def __init__(self, users: Mapping[str, str] | None = None, users_file: Path | str | None = None):
        if users is None:
            users = UserTable(users_file or config.users_file).users
        self.users = users

        self.handlers: dict[type, Handler] = {
            User: self.handle_user,
            Password: self.handle_unimplemented,
            ChangeDir: self.handle_unimplemented,
            ListDir: self.handle_unimplemented,
            Get: self.handle_unimplemented,
            Put: self.handle_unimplemented,
            MultiGet: self.handle_unimplemented,
            MultiPut: self.handle_unimplemented,
        }

    async def _execute_handler(
        self, handler: Handler, command: Command, session: ServerSession, stream: FrameStream, addr: tuple
    ) -> None:
        """Выполняет хендлер; ошибки соединения пробрасываются наверх"""
        try:
            await handler(command, session, stream, addr)
        except NotImplementedError as e:
            server_logger.warning(f'Команда {command.keyword} от {addr[0]}:{addr[1]} не поддерживается: {e}')

    async def handle_user(self, command: User, session: ServerSession, stream: FrameStream, addr: tuple) -> None:
        """Обрабатывает команду USER"""
        previous = session.state
        reply = session.handle_user(command.name)
        await ServerProtocol.send_reply(stream, reply)
        server_logger.info(
            f'USER {command.name} от {addr[0]}:{addr[1]}: {reply.code} ({previous.value} -> {session.state.value})'
        )

    async def handle_unimplemented(
        self, command: Command, session: ServerSession, stream: FrameStream, addr: tuple
    ) -> None:
        """Команды, для которых сервер пока не реализован"""
        raise NotImplementedError(f'{command.keyword} не реализована')

    async def serve_session(self, stream: FrameStream) -> ServerSession:
        """Обслуживает одно подключение до его закрытия"""
        addr = stream.peername
        session = ServerSession(self.users)

        while True:
            frame = await stream.read_frame()
            if not frame:
                server_logger.debug(f'Клиент {addr[0]}:{addr[1]} закрыл соединение')
                break

            command = ServerProtocol.decode_command(frame, addr)
            if command is None:
                continue

            handler = self.handlers.get(type(command))
            if handler is None:
                server_logger.warning(f'Клиентская команда {command.keyword} от {addr[0]}:{addr[1]} пропущена')
                continue

            await self._execute_handler(handler, command, session, stream, addr)

        return session

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Обрабатывает подключение клиента"""
        stream = FrameStream(reader, writer, config.read_timeout)
        addr = stream.peername
        server_logger.info(f'Подключился клиент {addr[0]}:{addr[1]}')

        try:
            await self.serve_session(stream)
        except FtpConnectionError as e:
            server_logger.warning(f'Соединение с {addr[0]}:{addr[1]} прервано: {e}')
        except Exception as e:
            server_logger.error(f'Ошибка при обработке клиента {addr[0]}:{addr[1]}: {e}', exc_info=True)
        finally:
            await stream.close()
            server_logger.info(f'Соединение с клиентом {addr[0]}:{addr[1]} закрыто')

    async def listen(self, host: str | None = None, port: int | None = None) -> asyncio.Server:
        """Открывает слушающий сокет"""
        return await asyncio.start_server(
            self.handle_client,
            host or config.host,
            config.port if port is None else port,
            limit=config.max_frame_size,
        )

    async def start(self, host: str | None = None, port: int | None = None):
        """Запускает сервер"""
        server = await self.listen(host, port)

        addr = server.sockets[0].getsockname()
        server_logger.info(f'Сервер запущен на {addr[0]}:{addr[1]}, пользователей: {len(self.users)}')

        async with server:
            await server.serve_forever()


async def serve(users_file: Path | str | None = None):
    """Точка входа для запуска сервера"""
    s = Server(users_file=users_file)
    await s.start()
