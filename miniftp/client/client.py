import os
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any

import click

from miniftp.client.protocol import ClientProtocol
from miniftp.core.command import (
    ChangeDir,
    Command,
    Get,
    ListDir,
    LocalChangeDir,
    MultiGet,
    MultiPut,
    Open,
    Password,
    Put,
    Quit,
    User,
)
from miniftp.core.replies import ReplyCode
from miniftp.core.session import ClientSession, ClientState
from miniftp.core.transport import FrameStream
from miniftp.utils.exceptions import FtpConnectionError, ProtocolError, SessionStateError
from miniftp.utils.logger import client_logger

REPLY_MESSAGES = {
    ReplyCode.OK: 'Пользователь принят',
    ReplyCode.NOT_FOUND: 'Пользователь не найден',
    ReplyCode.BAD_STATE: 'Команда недопустима в текущем состоянии',
}


class FtpClient:
    """Клиент mini-ftp, одна сессия на процесс"""

    def __init__(self):
        self.session = ClientSession()
        self.handlers: dict[type, Callable[[Any], Coroutine[Any, Any, bool]]] = {
            Open: self.open,
            User: self.user,
            LocalChangeDir: self.local_change_dir,
            Quit: self.quit,
            Password: self.not_implemented,
            ChangeDir: self.not_implemented,
            ListDir: self.not_implemented,
            Get: self.not_implemented,
            Put: self.not_implemented,
            MultiGet: self.not_implemented,
            MultiPut: self.not_implemented,
        }

    @property
    def state(self) -> ClientState:
        return self.session.state

    async def execute(self, command: Command) -> bool:
        """Выполняет команду и сообщает пользователю об ошибках"""
        handler = self.handlers[type(command)]
        try:
            return await handler(command)
        except FtpConnectionError as e:
            client_logger.warning(f'Соединение потеряно: {e}')
            await self.disconnect()
            click.echo(f'Ошибка соединения: {e}', err=True)
            return False
        except ProtocolError as e:
            client_logger.warning(f'Нарушение протокола: {e}')
            click.echo(f'Ошибка протокола: {e}', err=True)
            return False
        except SessionStateError as e:
            click.echo(str(e), err=True)
            return False
        except NotImplementedError:
            click.echo(f'Команда {command.keyword} не реализована', err=True)
            return False

    async def open(self, command: Open) -> bool:
        """Подключается к серверу"""
        self.session.require_disconnected()

        host = str(command.address)
        stream = await FrameStream.connect(host, command.port)
        self.session.opened(stream)
        client_logger.info(f'Подключено к серверу {host}:{command.port}')
        click.echo(f'Подключено к {host}:{command.port}')
        return True

    async def user(self, command: User) -> bool:
        """Отправляет имя пользователя и обрабатывает ответ сервера"""
        stream = self.session.require_user_allowed()

        await ClientProtocol.send_command(stream, command)
        reply = await ClientProtocol.read_reply(stream)
        self.session.user_replied(reply)

        client_logger.debug(f'USER {command.name}: {reply.code}, состояние {self.session.state.value}')
        message = REPLY_MESSAGES[reply]
        if reply is ReplyCode.OK:
            click.echo(f'{reply.code} {message}')
            return True
        click.echo(f'{reply.code} {message}', err=True)
        return False

    async def local_change_dir(self, command: LocalChangeDir) -> bool:
        """Меняет локальную рабочую директорию"""
        target = Path(command.path).expanduser()
        try:
            os.chdir(target)
        except OSError as e:
            click.echo(f'lcd: {e.strerror}: {command.path}', err=True)
            return False
        click.echo(f'Локальная директория: {Path.cwd()}')
        return True

    async def quit(self, command: Quit) -> bool:
        await self.disconnect()
        return True

    async def not_implemented(self, command: Command) -> bool:
        raise NotImplementedError(command.keyword)

    async def disconnect(self):
        """Отключается от сервера"""
        stream = self.session.dropped()
        if stream is not None:
            await stream.close()
            client_logger.info('Соединение закрыто')
