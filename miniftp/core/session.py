"""Состояния сессии на сервере и на клиенте.

Обе машины состояний не выполняют ввода-вывода: сервер и клиент вызывают
функции переходов и сами пишут или читают байты.
"""

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field

from miniftp.core.replies import ReplyCode
from miniftp.core.transport import FrameStream
from miniftp.utils.exceptions import SessionStateError


class ServerState(enum.Enum):
    CONNECTED = 'connected'
    USER_SENT = 'user_sent'
    READY = 'ready'


class ClientState(enum.Enum):
    DISCONNECTED = 'disconnected'
    CONNECTED = 'connected'
    SENT_USER = 'sent_user'
    READY = 'ready'


@dataclass
class ServerSession:
    """Состояние одного подключения на сервере"""

    users: Mapping[str, str]
    state: ServerState = ServerState.CONNECTED
    pending_user: str | None = None
    expected_password: str | None = field(default=None, repr=False)

    def handle_user(self, name: str) -> ReplyCode:
        """Переход по команде USER, возвращает код ответа"""
        if self.state is not ServerState.CONNECTED:
            return ReplyCode.BAD_STATE

        password = self.users.get(name)
        if password is None:
            return ReplyCode.NOT_FOUND

        self.pending_user = name
        self.expected_password = password
        self.state = ServerState.USER_SENT
        return ReplyCode.OK


@dataclass
class ClientSession:
    """Состояние клиента и принадлежащее ему соединение"""

    state: ClientState = ClientState.DISCONNECTED
    stream: FrameStream | None = None

    def require_disconnected(self):
        if self.stream is not None:
            raise SessionStateError('Соединение уже открыто')

    def opened(self, stream: FrameStream):
        """Переход после успешного подключения"""
        self.require_disconnected()
        self.stream = stream
        self.state = ClientState.CONNECTED

    def require_user_allowed(self) -> FrameStream:
        """Проверяет, что USER можно отправить, и возвращает соединение"""
        if self.stream is None:
            raise SessionStateError('Нет соединения. Используйте open <адрес> <порт>')
        if self.state is not ClientState.CONNECTED:
            raise SessionStateError(f'USER недопустима в состоянии {self.state.value}')
        return self.stream

    def user_replied(self, reply: ReplyCode):
        """Переход по ответу сервера на USER"""
        if reply is ReplyCode.OK:
            self.state = ClientState.SENT_USER

    def dropped(self) -> FrameStream | None:
        """Сбрасывает сессию и возвращает соединение, которое нужно закрыть"""
        stream, self.stream = self.stream, None
        self.state = ClientState.DISCONNECTED
        return stream
