from dataclasses import dataclass
from ipaddress import IPv4Address
from typing import ClassVar


class BaseCommand:
    """Общий интерфейс команд протокола"""

    __slots__ = ()

    keyword: ClassVar[str]
    wire_legal: ClassVar[bool]

    def arguments(self) -> tuple[str, ...]:
        """Аргументы команды в том виде, в каком они пишутся в строке"""
        return ()


class WireCommand(BaseCommand):
    """Команда, которую можно передать серверу"""

    __slots__ = ()
    wire_legal: ClassVar[bool] = True


class LocalCommand(BaseCommand):
    """Команда, которая выполняется только на клиенте"""

    __slots__ = ()
    wire_legal: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class Open(LocalCommand):
    keyword: ClassVar[str] = 'open'

    address: IPv4Address
    port: int

    def arguments(self) -> tuple[str, ...]:
        return str(self.address), str(self.port)


@dataclass(frozen=True, slots=True)
class User(WireCommand):
    keyword: ClassVar[str] = 'user'

    name: str

    def arguments(self) -> tuple[str, ...]:
        return (self.name,)


@dataclass(frozen=True, slots=True)
class Password(WireCommand):
    keyword: ClassVar[str] = 'pass'

    secret: str

    def arguments(self) -> tuple[str, ...]:
        return (self.secret,)

    def __repr__(self) -> str:
        return 'Password(secret=***)'


@dataclass(frozen=True, slots=True)
class ChangeDir(WireCommand):
    keyword: ClassVar[str] = 'cd'

    path: str

    def arguments(self) -> tuple[str, ...]:
        return (self.path,)


@dataclass(frozen=True, slots=True)
class LocalChangeDir(LocalCommand):
    keyword: ClassVar[str] = 'lcd'

    path: str

    def arguments(self) -> tuple[str, ...]:
        return (self.path,)


@dataclass(frozen=True, slots=True)
class ListDir(WireCommand):
    keyword: ClassVar[str] = 'dir'


@dataclass(frozen=True, slots=True)
class Get(WireCommand):
    keyword: ClassVar[str] = 'get'

    remote: str
    local: str

    def arguments(self) -> tuple[str, ...]:
        return self.remote, self.local


@dataclass(frozen=True, slots=True)
class Put(WireCommand):
    keyword: ClassVar[str] = 'put'

    local: str
    remote: str

    def arguments(self) -> tuple[str, ...]:
        return self.local, self.remote


@dataclass(frozen=True, slots=True)
class MultiGet(WireCommand):
    keyword: ClassVar[str] = 'mget'

    names: tuple[str, ...]

    def arguments(self) -> tuple[str, ...]:
        return (', '.join(self.names),)


@dataclass(frozen=True, slots=True)
class MultiPut(WireCommand):
    keyword: ClassVar[str] = 'mput'

    names: tuple[str, ...]

    def arguments(self) -> tuple[str, ...]:
        return (', '.join(self.names),)


@dataclass(frozen=True, slots=True)
class Quit(LocalCommand):
    keyword: ClassVar[str] = 'quit'


Command = Open | User | Password | ChangeDir | LocalChangeDir | ListDir | Get | Put | MultiGet | MultiPut | Quit
