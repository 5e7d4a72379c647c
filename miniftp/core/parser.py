"""Разбор строки команды, набранной пользователем или пришедшей по сети.

Токены разделяются только пробелами (без кавычек и экранирования), первое
слово - ключевое слово команды в нижнем регистре. Для mget/mput остаток
строки делится по запятым, пробелы вокруг имен отбрасываются, поэтому
``mget a,b`` и ``mget a, b`` дают одно и то же.
"""

from collections.abc import Callable
from ipaddress import AddressValueError, IPv4Address

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
from miniftp.utils.exceptions import CommandParseError

MAX_PORT = 65535


def tokenize(text: str) -> list[str]:
    """Делит строку на токены по последовательностям пробелов"""
    return [token for token in text.split(' ') if token]


def _take(keyword: str, tokens: list[str], count: int) -> list[str]:
    if len(tokens) < count:
        raise CommandParseError(f'{keyword}: expected {count} argument(s), got {len(tokens)}')
    if len(tokens) > count:
        raise CommandParseError('trailing characters')
    return tokens


def _parse_address(token: str) -> IPv4Address:
    try:
        return IPv4Address(token)
    except AddressValueError as e:
        raise CommandParseError(f'open: invalid IPv4 address {token!r}: {e}') from e


def _parse_port(token: str) -> int:
    if not (token.isascii() and token.isdigit()):
        raise CommandParseError(f'open: invalid port {token[:16]!r}')
    digits = token.lstrip('0') or '0'
    if len(digits) > len(str(MAX_PORT)) or int(digits) > MAX_PORT:
        raise CommandParseError(f'open: port {token[:16]} out of range 0-{MAX_PORT}')
    return int(digits)


def _parse_names(keyword: str, rest: str) -> tuple[str, ...]:
    names = tuple(name.strip(' ') for name in rest.split(','))
    for name in names:
        if not name:
            raise CommandParseError(f'{keyword}: empty file name')
        if ' ' in name:
            raise CommandParseError('trailing characters')
    return names


def _open(rest: str) -> Open:
    address, port = _take('open', tokenize(rest), 2)
    return Open(_parse_address(address), _parse_port(port))


def _user(rest: str) -> User:
    (name,) = _take('user', tokenize(rest), 1)
    return User(name)


def _password(rest: str) -> Password:
    (secret,) = _take('pass', tokenize(rest), 1)
    return Password(secret)


def _change_dir(rest: str) -> ChangeDir:
    (path,) = _take('cd', tokenize(rest), 1)
    return ChangeDir(path)


def _local_change_dir(rest: str) -> LocalChangeDir:
    (path,) = _take('lcd', tokenize(rest), 1)
    return LocalChangeDir(path)


def _list_dir(rest: str) -> ListDir:
    _take('dir', tokenize(rest), 0)
    return ListDir()


def _get(rest: str) -> Get:
    remote, local = _take('get', tokenize(rest), 2)
    return Get(remote, local)


def _put(rest: str) -> Put:
    local, remote = _take('put', tokenize(rest), 2)
    return Put(local, remote)


def _multi_get(rest: str) -> MultiGet:
    return MultiGet(_parse_names('mget', rest))


def _multi_put(rest: str) -> MultiPut:
    return MultiPut(_parse_names('mput', rest))


def _quit(rest: str) -> Quit:
    _take('quit', tokenize(rest), 0)
    return Quit()


GRAMMAR: dict[str, Callable[[str], Command]] = {
    'open': _open,
    'user': _user,
    'pass': _password,
    'cd': _change_dir,
    'lcd': _local_change_dir,
    'dir': _list_dir,
    'get': _get,
    'put': _put,
    'mget': _multi_get,
    'mput': _multi_put,
    'quit': _quit,
}


def parse_line(text: str) -> Command:
    """Разбирает строку в команду, при ошибке бросает CommandParseError"""
    line = text.strip()
    if not line:
        raise CommandParseError('empty command')

    keyword, _, rest = line.partition(' ')
    parser = GRAMMAR.get(keyword)
    if parser is None:
        raise CommandParseError(f'unknown command {keyword!r}')

    return parser(rest)
