import asyncio
import atexit
import contextlib
import sys

import click

from miniftp.client.client import FtpClient
from miniftp.core.codec import encode
from miniftp.core.command import Quit
from miniftp.core.parser import parse_line
from miniftp.utils.config import config
from miniftp.utils.constants import PROMPT
from miniftp.utils.exceptions import CommandParseError

_client = None
_loop = None


def get_event_loop():
    """Получает или создает event loop"""
    global _loop
    if _loop is None or _loop.is_closed():
        _loop = asyncio.new_event_loop()
        asyncio.set_event_loop(_loop)
    return _loop


def get_client() -> FtpClient:
    """Получает глобальный экземпляр клиента"""
    global _client
    if _client is None:
        _client = FtpClient()
        atexit.register(cleanup_client)
    return _client


def cleanup_client():
    """Закрывает соединение при выходе из программы"""
    if _client and _loop and not _loop.is_closed():
        with contextlib.suppress(Exception):
            _loop.run_until_complete(_client.disconnect())


def run_async(coro):
    """Запускает корутину в глобальном event loop"""
    return get_event_loop().run_until_complete(coro)


@click.group()
def cli():
    """Клиент и сервер mini-ftp"""
    pass


@cli.command()
@click.argument('line')
def parse(line: str):
    """Разбирает строку команды и показывает ее кадр"""
    try:
        command = parse_line(line)
    except CommandParseError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    click.echo(repr(command))
    if command.wire_legal:
        click.echo(repr(encode(command)))
    else:
        click.echo(f'{command.keyword}: только на стороне клиента')


@cli.command()
@click.option('--host', help='Адрес сервера (IPv4), подключиться сразу')
@click.option('--port', type=click.IntRange(0, 65535), default=config.port, show_default=True, help='Порт сервера')
def interactive(host: str | None, port: int):
    """Запускает интерактивный режим (ftp> )"""
    client = get_client()

    if host:
        try:
            command = parse_line(f'open {host} {port}')
        except CommandParseError as e:
            click.echo(str(e), err=True)
            sys.exit(1)
        run_async(client.execute(command))

    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            click.echo('Quit')
            break
        except KeyboardInterrupt:
            click.echo('\nInterrupted')
            break
        except OSError as e:
            click.echo(f'Ошибка чтения ввода: {e}', err=True)
            run_async(client.disconnect())
            sys.exit(1)

        if not line.strip():
            continue

        try:
            command = parse_line(line)
        except CommandParseError as e:
            click.echo(str(e), err=True)
            continue

        run_async(client.execute(command))
        if isinstance(command, Quit):
            click.echo('Quit')
            break

    run_async(client.disconnect())
