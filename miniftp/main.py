import asyncio
import sys
import traceback

import click

from miniftp.client.cli import cli
from miniftp.server.server import serve
from miniftp.utils.exceptions import ConfigError


async def run_server(users_file: str | None = None):
    """Запускает сервер"""
    await serve(users_file)


@cli.command('server')
@click.argument('users_file', required=False, type=click.Path(dir_okay=False))
def server_command(users_file: str | None):
    """Запускает сервер; USERS_FILE - CSV файл вида логин,пароль"""
    try:
        asyncio.run(run_server(users_file))
    except KeyboardInterrupt:
        click.echo('\nСервер отключен')
    except ConfigError as e:
        click.echo(str(e), err=True)
        sys.exit(1)
    except Exception:
        traceback.print_exc()
        sys.exit(1)


def main():
    cli()


if __name__ == '__main__':
    main()
