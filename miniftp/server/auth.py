import csv
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from miniftp.utils.config import config
from miniftp.utils.exceptions import ConfigError


class UserTable:
    """Таблица пользователей сервера, загружается один раз при запуске"""

    def __init__(self, users_file: Path | str = config.users_file):
        self.users_file = Path(users_file)
        self.users: Mapping[str, str] = MappingProxyType(self._load_users())

    def _load_users(self) -> dict[str, str]:
        """Загружает пары логин,пароль из CSV файла без заголовка"""
        users: dict[str, str] = {}
        try:
            with self.users_file.open(encoding='utf-8', newline='') as f:
                for line_no, row in enumerate(csv.reader(f), start=1):
                    if not row or all(not cell.strip() for cell in row):
                        continue
                    if len(row) != 2 or not row[0]:
                        raise ConfigError(f'{self.users_file}:{line_no}: ожидается строка вида логин,пароль')
                    login, password = row
                    users[login] = password
        except OSError as e:
            raise ConfigError(f'Не удалось прочитать файл пользователей {self.users_file}: {e}') from e
        except (csv.Error, UnicodeDecodeError) as e:
            raise ConfigError(f'Некорректный файл пользователей {self.users_file}: {e}') from e
        return users

    def __len__(self) -> int:
        return len(self.users)

    def __contains__(self, login: object) -> bool:
        return login in self.users
