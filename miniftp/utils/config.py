import os
from dataclasses import dataclass

from miniftp.utils.constants import USERS_FILE

LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class Config:
    """Конфигурация приложения"""

    host: str = str(os.getenv('HOST', '127.0.0.1'))
    port: int = int(os.getenv('PORT', '25000'))

    users_file: str = str(os.getenv('USERS_FILE', str(USERS_FILE)))

    log_level: str = str(os.getenv('LOG_LEVEL', 'INFO'))
    log_to_file: bool = _env_flag('LOG_TO_FILE')

    connect_timeout: float = float(os.getenv('CONNECT_TIMEOUT', '30.0'))
    read_timeout: float = float(os.getenv('READ_TIMEOUT', '300.0'))

    max_frame_size: int = int(os.getenv('MAX_FRAME_SIZE', '65536'))  # 64 KB

    def __post_init__(self):
        # Unknown LOG_LEVEL falls back to INFO
        level = self.log_level.strip().upper()
        self.log_level = level if level in LOG_LEVELS else 'INFO'


config = Config()
