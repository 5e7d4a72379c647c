class MiniFtpError(Exception):
    """Базовое исключение mini-ftp"""

    pass


class CommandParseError(MiniFtpError):
    """Некорректный текст команды"""

    def __init__(self, detail: str):
        super().__init__(f'invalid command: {detail}')
        self.detail = detail


class InvalidMessage(MiniFtpError):
    """Нарушение формата кадра: пустой кадр или нет завершающего нуля"""

    def __init__(self, detail: str):
        super().__init__(f'invalid message: {detail}')
        self.detail = detail


class Utf8Error(MiniFtpError):
    """Тело кадра не является корректным UTF-8"""

    pass


class FtpConnectionError(MiniFtpError):
    """Ошибка соединения: подключение, чтение, запись или таймаут"""

    pass


class ProtocolError(MiniFtpError):
    """Ошибка протокола обмена данными"""

    pass


class SessionStateError(MiniFtpError):
    """Команда недопустима в текущем состоянии сессии"""

    pass


class ConfigError(MiniFtpError):
    """Ошибка конфигурации при запуске"""

    pass
