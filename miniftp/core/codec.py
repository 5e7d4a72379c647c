from miniftp.core.command import Command, WireCommand
from miniftp.core.parser import parse_line
from miniftp.utils.constants import FRAME_DELIMITER
from miniftp.utils.exceptions import InvalidMessage, Utf8Error


def encode(command: WireCommand) -> bytes:
    """Кодирует команду в кадр: текст команды и завершающий нулевой байт"""
    if not isinstance(command, WireCommand):
        raise TypeError(f'{type(command).__name__} cannot be sent over the wire')

    text = ' '.join((command.keyword, *command.arguments()))
    return text.encode('utf-8') + FRAME_DELIMITER


def decode(frame: bytes) -> Command:
    """Разбирает кадр, полученный из сети"""
    if not frame:
        raise InvalidMessage('command cannot be empty')
    if not frame.endswith(FRAME_DELIMITER):
        raise InvalidMessage('command message must end in null')

    try:
        text = frame[:-1].decode('utf-8')
    except UnicodeDecodeError as e:
        raise Utf8Error(f'command is not valid UTF-8: {e}') from e

    return parse_line(text)
