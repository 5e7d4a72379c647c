import enum

from miniftp.utils.exceptions import ProtocolError


class ReplyCode(bytes, enum.Enum):
    """Коды ответа сервера на команды аутентификации"""

    OK = b'200\0'
    NOT_FOUND = b'500\0'
    BAD_STATE = b'600\0'

    @property
    def code(self) -> int:
        return int(self.value[:3])

    @classmethod
    def from_bytes(cls, raw: bytes) -> 'ReplyCode':
        try:
            return cls(raw)
        except ValueError as e:
            raise ProtocolError(f'unexpected reply {raw!r}') from e
