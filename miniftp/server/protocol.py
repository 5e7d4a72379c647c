from miniftp.core.codec import decode
from miniftp.core.command import Command
from miniftp.core.replies import ReplyCode
from miniftp.core.transport import FrameStream
from miniftp.utils.exceptions import CommandParseError, InvalidMessage, Utf8Error
from miniftp.utils.logger import server_logger


class ServerProtocol:
    """Протокол для обработки команд от клиента"""

    @staticmethod
    def decode_command(frame: bytes, addr: tuple) -> Command | None:
        """Разбирает кадр; некорректный кадр логируется и пропускается"""
        try:
            return decode(frame)
        except (InvalidMessage, Utf8Error, CommandParseError) as e:
            server_logger.info(f'Некорректная команда от {addr[0]}:{addr[1]}: {e}')
            return None

    @staticmethod
    async def send_reply(stream: FrameStream, reply: ReplyCode):
        """Отправляет код ответа клиенту"""
        await stream.write_all(reply.value)
        await stream.flush()
