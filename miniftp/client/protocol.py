from miniftp.core.codec import encode
from miniftp.core.command import WireCommand
from miniftp.core.replies import ReplyCode
from miniftp.core.transport import FrameStream
from miniftp.utils.constants import REPLY_SIZE


class ClientProtocol:
    """Протокол для взаимодействия с сервером"""

    @staticmethod
    async def send_command(stream: FrameStream, command: WireCommand) -> None:
        """Отправляет команду серверу"""
        await stream.write_all(encode(command))
        await stream.flush()

    @staticmethod
    async def read_reply(stream: FrameStream) -> ReplyCode:
        """Читает 4-байтный код ответа, неизвестный код - ProtocolError"""
        raw = await stream.read_exactly(REPLY_SIZE)
        return ReplyCode.from_bytes(raw)
