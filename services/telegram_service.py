# services/telegram_service.py

import logging
from typing import Optional

import httpx

from config import Settings
from models.telegram_models import ReplyKeyboardMarkup, SendMessageRequest

logger = logging.getLogger(__name__)


class TelegramNotifier:
    """
    Envía mensajes de texto a un chat de Telegram.
    Los fallos se registran y se descartan: nunca llegan a la respuesta del webhook.
    """
    def __init__(
        self,
        api_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.api_url = api_url
        self._transport = transport
        self.timeout = timeout

    async def send_message(
        self,
        chat_id: int,
        text: str,
        keyboard: Optional[ReplyKeyboardMarkup] = None,
    ) -> bool:
        payload = SendMessageRequest(chat_id=chat_id, text=text, reply_markup=keyboard)
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.api_url}/sendMessage",
                    json=payload.to_json_body(),
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Error al enviar mensaje a Chat ID %s: %s - %s",
                chat_id, e.response.status_code, e.response.text,
            )
            return False
        except httpx.HTTPError as e:
            logger.error("Error de red al enviar mensaje a Chat ID %s: %r", chat_id, e)
            return False

        logger.info("Respuesta enviada a Chat ID %s", chat_id)
        return True


def get_notifier(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> TelegramNotifier:
    return TelegramNotifier(settings.telegram_api_url, transport=transport)
