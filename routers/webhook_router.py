# routers/webhook_router.py

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

import llm_handler
from config import Settings, get_settings
from llm_handler import LLM, CompletionError
from models.telegram_models import TelegramUpdate
from services import TelegramNotifier, get_notifier, welcome_message

logger = logging.getLogger(__name__)

# Telegram solo envía POST, pero la ruta acepta cualquier método para responder 405 con nuestro cuerpo
WEBHOOK_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "TRACE", "CONNECT"]


# --- DEPENDENCIAS (reemplazables en los tests vía app.dependency_overrides) ---
def get_llm(settings: Settings = Depends(get_settings)) -> LLM:
    return llm_handler.get_llm_instance(settings)

def get_telegram_notifier(settings: Settings = Depends(get_settings)) -> TelegramNotifier:
    return get_notifier(settings)


async def telegram_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
    llm: LLM = Depends(get_llm),
    notifier: TelegramNotifier = Depends(get_telegram_notifier),
):
    """
    Recibe los updates de Telegram, pasa el texto a Gemini
    y devuelve la respuesta generada al mismo chat.
    Telegram siempre recibe 200 (salvo el 405) para que no reintente la entrega.
    """
    if request.method != "POST":
        return JSONResponse(status_code=405, content={"message": "Method not allowed"})

    try:
        update = TelegramUpdate.model_validate(await request.json())
    except ValueError as e:
        logger.warning("Update de Telegram inválido, se ignora: %s", e)
        return Response(status_code=200)

    if not update.message:
        return Response(status_code=200)

    message = update.message
    chat_id = message.chat.id
    from_id = message.sender.id if message.sender else None
    user_message = message.text

    # Fotos, stickers, etc. no traen texto
    if not user_message:
        return Response(status_code=200)

    logger.info("Mensaje recibido de usuario %s en Chat ID %s", from_id, chat_id)

    # Se fija si es el comando /start
    response_text = welcome_message(user_message, settings.welcome_message)
    if response_text != "":
        await notifier.send_message(chat_id, response_text)
        return Response(status_code=200)

    try:
        response_text = await llm.talk(settings.system_instruction, user_message)
    except CompletionError as e:
        logger.error("Error al generar la respuesta para Chat ID %s: %s", chat_id, e)
        response_text = settings.error_message
    except Exception:
        logger.exception("Error inesperado al generar la respuesta para Chat ID %s", chat_id)
        response_text = settings.error_message

    await notifier.send_message(chat_id, response_text)
    return Response(status_code=200)


def create_router(webhook_path: str) -> APIRouter:
    router = APIRouter(tags=["Telegram"])
    router.add_api_route(
        webhook_path,
        telegram_webhook,
        methods=WEBHOOK_METHODS,
        summary="Webhook de Telegram",
    )
    return router
