import asyncio
import json

import httpx

from models.telegram_models import KeyboardButton, ReplyKeyboardMarkup
from services import START_COMMAND, get_notifier, welcome_message
from services.telegram_service import TelegramNotifier

API_URL = "https://telegram.test/bot123:TEST"


def recording_notifier(status=200):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(status, json={"ok": status == 200})

    return TelegramNotifier(API_URL, transport=httpx.MockTransport(handler)), requests


def test_send_message_payload():
    notifier, requests = recording_notifier()

    assert asyncio.run(notifier.send_message(42, "<b>hola</b>")) is True

    (request,) = requests
    assert str(request.url) == f"{API_URL}/sendMessage"
    assert json.loads(request.content) == {
        "chat_id": 42,
        "text": "<b>hola</b>",
        "parse_mode": "HTML",
        "disable_web_page_preview": True,
        "reply_markup": None,
    }


def test_send_message_with_keyboard():
    notifier, requests = recording_notifier()
    keyboard = ReplyKeyboardMarkup(keyboard=[[KeyboardButton(text="Sí"), KeyboardButton(text="No")]], resize_keyboard=True)

    asyncio.run(notifier.send_message(42, "¿seguimos?", keyboard=keyboard))

    body = json.loads(requests[0].content)
    assert body["reply_markup"] == {"keyboard": [[{"text": "Sí"}, {"text": "No"}]], "resize_keyboard": True}


def test_error_status_is_swallowed(caplog):
    notifier, requests = recording_notifier(status=403)

    assert asyncio.run(notifier.send_message(42, "hola")) is False
    assert len(requests) == 1
    assert "403" in caplog.text


def test_network_error_is_swallowed():
    def handler(request):
        raise httpx.ReadTimeout("timeout", request=request)

    notifier = TelegramNotifier(API_URL, transport=httpx.MockTransport(handler))

    assert asyncio.run(notifier.send_message(42, "hola")) is False


def test_get_notifier_uses_token(settings):
    assert get_notifier(settings).api_url == "https://telegram.test/bot123:TEST"


def test_welcome_message_only_for_exact_command():
    assert welcome_message(START_COMMAND, "bienvenido") == "bienvenido"
    assert welcome_message("/start ", "bienvenido") == ""
    assert welcome_message("/START", "bienvenido") == ""
    assert welcome_message("hola", "bienvenido") == ""


def test_send_message_has_no_timeout():
    notifier, requests = recording_notifier()

    asyncio.run(notifier.send_message(42, "hola"))

    assert set(requests[0].extensions["timeout"].values()) == {None}
