import pytest
from fastapi.testclient import TestClient

from config import Settings
from llm_handler import LLM
from main import create_app
from routers.webhook_router import get_llm, get_telegram_notifier


class FakeLLM(LLM):
    """Registra las llamadas; devuelve `reply` o lanza `error`."""
    def __init__(self, reply="respuesta generada", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def talk(self, system, prompt):
        self.calls.append((system, prompt))
        if self.error is not None:
            raise self.error
        return self.reply


class FakeNotifier:
    def __init__(self):
        self.sent = []

    async def send_message(self, chat_id, text, keyboard=None):
        self.sent.append((chat_id, text))
        return True


@pytest.fixture
def settings():
    return Settings(
        telegram_token="123:TEST",
        gemini_api_key="test-key",
        telegram_api_base="https://telegram.test",
        gemini_api_base="https://gemini.test/v1beta",
        system_instruction="sé breve",
    )


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def fake_notifier():
    return FakeNotifier()


@pytest.fixture
def app(settings, fake_llm, fake_notifier):
    app = create_app(settings)
    app.dependency_overrides[get_llm] = lambda: fake_llm
    app.dependency_overrides[get_telegram_notifier] = lambda: fake_notifier
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


def make_update(text=None, chat_id=42, from_id=7, **extra):
    message = {"message_id": 1, "from": {"id": from_id, "is_bot": False}, "chat": {"id": chat_id, "type": "private"}}
    if text is not None:
        message["text"] = text
    message.update(extra)
    return {"update_id": 1000, "message": message}
