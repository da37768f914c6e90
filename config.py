import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

# Cargar las variables de entorno desde el archivo .env
load_dotenv()

# --- Umbrales de seguridad que acepta Gemini ---
SAFETY_THRESHOLDS = (
    "BLOCK_NONE",
    "BLOCK_ONLY_HIGH",
    "BLOCK_MEDIUM_AND_ABOVE",
    "BLOCK_LOW_AND_ABOVE",
    "HARM_BLOCK_THRESHOLD_UNSPECIFIED",
)

# --- Valores por defecto ---
# Los placeholders no son credenciales válidas: sin valores reales las llamadas salientes fallan.
DEFAULT_TELEGRAM_TOKEN = "YOUR_BOT_TOKEN"
DEFAULT_GEMINI_API_KEY = "YOUR_GEMINI_API_KEY"
DEFAULT_WELCOME_MESSAGE = "به ربات خوش آمدید."
DEFAULT_ERROR_MESSAGE = "خطایی در پردازش درخواست شما رخ داد."


@dataclass(frozen=True)
class Settings:
    """Configuración inmutable, leída una sola vez al arrancar el proceso."""
    telegram_token: str = DEFAULT_TELEGRAM_TOKEN
    gemini_api_key: str = DEFAULT_GEMINI_API_KEY
    telegram_api_base: str = "https://api.telegram.org"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-1.5-flash"
    system_instruction: str = ""
    safety_threshold: str = "BLOCK_NONE"
    webhook_path: str = "/api/webhook"
    welcome_message: str = DEFAULT_WELCOME_MESSAGE
    error_message: str = DEFAULT_ERROR_MESSAGE
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    def __post_init__(self):
        if not self.telegram_token:
            raise ValueError("TELEGRAM_TOKEN no puede estar vacío")
        if not self.gemini_api_key:
            raise ValueError("GEMINI_API_KEY no puede estar vacío")
        if self.safety_threshold not in SAFETY_THRESHOLDS:
            raise ValueError(f"Umbral de seguridad no soportado: {self.safety_threshold}")
        if not self.webhook_path.startswith("/"):
            raise ValueError(f"WEBHOOK_PATH debe empezar con '/': {self.webhook_path}")

    @property
    def telegram_api_url(self) -> str:
        return f"{self.telegram_api_base.rstrip('/')}/bot{self.telegram_token}"

    @property
    def gemini_api_url(self) -> str:
        return f"{self.gemini_api_base.rstrip('/')}/models/{self.gemini_model}:generateContent"


def load_settings() -> Settings:
    """Construye la configuración a partir de las variables de entorno."""
    return Settings(
        telegram_token=os.getenv("TELEGRAM_TOKEN") or DEFAULT_TELEGRAM_TOKEN,
        gemini_api_key=os.getenv("GEMINI_API_KEY") or DEFAULT_GEMINI_API_KEY,
        telegram_api_base=os.getenv("TELEGRAM_API_BASE", "https://api.telegram.org"),
        gemini_api_base=os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"),
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-1.5-flash"),
        system_instruction=os.getenv("SYSTEM_INSTRUCTION", ""),
        safety_threshold=os.getenv("SAFETY_THRESHOLD", "BLOCK_NONE").upper(),
        webhook_path=os.getenv("WEBHOOK_PATH", "/api/webhook"),
        welcome_message=os.getenv("WELCOME_MESSAGE", DEFAULT_WELCOME_MESSAGE),
        error_message=os.getenv("ERROR_MESSAGE", DEFAULT_ERROR_MESSAGE),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", 8000)),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def configure_logging(settings: Settings):
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
