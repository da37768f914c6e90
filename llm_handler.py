# llm_handler.py
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from config import Settings
from models.gemini_models import GenerateContentRequest

logger = logging.getLogger(__name__)

INVALID_RESPONSE = "invalid response from completion service"


class CompletionError(Exception):
    """
    Error al obtener una respuesta del servicio de completado.
    Siempre lleva una causa legible en `cause`, venga de donde venga el fallo.
    """
    def __init__(self, cause: str):
        self.cause = cause
        super().__init__(f"Gemini API Error: {cause}")

# ------------------- DEFINICIÓN DE LA INTERFAZ (CLASE ABSTRACTA) -------------------
class LLM(ABC):
    """
    Clase Base Abstracta que define la interfaz para cualquier modelo de lenguaje.
    Cualquier nuevo LLM que se agregue deberá heredar de esta clase.
    """
    @abstractmethod
    async def talk(self, system: str, prompt: str) -> str:
        """
        Toma una instrucción de sistema y un prompt y devuelve el texto generado.
        Debe lanzar CompletionError ante cualquier fallo.
        """
        pass

# ------------------- IMPLEMENTACIÓN PARA GEMINI -------------------
class GeminiLLM(LLM):
    """Cliente REST de generateContent; la API key viaja como parámetro `key` de la URL."""
    def __init__(
        self,
        api_key: str,
        api_url: str,
        safety_threshold: str = "BLOCK_NONE",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        if not api_key:
            raise ValueError("No se proporcionó la API Key de Google Gemini.")
        self.api_key = api_key
        self.api_url = api_url
        self.safety_threshold = safety_threshold
        self._transport = transport
        # Sin timeout por defecto: las respuestas largas de Gemini tardan más que los 5s de httpx
        self.timeout = timeout

    def review_request(self, system: str, prompt: str) -> dict:
        request = GenerateContentRequest.build(system, prompt, self.safety_threshold)
        return request.model_dump()

    async def talk(self, system: str, prompt: str) -> str:
        payload = self.review_request(system, prompt)
        logger.debug("Generando respuesta con Gemini para un prompt de %d caracteres", len(prompt))
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(
                    self.api_url,
                    params={"key": self.api_key},
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CompletionError(
                f"Request failed with status code {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise CompletionError(str(e) or type(e).__name__) from e

        try:
            data = response.json()
        except ValueError as e:
            raise CompletionError(INVALID_RESPONSE) from e
        return extract_text(data)


def extract_text(data: Any) -> str:
    """Recorre candidates[0].content.parts[0].text; cualquier paso ausente es un error."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise CompletionError(INVALID_RESPONSE) from e
    if not isinstance(text, str) or not text:
        raise CompletionError(INVALID_RESPONSE)
    return text

# ------------------- FÁBRICA (FACTORY) PARA SELECCIONAR EL LLM -------------------
def get_llm_instance(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> LLM:
    """
    Devuelve el cliente de completado configurado.
    Este es el único lugar que necesitas modificar si agregas un nuevo proveedor.
    """
    return GeminiLLM(
        api_key=settings.gemini_api_key,
        api_url=settings.gemini_api_url,
        safety_threshold=settings.safety_threshold,
        transport=transport,
    )
