from typing import List
from pydantic import BaseModel

# Categorías de daño que se envían siempre, en este orden.
HARM_CATEGORIES = (
    "HARM_CATEGORY_DANGEROUS_CONTENT",
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
)

class Part(BaseModel):
    text: str

class Content(BaseModel):
    parts: List[Part]

class SafetySetting(BaseModel):
    category: str
    threshold: str

class GenerateContentRequest(BaseModel):
    """Cuerpo de la llamada generateContent de Gemini."""
    system_instruction: Content
    contents: List[Content]
    safetySettings: List[SafetySetting]

    @classmethod
    def build(cls, system: str, prompt: str, threshold: str = "BLOCK_NONE") -> "GenerateContentRequest":
        return cls(
            system_instruction=Content(parts=[Part(text=system)]),
            contents=[Content(parts=[Part(text=prompt)])],
            safetySettings=[
                SafetySetting(category=category, threshold=threshold)
                for category in HARM_CATEGORIES
            ],
        )
