from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

# --- Modelos Pydantic para los datos de Telegram ---
# Usamos Pydantic para validar y estructurar los datos que Telegram nos envía.
class TelegramUser(BaseModel):
    id: int

class TelegramChat(BaseModel):
    id: int

class TelegramMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message_id: Optional[int] = None
    # 'from' es palabra reservada en Python
    sender: Optional[TelegramUser] = Field(default=None, alias="from")
    chat: TelegramChat
    text: Optional[str] = None # El texto del mensaje es opcional

class TelegramUpdate(BaseModel):
    update_id: Optional[int] = None
    message: Optional[TelegramMessage] = None


# --- Modelos para los mensajes que enviamos ---
class KeyboardButton(BaseModel):
    text: str

class ReplyKeyboardMarkup(BaseModel):
    keyboard: List[List[KeyboardButton]]
    resize_keyboard: Optional[bool] = None
    one_time_keyboard: Optional[bool] = None

class SendMessageRequest(BaseModel):
    """Cuerpo de la llamada sendMessage de la Bot API."""
    chat_id: int
    text: str
    parse_mode: str = "HTML"
    disable_web_page_preview: bool = True
    reply_markup: Optional[ReplyKeyboardMarkup] = None

    def to_json_body(self) -> dict:
        # reply_markup viaja siempre (null si no hay teclado); los campos vacíos del teclado no
        body = self.model_dump(exclude={"reply_markup"})
        body["reply_markup"] = self.reply_markup.model_dump(exclude_none=True) if self.reply_markup else None
        return body
