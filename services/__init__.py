# services/__init__.py

# Importamos las funciones "públicas" de cada módulo para que
# puedan ser accedidas directamente desde el paquete 'services'.

from .telegram_service import TelegramNotifier, get_notifier
from .welcome_service import START_COMMAND, welcome_message
