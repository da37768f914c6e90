START_COMMAND = "/start"

def welcome_message(user_message: str, welcome_text: str) -> str:
    # Solo el comando exacto; "/start algo" o " /start" se tratan como texto normal
    if user_message == START_COMMAND:
        return welcome_text

    return ""
