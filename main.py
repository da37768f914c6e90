from typing import Optional

import uvicorn
from fastapi import FastAPI

import config
from config import Settings
from routers import webhook_router


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Crea la aplicación. Si se pasa `settings` se usa en lugar de la configuración
    leída del entorno (útil para tests con credenciales falsas).
    """
    settings = settings or config.get_settings()
    config.configure_logging(settings)

    # --- INICIALIZACIÓN DE LA APP ---
    app = FastAPI(
        title="Bot de Telegram con Gemini",
        description="Recibe mensajes de Telegram, los responde con Gemini y envía la respuesta al chat.",
        version="1.0.0",
    )
    app.dependency_overrides[config.get_settings] = lambda: settings

    # --- INCLUIR ROUTERS ---
    app.include_router(webhook_router.create_router(settings.webhook_path))

    @app.get("/", tags=["Root"])
    def read_root():
        """Endpoint raíz para verificar que la API está funcionando."""
        return {"status": "ok", "message": f"Webhook escuchando en {settings.webhook_path}"}

    return app


app = create_app()

# --- EJECUCIÓN ---
if __name__ == "__main__":
    settings = config.get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
