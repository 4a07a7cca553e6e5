from fastapi import FastAPI

from laiai.auth.api import router as auth_router
from laiai.chat.api import router as chat_router
from laiai.conversations.api import router as conversations_router
from laiai.health.api import router as health_router
from laiai.profiles.api import router as profiles_router
from laiai.quotes.api import router as quotes_router


def configure_routers(app: FastAPI) -> FastAPI:
    app.include_router(auth_router)
    app.include_router(chat_router)
    app.include_router(conversations_router)
    app.include_router(health_router)
    app.include_router(profiles_router)
    app.include_router(quotes_router)
    return app
