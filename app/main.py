from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
import logging
from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.settings import Settings, get_settings
from ecochat.agent import ChatAgent, MissingMessageError, build_agent
from ecochat.providers import ProviderConfigurationError


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("ecochat")


def _as_session_key(value: Any) -> Optional[str]:
    # Numeric ids are stored under their text form.
    if value is None or isinstance(value, str):
        return value
    return str(value)


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = Field(None, description="User's latest message")
    session_id: Optional[str] = Field(
        None, alias="sessionId", description="Client-supplied session key"
    )

    @field_validator("session_id", mode="before")
    @classmethod
    def _session_id_as_text(cls, value: Any) -> Optional[str]:
        return _as_session_key(value)


class ClearSessionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = Field(None, alias="sessionId")

    @field_validator("session_id", mode="before")
    @classmethod
    def _session_id_as_text(cls, value: Any) -> Optional[str]:
        return _as_session_key(value)


def create_app(agent: Optional[ChatAgent] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or (agent.settings if agent else get_settings())
    agent = agent or build_agent(settings)

    app = FastAPI(title="EcoChat", version="1.0.0")
    app.state.agent = agent

    # CORS: allow local frontend during development
    if settings.app_env.lower() in {"dev", "development", "local"}:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
        if request.url.path == "/send":
            return JSONResponse(status_code=400, content={"error": "⚠️ No message provided"})
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.get("/", response_class=PlainTextResponse)
    async def index() -> str:
        return f"🌱 EcoChat backend running with {agent.choice.value} mode"

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/debug")
    async def debug() -> Dict[str, Any]:
        return agent.debug_info()

    @app.post("/send")
    async def send(req: ChatRequest) -> Any:
        try:
            result = await agent.send(req.message, req.session_id)
        except MissingMessageError as e:
            return JSONResponse(status_code=400, content={"error": str(e)})
        except ProviderConfigurationError as e:
            logger.error("Provider misconfigured: %s", e)
            return JSONResponse(status_code=400, content={"error": str(e)})
        except Exception as e:
            logger.exception("Chat processing failed: %s", e)
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Failed to generate reply",
                    "details": str(e),
                    "fallback": agent.fallback_reply(req.message),
                },
            )

        logger.info(
            "Replied on session %s via %s (degraded=%s, %s chars)",
            result.session_id,
            result.api_used,
            result.degraded,
            len(result.reply),
        )
        return {
            "reply": result.reply,
            "api_used": result.api_used,
            "session_id": result.session_id,
            "conversation_length": result.conversation_length,
        }

    @app.post("/clear-session")
    async def clear_session(req: Optional[ClearSessionRequest] = None) -> Dict[str, str]:
        session_id = agent.clear(req.session_id if req else None)
        return {"message": "Session cleared", "session_id": session_id}

    logger.info("EcoChat ready: mode=%s window=%s", agent.choice.value, settings.session_window)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=get_settings().port)
