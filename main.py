import logging

import uvicorn
from openai import OpenAI

from budget import ContextBudgetManager
from config import load_settings
from orchestrator import ConversationOrchestrator
from server import create_app
from services import OpenAICompletionService, OpenAIFileService
from tokens import build_estimator
from utils import setup_logging


def build_app(settings):
    """Wires the OpenAI client, services and orchestrator into the HTTP app."""
    # Turns are never retried, so the client must not retry on its own either.
    client = OpenAI(api_key=settings.api_key, base_url=settings.base_url, max_retries=0)
    estimator = build_estimator(settings.token_estimator, settings.model_name)
    file_service = OpenAIFileService(client, purpose=settings.upload_purpose)
    orchestrator = ConversationOrchestrator(
        estimator=estimator,
        budget_manager=ContextBudgetManager(estimator),
        completion_service=OpenAICompletionService(client, settings.model_name, timeout=settings.completion_timeout),
        file_service=file_service,
        budget=settings.max_tokens,
    )
    return create_app(orchestrator, file_service)


def main():
    """
    Starts the chat relay:
    - reads settings from the environment / .env (asking for the API key if missing),
    - keeps one history per session id, trimmed oldest-first to the token budget,
    - serves /chat and /upload over HTTP.
    """
    settings = load_settings(interactive=True)
    setup_logging(settings.log_file)
    logging.info("Chat relay starting on %s:%d with model %s", settings.host, settings.port, settings.model_name)

    try:
        app = build_app(settings)
        uvicorn.run(app, host=settings.host, port=settings.port)
    except Exception:
        logging.critical("Fatal error while running the server", exc_info=True)
        raise

if __name__ == "__main__":
    main()
