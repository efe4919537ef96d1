import os
import logging
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass
class Settings:
    api_key: str = ""
    base_url: str = None
    model_name: str = "gpt-4o-mini"
    max_tokens: int = 128000  # model's context window
    completion_timeout: float = 60.0  # seconds
    upload_purpose: str = "fine-tune"
    token_estimator: str = "words"  # "words" or "tiktoken"
    host: str = "0.0.0.0"
    port: int = 8080
    log_file: str = "chatbot.log"


def load_settings(env=None, interactive=False) -> Settings:
    """
    Reads settings from the environment (after loading a .env file if present).
    With interactive=True, a missing API key or model name is asked for on the
    console instead.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    settings = Settings(
        api_key=env.get("OPENAI_API_KEY", "").strip(),
        base_url=env.get("OPENAI_BASE_URL") or None,
        model_name=env.get("CHAT_MODEL", "").strip(),
        max_tokens=int(env.get("CHAT_MAX_TOKENS", Settings.max_tokens)),
        completion_timeout=float(env.get("CHAT_COMPLETION_TIMEOUT", Settings.completion_timeout)),
        upload_purpose=env.get("CHAT_UPLOAD_PURPOSE", Settings.upload_purpose),
        token_estimator=env.get("CHAT_TOKEN_ESTIMATOR", Settings.token_estimator).strip().lower(),
        host=env.get("CHAT_HOST", Settings.host),
        port=int(env.get("CHAT_PORT", Settings.port)),
        log_file=env.get("CHAT_LOG_FILE", Settings.log_file),
    )

    if interactive and not settings.api_key:
        settings.api_key = input("Enter API Key: ").strip()
    if interactive and not settings.model_name:
        settings.model_name = input(f"Enter Model Name (default {Settings.model_name}): ").strip()
    if not settings.model_name:
        settings.model_name = Settings.model_name

    if settings.max_tokens <= 0:
        raise ValueError("CHAT_MAX_TOKENS must be positive")
    logging.info("Loaded settings: model=%s, max_tokens=%d, estimator=%s",
                 settings.model_name, settings.max_tokens, settings.token_estimator)
    return settings
