"""
Runtime configuration.

PURPOSE:
- Read every environment knob once and freeze it into a Settings value.
- The Settings value is built at startup and passed explicitly to the service,
  the HTTP app and the client; nothing reads os.environ after that.

CONTEXT:
- A local .env file is honoured (python-dotenv) so the API key can live outside
  the shell profile during development.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Tuple

from dotenv import load_dotenv


DEFAULT_MODEL_ID = "deepseek.v3-v1:0"
DEFAULT_REGION = "eu-west-2"
DEFAULT_PORT = 3001
DEFAULT_TIMEOUT_S = 30.0
DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://localhost:8501")


def _split_csv(value: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """
    Immutable application settings.

    attributes:
    - bedrock_api_key: the single optional AI credential. boto3 reads it from
      AWS_BEARER_TOKEN_BEDROCK on its own; we only need to know if it is set.
    - use_bedrock: kill switch, lets tests and demos force the mock path.
    """

    bedrock_api_key: str | None = None
    use_bedrock: bool = True
    model_id: str = DEFAULT_MODEL_ID
    region: str = DEFAULT_REGION
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)
    api_base_url: str = f"http://localhost:{DEFAULT_PORT}/api"
    request_timeout: float = DEFAULT_TIMEOUT_S
    env: str = "dev"

    @property
    def ai_enabled(self) -> bool:
        return bool(self.bedrock_api_key) and self.use_bedrock


def load_settings() -> Settings:
    """
    Build Settings from the process environment (after loading .env, if any).

    returns:
    - Settings – frozen configuration value.

    raises:
    - ValueError – if PORT or REQUEST_TIMEOUT are not numbers.
    """
    load_dotenv()
    port = int(os.getenv("PORT", str(DEFAULT_PORT)))
    origins = os.getenv("CORS_ORIGINS")
    return Settings(
        bedrock_api_key=os.getenv("AWS_BEARER_TOKEN_BEDROCK") or None,
        use_bedrock=os.getenv("USE_BEDROCK", "1") != "0",
        model_id=os.getenv("MODEL_ID", DEFAULT_MODEL_ID),
        region=os.getenv("AWS_REGION", DEFAULT_REGION),
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        cors_origins=_split_csv(origins) if origins else DEFAULT_CORS_ORIGINS,
        api_base_url=os.getenv("API_BASE_URL", f"http://localhost:{port}/api"),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", str(DEFAULT_TIMEOUT_S))),
        env=os.getenv("ENV", "dev"),
    )
