"""
Amazon Bedrock completion client.

PURPOSE: One Converse call per recommendation: prompt in, raw completion text out.
CONTEXT: Constructed once at startup from Settings and handed to the service.
         Credentials come from the environment (AWS_BEARER_TOKEN_BEDROCK or the
         usual AWS chain); retries/backoff are whatever botocore does by default.
"""

from __future__ import annotations
from typing import Any, Optional

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from smart_advisor.errors import ProviderError

log = structlog.get_logger(__name__)

INFERENCE_CONFIG = {"maxTokens": 2048, "temperature": 0.2}


class BedrockCompletionClient:
    """
    Thin wrapper over bedrock-runtime converse.

    parameters:
    - model_id: str – fixed Bedrock model identifier (e.g. deepseek.v3-v1:0).
    - region: str – AWS region hosting the model.
    - client: optional pre-built bedrock-runtime client (tests pass a fake).
    """

    def __init__(self, model_id: str, region: str, client: Optional[Any] = None):
        self.model_id = model_id
        self.region = region
        self._client = client if client is not None else boto3.client("bedrock-runtime", region_name=region)

    def complete(self, prompt: str) -> str:
        """
        Send a single user turn and return the model's text.

        raises:
        - ProviderError – on botocore/transport errors or an empty reply.
        """
        try:
            resp = self._client.converse(
                modelId=self.model_id,
                messages=[{"role": "user", "content": [{"text": prompt}]}],
                inferenceConfig=INFERENCE_CONFIG,
            )
        except (BotoCoreError, ClientError) as e:
            raise ProviderError(f"Bedrock converse failed: {e}") from e

        # Shape: resp["output"]["message"]["content"] is a list of blocks; only
        # text blocks matter here.
        message = ((resp or {}).get("output") or {}).get("message") or {}
        blocks = message.get("content") or []
        text = "".join(b.get("text", "") for b in blocks if isinstance(b, dict)).strip()
        if not text:
            raise ProviderError("Bedrock returned an empty completion")

        usage = (resp or {}).get("usage") or {}
        log.info(
            "bedrock.completion",
            model_id=self.model_id,
            input_tokens=usage.get("inputTokens"),
            output_tokens=usage.get("outputTokens"),
            chars=len(text),
        )
        return text
