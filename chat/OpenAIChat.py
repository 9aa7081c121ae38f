# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-22
# Updated: 2026-09-18
# Description: OpenAIChat
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Dict, Any, List

from openai import OpenAI

from common.Errors import ConfigurationError
from common.Outcome import Failure, Outcome, Success, KIND_EMPTY, KIND_MALFORMED, KIND_TRANSPORT
from config.Config import Config
from utility.logging_utils import get_class_logger

Message = Dict[str, str]  # {"role": "system"|"user"|"assistant", "content": "..."}


@dataclass
class OpenAIChat:
    """
        Language-model completion client.

        Expected Config fields:
          cfg.openai_api_key: str
          cfg.openai_base_url: str | "" (optional)
          cfg.openai_chat_model: str  (e.g. "gpt-4o", "gpt-4o-mini")

        The OpenAI client is built on first use so a missing key only fails
        the call that needs it.
    """

    cfg: Config
    client: Any = None
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)
        self.model = self.cfg.openai_chat_model or "gpt-4o"
        self.logger.info("OpenAIChat initialised (model=%s)", self.model)

    def _get_client(self) -> Any:
        if self.client is None:
            self.cfg.require(*Config.CHAT_FIELDS, purpose="chat completions")
            self.client = OpenAI(
                api_key=self.cfg.openai_api_key,
                base_url=self.cfg.openai_base_url or None,
            )
        return self.client

    # Standard chat call
    def chat(
            self,
            messages: List[Message],
            temperature: float = 0.0,
            max_tokens: int = 512,
    ) -> Any:
        if not messages:
            raise ValueError("messages must be non-empty.")

        params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        self.logger.debug(
            "Chat request: model=%s temp=%s max_tokens=%s",
            self.model, temperature, max_tokens,
        )

        resp = self._get_client().chat.completions.create(**params)

        self.logger.debug("Raw ChatCompletion response: %r", resp)

        # Return the full response object (NOT just the content)
        return resp

    def complete(
            self,
            *,
            system_prompt: str,
            user_prompt: str,
            max_tokens: int,
            temperature: float,
    ) -> Outcome[str]:
        """
        System + user prompt in, Success(text) or Failure out.
        ConfigurationError is raised, not wrapped.
        """
        messages: List[Message] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]

        try:
            resp = self.chat(messages, temperature=temperature, max_tokens=max_tokens)
        except ConfigurationError:
            raise
        except Exception as e:
            self.logger.warning("Chat completion failed: %s", e)
            return Failure(KIND_TRANSPORT, f"OpenAI API error: {e}", cause=e)

        try:
            content = resp.choices[0].message.content or ""
        except (AttributeError, IndexError, TypeError) as e:
            self.logger.error("Unexpected chat response format: %s", e, exc_info=True)
            return Failure(KIND_MALFORMED, f"Unexpected chat response format: {e}", cause=e)

        content = content.strip()
        if not content:
            return Failure(KIND_EMPTY, "No response from OpenAI")

        self.logger.info("Chat answer generated (model=%s)", getattr(resp, "model", None))
        self.logger.debug("Token usage: %r", getattr(resp, "usage", None))
        return Success(content)

    def healthcheck(self) -> bool:
        try:
            outcome = self.complete(
                system_prompt="You are a test assistant.",
                user_prompt="ping",
                max_tokens=5,
                temperature=0.0,
            )
            return outcome.ok
        except Exception as e:
            self.logger.warning("Chat healthcheck failed: %s", e)
            return False
