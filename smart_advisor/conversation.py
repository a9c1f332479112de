"""
Session-scoped conversation state.

PURPOSE:
- Holds the chat transcript, the single current recommendation and the
  in-flight flag for one client session (one Streamlit session or one CLI run).

CONTEXT:
- Nothing is persisted and nothing is shared between sessions. Streamlit keeps
  one instance in st.session_state; the CLI keeps one for the process.
- One writer at a time: submit() ignores new text while a request is in flight.
"""

from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

import structlog

from smart_advisor.errors import TransportError

log = structlog.get_logger(__name__)

WELCOME_TEXT = (
    "Hi! I'm your AI-powered investment advisor. Tell me about your investment goals, "
    "risk tolerance, age, and time horizon, and I'll provide personalized portfolio recommendations."
)
AI_REPLY_TEXT = (
    "I've analyzed your investment goals using advanced AI and created a comprehensive, "
    "personalized portfolio recommendation tailored specifically for your situation."
)
EXPERT_REPLY_TEXT = (
    "Based on your investment profile, I've created a personalized portfolio recommendation "
    "using our expert financial analysis framework."
)
APOLOGY_TEXT = (
    "I apologize, but I'm experiencing technical difficulties processing your request. "
    "This might be due to server connectivity issues. Please try again in a moment, "
    "or try one of the suggested queries below."
)
SUGGESTED_QUERIES = (
    "I'm 25, want aggressive growth for retirement in 40 years",
    "I need low-risk investments with steady income for retirement",
    "I have $50K for 10 years, moderate risk tolerance",
    "Help me invest $10K for my child's college in 15 years",
)


class RecommendationSource(Protocol):
    def get_investment_recommendation(self, user_input: str) -> Dict[str, Any]: ...


@dataclass(frozen=True)
class Message:
    id: str
    text: str
    is_user: bool
    timestamp: datetime
    recommendation: Optional[Dict[str, Any]] = None


def _new_message(text: str, is_user: bool, recommendation: Optional[Dict[str, Any]] = None) -> Message:
    return Message(
        id=uuid.uuid4().hex,
        text=text,
        is_user=is_user,
        timestamp=datetime.now(),
        recommendation=recommendation,
    )


@dataclass
class ConversationState:
    messages: List[Message] = field(default_factory=lambda: [_new_message(WELCOME_TEXT, is_user=False)])
    current_recommendation: Optional[Dict[str, Any]] = None
    is_loading: bool = False
    error: Optional[str] = None

    def add_message(self, text: str, is_user: bool, recommendation: Optional[Dict[str, Any]] = None) -> Message:
        """
        Append a message with a fresh id and the current time.

        raises:
        - ValueError – if a user message is given a recommendation.
        """
        if is_user and recommendation is not None:
            raise ValueError("Only assistant messages can carry a recommendation")
        message = _new_message(text, is_user, recommendation)
        self.messages.append(message)
        return message

    def set_current_recommendation(self, recommendation: Optional[Dict[str, Any]]) -> None:
        self.current_recommendation = recommendation

    def set_loading(self, loading: bool) -> None:
        self.is_loading = loading

    def dismiss_error(self) -> None:
        self.error = None

    def submit(self, user_text: str, client: RecommendationSource) -> Optional[Message]:
        """
        Submit handler for the chat box.

        returns:
        - Message – the assistant reply (with or without a recommendation).
        - None – when the text is blank or a request is already in flight.

        notes:
        - TransportError becomes the error banner plus an apologetic reply;
          any other exception propagates after the loading flag is cleared.
        """
        text = (user_text or "").strip()
        if not text or self.is_loading:
            return None

        self.error = None
        self.add_message(text, is_user=True)
        self.set_loading(True)
        try:
            recommendation = client.get_investment_recommendation(text)
        except TransportError as e:
            log.warning("conversation.request_failed", status_code=e.status_code)
            self.error = str(e)
            return self.add_message(APOLOGY_TEXT, is_user=False)
        finally:
            self.set_loading(False)

        reply = AI_REPLY_TEXT if recommendation.get("isAI") else EXPERT_REPLY_TEXT
        message = self.add_message(reply, is_user=False, recommendation=recommendation)
        self.set_current_recommendation(recommendation)
        return message
