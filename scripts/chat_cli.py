#!/usr/bin/env python3
# PURPOSE: Terminal chat with the recommendation API.
# CONTEXT: Same client and conversation state as the Streamlit UI, without the charts.
#          Type ":report" to print the text report of the last recommendation.

import sys

from smart_advisor.client import RecommendationClient
from smart_advisor.config import load_settings
from smart_advisor.conversation import ConversationState
from smart_advisor.export import build_report


def main() -> int:
    settings = load_settings()
    client = RecommendationClient(settings.api_base_url, timeout=settings.request_timeout)
    conv = ConversationState()

    print(conv.messages[0].text)
    print("Type your message and press Enter. Ctrl+C to exit.")

    while True:
        try:
            text = input("> ")
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return 0

        if text.strip() == ":report":
            if conv.current_recommendation is None:
                print("No recommendation yet.")
            else:
                print(build_report(conv.current_recommendation))
            continue

        reply = conv.submit(text, client)
        if reply is None:
            continue
        if conv.error:
            print(f"[error] {conv.error}")
            conv.dismiss_error()
        print(reply.text)
        rec = reply.recommendation
        if rec:
            alloc = ", ".join(f"{k} {v}%" for k, v in rec["portfolio"].items() if v)
            source = "AI" if rec.get("isAI") else "mock"
            print(f"  [{source}] {alloc} | risk {rec.get('riskScore')}/10")


if __name__ == "__main__":
    sys.exit(main())
