# PURPOSE: Render the fixed advisor prompt around the user's free text.
# CONTEXT: The template is a package data file loaded once; the user text is
#          interpolated verbatim (no escaping, no length limits).

from __future__ import annotations
import os
from string import Template

PROMPT_PATH = os.path.join(os.path.dirname(__file__), "prompts", "recommendation_prompt.md")

# Template (not str.format) because the JSON example is full of braces.
with open(PROMPT_PATH, "r", encoding="utf-8") as f:
    PROMPT_TEMPLATE = Template(f.read().strip())


def build_prompt(user_input: str) -> str:
    """
    Embed user_input in the advisor template.

    parameters:
    - user_input: str – the request text exactly as the user typed it.

    returns:
    - str – prompt asking for one JSON object with the Recommendation fields.
    """
    return PROMPT_TEMPLATE.safe_substitute(user_input=user_input)
