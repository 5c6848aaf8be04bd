from __future__ import annotations

import json
from typing import Any, Dict, Sequence

from indutrans.core.languages import display_name

SYSTEM_INSTRUCTION = """
You are an expert industrial translator specializing in manufacturing, engineering, factory automation, and safety protocols.
Your task is to translate a list of input items (likely from Chinese) into the requested target languages.

The input may contain Markdown formatting (bolding, lists, headers like ##). Preserve this formatting in the translations where appropriate.

**Important Rule:**
Do not add a trailing period (.) to the end of the translation, even if the input is a complete sentence. This is for Excel cell data.

**Literal Translation Guidelines (if requested):**
   - For **Terms**: A direct translation of the characters to explain the etymology or structure.
   - For **Sentences**: A direct, structure-preserving translation that closely follows the source text's grammar.

**Context:** Industrial automation, production lines, mechanical engineering, safety protocols, and supply chain.
"""


def build_user_prompt(units: Sequence[str], target_languages: Sequence[str]) -> str:
    langs = "\n".join(f'- {display_name(code)} (key: "{code}")' for code in target_languages)
    return (
        "Please translate the following list of industrial terms into these specific target languages:\n"
        f"{langs}\n\nInput List:\n{json.dumps(list(units), ensure_ascii=False)}"
    )


def build_response_schema(target_languages: Sequence[str]) -> Dict[str, Any]:
    """Array of per-unit objects: ``original`` plus one required string per language."""
    properties: Dict[str, Any] = {
        "original": {"type": "STRING", "description": "The original source text"},
    }
    required = ["original"]
    for code in target_languages:
        properties[code] = {"type": "STRING", "description": f"Translation for {code}"}
        required.append(code)
    return {
        "type": "ARRAY",
        "items": {
            "type": "OBJECT",
            "properties": properties,
            "required": required,
        },
    }


__all__ = ["SYSTEM_INSTRUCTION", "build_user_prompt", "build_response_schema"]
