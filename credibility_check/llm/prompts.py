"""Prompt loading and rendering for the credibility assessment."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path

from ..core.types import (
    FAKE_ARTICLE_TYPE_DESCRIPTIONS,
    FAKE_ARTICLE_TYPES,
    NEGATIVE_MARKERS,
    NO_TYPE,
    ORDINAL_TO_TYPE,
    POSITIVE_MARKERS,
    SCORE_THRESHOLD,
)


_PROMPT_DIR = Path(__file__).resolve().parent.parent / "prompts"


class PromptMode(str, Enum):
    """Assessment depth.

    QUICK scores the text and names a category by ordinal.
    FULL also asks for a summary, search keywords and a rationale.
    """

    QUICK = "quick"
    FULL = "full"


@lru_cache(maxsize=None)
def _load_template(name: str) -> str:
    path = _PROMPT_DIR / f"{name}.md"
    return path.read_text(encoding="utf-8").strip()


def _render_template(name: str, **values: str) -> str:
    template = _load_template(name)
    return template.format(**values)


def _quoted(phrases: tuple[str, ...] | list[str], quote: str = "'") -> str:
    return ", ".join(f"{quote}{phrase}{quote}" for phrase in phrases)


def build_prompt(article_text: str, mode: PromptMode | str, min_reason_chars: int = 200) -> str:
    """Render the assessment prompt for an article.

    The output-format lines embedded in the templates are the labels the
    response parser anchors on, so both sides read the same tables.

    Raises:
        ValueError: If mode is not a known PromptMode
    """
    mode = PromptMode(mode)
    common = {
        "positive_markers": _quoted(POSITIVE_MARKERS),
        "negative_markers": _quoted(NEGATIVE_MARKERS),
        "threshold": str(SCORE_THRESHOLD),
        "type_count": str(len(FAKE_ARTICLE_TYPES)),
        "no_type": NO_TYPE,
        "content": article_text,
    }

    if mode is PromptMode.QUICK:
        type_list = "\n".join(f"   - {ordinal}: {name}" for ordinal, name in ORDINAL_TO_TYPE.items())
        return _render_template("quick", type_list=type_list, **common)

    type_list = "\n".join(
        f"   - {name}: {FAKE_ARTICLE_TYPE_DESCRIPTIONS[name]}" for name in FAKE_ARTICLE_TYPES
    )
    return _render_template(
        "full",
        type_list=type_list,
        type_names=_quoted(FAKE_ARTICLE_TYPES, quote='"'),
        min_reason_chars=str(min_reason_chars),
        **common,
    )
