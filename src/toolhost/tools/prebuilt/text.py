"""Text utility tools: analysis, case conversion and extraction. Stateless."""

from __future__ import annotations

import re

from toolhost.foundation.core import ParamKind, param
from toolhost.foundation.errors import ErrorCode, ToolException
from toolhost.foundation.registry import ToolRegistry
from toolhost.records import TextStats

ELLIPSIS = "..."

_WHITESPACE = re.compile(r"[ \t\r\n]+")
_SENTENCE = re.compile(r"[.!?]+")
_PARAGRAPH_BREAK = re.compile(r"\r\n\r\n|\n\n")
_EMAIL = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_URL = re.compile(r"https?://[^\s<>\"']+")
_SLUG_INVALID = re.compile(r"[^a-z0-9\-]")
_HYPHENS = re.compile(r"-+")


def analyze_text(text: str) -> TextStats:
    if not text:
        return TextStats()
    return TextStats(
        words=len([w for w in _WHITESPACE.split(text) if w]),
        characters=len(text),
        characters_without_spaces=len(_WHITESPACE.sub("", text)),
        lines=len(text.split("\n")),
        sentences=len(_SENTENCE.findall(text)),
        paragraphs=len([p for p in _PARAGRAPH_BREAK.split(text) if p]),
    )


def _title_case(text: str) -> str:
    return " ".join(w[0].upper() + w[1:].lower() for w in text.split(" ") if w)


def _sentence_case(text: str) -> str:
    chars = list(text.lower())
    capitalize = True
    for i, c in enumerate(chars):
        if capitalize and c.isalpha():
            chars[i] = c.upper()
            capitalize = False
        elif c in ".!?":
            capitalize = True
    return "".join(chars)


def _toggle_case(text: str) -> str:
    return "".join(c.lower() if c.isupper() else c.upper() for c in text)


_CASES = {
    "upper": str.upper,
    "lower": str.lower,
    "title": _title_case,
    "sentence": _sentence_case,
    "toggle": _toggle_case,
}


def convert_case(text: str, case_type: str) -> str:
    """Unknown case types return the text unchanged."""
    if not text:
        return text
    convert = _CASES.get(case_type.strip().lower())
    return convert(text) if convert else text


def reverse_text(text: str) -> str:
    return text[::-1]


def remove_duplicate_lines(text: str, case_sensitive: bool = True) -> str:
    """Keep the first occurrence of each line, in order."""
    if not text:
        return text
    seen: set[str] = set()
    kept: list[str] = []
    for line in text.split("\n"):
        key = line if case_sensitive else line.casefold()
        if key not in seen:
            seen.add(key)
            kept.append(line)
    return "\n".join(kept)


def extract_emails(text: str) -> list[str]:
    return list(dict.fromkeys(_EMAIL.findall(text))) if text else []


def extract_urls(text: str) -> list[str]:
    return list(dict.fromkeys(_URL.findall(text))) if text else []


def slugify(text: str) -> str:
    """Lowercase, spaces to hyphens, drop anything outside [a-z0-9-], collapse and trim hyphens.

    Example:
        >>> slugify("My Awesome Blog Post Title!")
        'my-awesome-blog-post-title'
    """
    if not text:
        return text
    slug = _SLUG_INVALID.sub("", text.lower().replace(" ", "-"))
    return _HYPHENS.sub("-", slug).strip("-")


def truncate(text: str, max_length: int, add_ellipsis: bool = True) -> str:
    """Shorten `text` to at most `max_length` characters.

    Trailing whitespace at the cut is stripped before the ellipsis is
    appended, so the result may come out shorter than `max_length`. Below
    three characters there is no room for an ellipsis and it is dropped.
    """
    if max_length < 0:
        raise ToolException.create(
            "Truncate", f"maxLength must be non-negative, got {max_length}",
            ErrorCode.INVALID_PARAMS, recoverable=False,
        )
    if not text or len(text) <= max_length:
        return text
    ellipsis = add_ellipsis and max_length >= len(ELLIPSIS)
    cut = text[: max_length - len(ELLIPSIS) if ellipsis else max_length].rstrip()
    return cut + ELLIPSIS if ellipsis else cut


def register_text_tools(registry: ToolRegistry) -> None:
    text = param("text", ParamKind.STRING, "The text to process")
    reg = lambda name, desc, fn, *ps: registry.add(name, desc, fn, *ps, category="text")  # noqa: E731

    reg("AnalyzeText",
        "Analyzes text and returns word count, character count (with and without spaces), and line count.",
        analyze_text, param("text", ParamKind.STRING, "The text to analyze"))
    reg("ConvertCase", "Converts text to different cases: upper, lower, title, sentence, or toggle.", convert_case,
        param("text", ParamKind.STRING, "The text to convert"),
        param("caseType", ParamKind.STRING, "Case type: 'upper', 'lower', 'title', 'sentence', or 'toggle'"))
    reg("ReverseText", "Reverses the characters in the given text.", reverse_text, text)
    reg("RemoveDuplicateLines", "Removes duplicate lines from the text, keeping only unique lines.",
        remove_duplicate_lines,
        param("text", ParamKind.STRING, "The text with potentially duplicate lines"),
        param("caseSensitive", ParamKind.BOOLEAN, "Whether comparison should be case-sensitive. Defaults to true.",
              default=True))
    reg("ExtractEmails", "Extracts all email addresses found in the given text.", extract_emails,
        param("text", ParamKind.STRING, "The text to search for email addresses"))
    reg("ExtractUrls", "Extracts all URLs found in the given text.", extract_urls,
        param("text", ParamKind.STRING, "The text to search for URLs"))
    reg("Slugify",
        "Converts text to a URL-friendly slug (lowercase, hyphens instead of spaces, no special characters).",
        slugify, param("text", ParamKind.STRING, "The text to convert to a slug"))
    reg("Truncate", "Truncates text to a specified maximum length, optionally adding an ellipsis.", truncate,
        text,
        param("maxLength", ParamKind.INTEGER, "Maximum length of the result"),
        param("addEllipsis", ParamKind.BOOLEAN, "Whether to add '...' at the end. Defaults to true.", default=True))
