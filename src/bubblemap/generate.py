"""Turn free-form text into a topic tree via a chat-completions endpoint."""

import json
import os
import re

import requests

from .errors import GenerationError, TreeStructureError
from .layout.walk import validate_tree

DEFAULT_URL = "http://localhost:8001/v1/chat/completions"
DEFAULT_MODEL = "local"

SYSTEM_PROMPT = (
    'You generate mind-map JSON. Return ONLY JSON, no prose. Schema: {"name": string, '
    '"children": Node[]}; Node = same schema. 1 short root name, 4-8 main children, each '
    "2-5 concise sub-children. No explanations or backticks."
)

# Sentence boundaries used by the offline fallback
_SENTENCE_SPLIT = re.compile(r"[.!?\n]")


def parse_tree_response(raw: str) -> dict | None:
    """Parse a model reply into a tree, tolerating a Markdown code fence.

    Returns:
        The parsed object if it is a JSON object with a "name" key, else None.
    """
    cleaned = re.sub(r"^```json\s*", "", raw, flags=re.IGNORECASE)
    cleaned = re.sub(r"^```\s*", "", cleaned)
    cleaned = re.sub(r"```\s*$", "", cleaned).strip()
    try:
        obj = json.loads(cleaned)
    except json.JSONDecodeError:
        return None
    if isinstance(obj, dict) and "name" in obj:
        return obj
    return None


def fallback_tree_from_text(text: str) -> dict:
    """Build a one-level tree from sentences, without any network access.

    The root is the first sentence (60 characters max); the children are the
    first 12 non-empty sentences (50 characters max each).
    """
    segments = _SENTENCE_SPLIT.split(text)
    topic = segments[0][:60] or "Mindmap"
    sentences = [s.strip() for s in segments if s.strip()][:12]
    return {
        "name": topic,
        "children": [{"name": s[:50]} for s in sentences],
    }


def request_tree(
    text: str,
    *,
    url: str | None = None,
    model: str | None = None,
    timeout: float = 30.0,
) -> dict:
    """Ask the chat-completions endpoint for a tree.

    Raises:
        GenerationError: On network errors, non-2xx status, undecodable bodies,
            or replies that are not a tree.
    """
    url = url or os.getenv("LLM_BASE_URL") or DEFAULT_URL
    model = model or os.getenv("LLM_MODEL") or DEFAULT_MODEL

    payload = {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": text},
        ],
        "max_tokens": 1024,
        "temperature": 0.4,
    }

    try:
        response = requests.post(
            url,
            headers={"Content-Type": "application/json"},
            data=json.dumps(payload),
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise GenerationError(f"Request to {url} failed: {exc}") from exc

    if not response.ok:
        raise GenerationError(f"LLM HTTP {response.status_code}")

    try:
        data = response.json()
    except ValueError as exc:
        raise GenerationError(f"Failed to decode LLM response: {exc}") from exc

    try:
        content = data["choices"][0]["message"]["content"] or ""
    except (KeyError, IndexError, TypeError):
        content = ""
    if not isinstance(content, str):
        content = ""

    tree = parse_tree_response(content)
    if tree is None:
        raise GenerationError("LLM reply is not a mindmap tree")
    try:
        validate_tree(tree)
    except TreeStructureError as exc:
        raise GenerationError(f"LLM reply has a malformed node: {exc}") from exc
    return tree


def generate_tree(text: str, **kwargs) -> tuple[dict, str]:
    """Get a tree for ``text``, falling back to sentence splitting on any failure.

    Args:
        text: Source text.
        **kwargs: Passed to request_tree (url, model, timeout).

    Returns:
        (tree, source) where source is "llm" or "fallback".
    """
    if not text or not text.strip():
        raise ValueError("text is required")
    try:
        return request_tree(text, **kwargs), "llm"
    except GenerationError:
        return fallback_tree_from_text(text), "fallback"
