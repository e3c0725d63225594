"""Gemini generative language API client."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

import requests

from .config import GeminiConfig

logger = logging.getLogger(__name__)

HARASSMENT_SAFETY_SETTING = {
    "category": "HARM_CATEGORY_HARASSMENT",
    "threshold": "BLOCK_ONLY_HIGH",
}


class CommentaryError(RuntimeError):
    """Raised when Gemini cannot produce a commentary."""


def build_request(prompt: str) -> Dict[str, Any]:
    """Single-turn generateContent body with the fixed safety policy."""

    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "safetySettings": [dict(HARASSMENT_SAFETY_SETTING)],
    }


def extract_text(body: Mapping[str, Any]) -> str:
    """Concatenate the text parts of the first candidate.

    Any finish reason is accepted.

    Raises:
        CommentaryError: If the response holds no candidates or its first
            candidate is not shaped like generated content.
    """

    candidates = body.get("candidates") or []
    if not isinstance(candidates, list):
        raise CommentaryError(f"Cannot decode Gemini candidates: {candidates!r}")
    if not candidates:
        raise CommentaryError("Gemini returned no candidates")

    try:
        parts = (candidates[0].get("content") or {}).get("parts") or []
        texts: List[Any] = [part.get("text", "") for part in parts]
    except (AttributeError, TypeError) as exc:
        raise CommentaryError(f"Cannot decode Gemini candidate: {exc}") from exc
    if not all(isinstance(text, str) for text in texts):
        raise CommentaryError("Gemini candidate has a part without text")
    return "".join(texts)


@dataclass
class GeminiClient:
    """Thin wrapper around the generateContent endpoint."""

    config: GeminiConfig
    timeout: float = 30

    @property
    def url(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/models/{self.config.model}:generateContent"

    def ask_commentary(self, prompt: str) -> str:
        """Return Gemini's answer to ``prompt``.

        Raises:
            CommentaryError: If the request fails, the response is not JSON,
                or it contains no candidates.
        """

        logger.info("Asking Gemini:\n%s", prompt)
        try:
            response = requests.post(
                self.url,
                params={"key": self.config.api_key},
                json=build_request(prompt),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise CommentaryError(f"Gemini request failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise CommentaryError(f"Cannot parse Gemini response into JSON: {exc}") from exc
        if not isinstance(body, dict):
            raise CommentaryError("Gemini response is not a JSON object")

        return extract_text(body)
