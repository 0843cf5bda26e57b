"""
Gemini client for the simulated search and the metadata extraction.

Both calls request JSON output constrained by a response schema.
"""

from __future__ import annotations

import json
import logging
import time
from typing import List, Optional

import google.generativeai as genai
from pydantic import ValidationError

from .config import Settings
from .models import ExtractedData, RawPaper
from .prompts import (
    EXTRACTION_RESPONSE_SCHEMA,
    SEARCH_RESPONSE_SCHEMA,
    build_extraction_prompt,
    build_search_prompt,
)

logger = logging.getLogger(__name__)


class ApiKeyMissingError(RuntimeError):
    pass


class GeminiClient:
    def __init__(self, api_key: Optional[str], model_name: str):
        if not api_key:
            raise ApiKeyMissingError(
                "API key not found; set GEMINI_API_KEY (or API_KEY) in the environment or .env"
            )
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self._model = genai.GenerativeModel(model_name)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        return cls(settings.api_key, settings.model)

    def _generate_json(self, prompt: str, schema: dict) -> str:
        response = self._model.generate_content(
            prompt,
            generation_config=genai.GenerationConfig(
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )
        return response.text or ""

    def simulate_search(self, query: str) -> List[RawPaper]:
        """Ask the model to invent abstracts matching `query`. Errors propagate."""
        try:
            texts = json.loads(self._generate_json(build_search_prompt(query), SEARCH_RESPONSE_SCHEMA) or "[]")
        except Exception:
            logger.exception("Simulation failed for query %r", query)
            raise

        stamp = int(time.time() * 1000)
        return [
            RawPaper(id=f"sim-{stamp}-{i}", text=str(text), status="pending")
            for i, text in enumerate(texts)
        ]

    def extract_metadata(self, text: str) -> ExtractedData:
        """Extract schema fields from one abstract. Any failure yields an empty record."""
        try:
            raw = self._generate_json(build_extraction_prompt(text), EXTRACTION_RESPONSE_SCHEMA)
            return ExtractedData.model_validate(json.loads(raw or "{}"))
        except ValidationError as e:
            logger.error("Extraction returned an invalid record: %s", e)
        except Exception:
            logger.exception("Extraction failed")
        return ExtractedData()
