"""Prompt templates and Gemini response schemas."""

from .rules import (
    CSV_HEADERS,
    ENUM_VALUES,
    INTEGER_FIELDS,
    NUMBER_FIELDS,
    REQUIRED_FIELDS,
    SIMULATED_PAPER_COUNT,
    SIMULATED_YEAR,
)

SEARCH_PROMPT_TEMPLATE = """You are a simulator for the Web of Science database.
Generate {count} distinct, highly realistic academic paper abstracts published in {year} that match this query:
"{query}"

Focus on Soil Carbon and Spectroscopy (VNIR/MIR).
Vary the geography (one from China, one from Europe, one from USA/Brazil).
Include details about sampling design, spectral range, and modeling results in the text so extraction is possible.

Return the result as a JSON array of strings, where each string is the full text of the abstract including title and authors.
"""

EXTRACTION_PROMPT_TEMPLATE = """Extract bibliographic, geographic, and chemometric metadata from the following text.
Strictly follow the JSON schema provided.
If a field is not mentioned, omit it or return null.
For Coordinates (Longitude/Latitude), keep the raw string if it's a range or list.
For Sampling Design, normalize to: Random sampling, Stratified random sampling, Grid, cLHS, etc.

Text to analyze:
"{text}"
"""

SEARCH_RESPONSE_SCHEMA = {
    "type": "ARRAY",
    "items": {"type": "STRING"},
}

_COORDINATE_DESCRIPTIONS = {
    "Longitude": "Raw longitude string, can be a range or list",
    "Latitude": "Raw latitude string, can be a range or list",
}


def _field_schema(name: str) -> dict:
    if name in INTEGER_FIELDS:
        return {"type": "INTEGER"}
    if name in NUMBER_FIELDS:
        return {"type": "NUMBER"}
    if name in ENUM_VALUES:
        return {"type": "STRING", "format": "enum", "enum": list(ENUM_VALUES[name])}
    if name in _COORDINATE_DESCRIPTIONS:
        return {"type": "STRING", "description": _COORDINATE_DESCRIPTIONS[name]}
    return {"type": "STRING"}


EXTRACTION_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {name: _field_schema(name) for name in CSV_HEADERS},
    "required": list(REQUIRED_FIELDS),
}


def build_search_prompt(query: str) -> str:
    return SEARCH_PROMPT_TEMPLATE.format(
        count=SIMULATED_PAPER_COUNT, year=SIMULATED_YEAR, query=query
    )


def build_extraction_prompt(text: str) -> str:
    return EXTRACTION_PROMPT_TEMPLATE.format(text=text)
