"""
Search -> extract -> clean workflow.

Papers are processed one at a time, in search order.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Protocol

from .models import ExtractedData, ProcessedPaper, ProcessingStatus, RawPaper, RunResponse
from .normalize import clean_extracted
from .rules import SIMULATED_YEAR

logger = logging.getLogger(__name__)


class LiteratureClient(Protocol):
    def simulate_search(self, query: str) -> List[RawPaper]: ...

    def extract_metadata(self, text: str) -> ExtractedData: ...


class RunLog:
    """Timestamped messages shown in the UI console, mirrored to the logger."""

    def __init__(self) -> None:
        self.lines: List[str] = []

    def add(self, msg: str) -> None:
        logger.info(msg)
        self.lines.append(f"[{datetime.now().strftime('%H:%M:%S')}] {msg}")


def process_paper(client: LiteratureClient, paper: RawPaper) -> ProcessedPaper:
    paper.status = "processing"
    data = clean_extracted(client.extract_metadata(paper.text))
    paper.status = "done"
    return ProcessedPaper(id=paper.id, raw_text=paper.text, **data.model_dump())


def run_pipeline(client: LiteratureClient, query: str) -> RunResponse:
    log = RunLog()
    papers: List[ProcessedPaper] = []
    status = ProcessingStatus.SEARCHING

    try:
        log.add(f"Initiating Search Simulation (Year: {SIMULATED_YEAR})...")
        log.add(f"Query: {query}")
        raw_papers = client.simulate_search(query)
        log.add(f"Found {len(raw_papers)} relevant documents.")

        status = ProcessingStatus.EXTRACTING
        for paper in raw_papers:
            log.add(f"Processing ID {paper.id}... Extracting metadata.")
            processed = process_paper(client, paper)
            papers.append(processed)
            log.add(f"✓ Parsed: {(processed.Title or '')[:40]}...")

        status = ProcessingStatus.COMPLETED
        log.add("Workflow completed successfully.")
    except Exception as e:
        logger.exception("Workflow failed")
        status = ProcessingStatus.ERROR
        log.add(f"Error: {str(e) or 'Unknown error'}")

    return RunResponse(status=status, query=query, papers=papers, logs=log.lines)
