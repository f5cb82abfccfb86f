"""Pipeline orchestrator: load document → compute totals → annotate.

Wraps the pure aggregation functions with configuration, document loading
from JSON and reuse of the previous result when the document has not
changed between calls.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from autosum.aggregator import ListTotal, ListTypeMatcher, find_all_list_totals
from autosum.annotations import TotalAnnotation, create_total_annotations
from autosum.config import Config
from autosum.exceptions import DocumentLoadError
from autosum.report import AutosumReport
from autosum.tree.base import DocumentNode
from autosum.tree.schema import Node

logger = logging.getLogger(__name__)


class Autosum:
    """Computes list totals and annotations for documents."""

    def __init__(self, config: Config | None = None):
        self.config = config or Config.default()
        self.matcher = ListTypeMatcher.from_config(self.config.matching)
        self.last_report: AutosumReport | None = None
        self._last_document: Optional[Node] = None
        self._last_annotations: list[TotalAnnotation] = []

    def totals(self, document: DocumentNode) -> list[ListTotal]:
        """Compute the reportable totals of every list in *document*."""
        return find_all_list_totals(document, self.matcher)

    def annotate(self, document: DocumentNode) -> list[TotalAnnotation]:
        """Compute annotations, reusing the last result for an unchanged document.

        Returns an empty list when autosum is disabled in the configuration.
        """
        if not self.config.enabled:
            return []

        if self._last_document is not None and document == self._last_document:
            logger.info("Document unchanged, reusing %d annotation(s)", len(self._last_annotations))
            return list(self._last_annotations)

        annotations = create_total_annotations(self.totals(document), self.config.labels)
        # Only value-comparable trees can be reused; snapshot them against later in-place edits.
        self._last_document = document.model_copy(deep=True) if isinstance(document, Node) else None
        self._last_annotations = annotations
        return list(annotations)

    def load(self, path: Path) -> Node:
        """Load a document tree from a ProseMirror-style JSON file.

        Raises:
            DocumentLoadError: If the file is missing or does not hold a valid tree.
        """
        path = Path(path)
        logger.info("Loading document from %s", path)
        try:
            json_str = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise DocumentLoadError(f"Document file not found: {path}")
        except UnicodeDecodeError as exc:
            raise DocumentLoadError(f"Document {path} is not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise DocumentLoadError(f"Cannot read {path}: {exc}") from exc

        try:
            return Node.from_json(json_str)
        except ValidationError as exc:
            raise DocumentLoadError(f"Invalid document tree in {path}: {exc}") from exc

    def run(self, path: Path) -> AutosumReport:
        """Load a document, compute its totals and build a report.

        Args:
            path: ProseMirror-style JSON document.

        Returns:
            The report, also kept as ``last_report``.
        """
        path = Path(path)

        t0 = time.monotonic()
        document = self.load(path)
        t1 = time.monotonic()
        totals = self.totals(document) if self.config.enabled else []
        t2 = time.monotonic()

        report = AutosumReport.from_document(document, totals, source_file=str(path), matcher=self.matcher)
        report.load_time_seconds = t1 - t0
        report.compute_time_seconds = t2 - t1
        report.total_time_seconds = t2 - t0
        self.last_report = report

        logger.info("Found %d reportable list(s) in %s", report.reportable_count, path)
        return report
