"""Pipeline orchestration for a single generation pass."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import List, Sequence, Set

from . import diagnostics as codes
from .config import ConfigResolver, GeneratorOptions
from .diagnostics import make_diagnostic
from .extractor import WidgetExtractor, apply_duplicate_policy, find_duplicates
from .logging import get_logger, log_diagnostic
from .models import CandidateInput, Diagnostic, GenerationResult, ResolvedConfig
from .selector import DocumentSelector, normalise_separators
from .synthesizer import ClassSynthesizer


def document_name_for(path: str) -> str:
    """Return the file name without its extension for any separator style."""
    return PurePosixPath(normalise_separators(path)).stem


class Orchestrator:
    """Runs selection, extraction and synthesis over one set of build inputs.

    A run never raises: per-document failures become ``MYRA001`` and anything
    else becomes a single ``MYRA999``, with the units produced so far kept.
    """

    def __init__(
        self,
        options: GeneratorOptions | None = None,
        *,
        selector: DocumentSelector | None = None,
        extractor: WidgetExtractor | None = None,
        synthesizer: ClassSynthesizer | None = None,
    ) -> None:
        self.options = options or GeneratorOptions()
        self.resolver = ConfigResolver(self.options)
        self.selector = selector or DocumentSelector()
        self.extractor = extractor or WidgetExtractor()
        self.synthesizer = synthesizer or ClassSynthesizer()
        self.logger = get_logger("orchestrator")

    def run(self, inputs: Sequence[CandidateInput]) -> GenerationResult:
        result = GenerationResult()
        try:
            self._run(list(inputs), result)
        except Exception as exc:
            self.logger.debug("Generation run aborted", exc_info=True)
            self._report(result, make_diagnostic(codes.UNEXPECTED_FAILURE, repr(exc)))
        return result

    def _run(self, inputs: List[CandidateInput], result: GenerationResult) -> None:
        config = self.resolver.resolve(inputs)
        result.config = config
        self._report(
            result,
            make_diagnostic(codes.RUN_STARTED, config.namespace, config.directory_pattern, len(inputs)),
        )

        documents = self.selector.select(inputs, config.directory_pattern)
        self._report(
            result,
            make_diagnostic(codes.DOCUMENTS_SELECTED, len(documents), config.directory_pattern),
        )

        emitted: Set[str] = set()
        for document in documents:
            try:
                self._process_document(document, config, result, emitted)
            except Exception as exc:
                self.logger.debug("Failed to process %s", document.path, exc_info=True)
                self._report(result, make_diagnostic(codes.PROCESSING_ERROR, document.path, exc))

    def _process_document(
        self,
        document: CandidateInput,
        config: ResolvedConfig,
        result: GenerationResult,
        emitted: Set[str],
    ) -> None:
        text = document.read_text()
        if not text:
            self.logger.debug("Skipping empty document %s", document.path)
            return

        root = self.extractor.parse(text)
        name = document_name_for(document.path)
        records = self.extractor.extract(root)
        if not records:
            self._report(result, make_diagnostic(codes.NO_WIDGETS, name))
            return

        duplicates = find_duplicates(records)
        if duplicates:
            self._report(result, make_diagnostic(codes.DUPLICATE_IDS, name, ", ".join(duplicates)))
            records = apply_duplicate_policy(records, config.duplicate_ids)

        unit = self.synthesizer.synthesize(name, records, config.namespace)
        if unit is None:
            return
        # Generated file names share one output directory and compare case-insensitively.
        key = unit.filename.casefold()
        if key in emitted:
            raise ValueError(f"duplicate generated file name '{unit.filename}'")
        emitted.add(key)
        result.units.append(unit)
        self._report(result, make_diagnostic(codes.CLASS_GENERATED, name, len(records)))

    def _report(self, result: GenerationResult, diagnostic: Diagnostic) -> None:
        result.diagnostics.append(diagnostic)
        log_diagnostic(self.logger, diagnostic)


__all__ = ["Orchestrator", "document_name_for"]
