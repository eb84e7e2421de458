# src/manuscript_kit/analysis/pipeline.py

import json
import logging
from collections.abc import Iterable
from time import monotonic
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from manuscript_kit.chunking.chunking import chunk_document
from manuscript_kit.config import AnalysisConfig, CorrectionMode
from manuscript_kit.documents.base import DocumentProvider
from manuscript_kit.documents.models import count_words
from manuscript_kit.errors import MalformedResponseError, ScopeEmptyError
from manuscript_kit.llms.base import Message, Role
from manuscript_kit.llms.json_model import JsonModel
from manuscript_kit.observability import names
from manuscript_kit.observability.base import MetricsHook, NoOpMetricsHook
from manuscript_kit.prompts.prompts_library import PromptsLibrary

from .analyzer import ChunkAnalyzer, ProgressCallback, report_progress
from .mergers import merge_results
from .profiles import ProfileStore
from .schemas import (
    AnalysisKind,
    GrammarCorrection,
    LegitimacyResult,
    ProofreadResult,
    RephraseResult,
    RewriteResult,
    StyleResult,
    SuggestionsResult,
    UnifiedResult,
)
from .scope import AnalysisScope, ScopeResolver

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)

PROMPT_VERSION = "1"

GRAMMAR_MODE_INSTRUCTIONS: dict[str, str] = {
    "soft": (
        "Report ONLY unambiguous errors. "
        "Ignore style questions and optional commas."
    ),
    "standard": "Report errors and important stylistic improvements.",
    "strict": (
        "Report EVERYTHING: errors, optional commas, filler words, "
        "stylistic weaknesses, passive voice."
    ),
}

NEUTRAL_STYLE = "Neutral academic"

_SCOPE_LABELS = {
    AnalysisScope.SELECTION: "Selection",
    AnalysisScope.FULL: "Full document",
    AnalysisScope.CHAPTERS: "Selected chapters",
}


class DocumentAnalyzer:
    """Runs one analysis kind over a document scope.

    Inputs under `direct_word_limit` words go to the backend in a single
    call. Larger inputs are chunked, analyzed chunk by chunk and merged.
    Both paths return the same result type. Style analysis never chunks;
    it sees the first `style_sample_words` words of the scope.

    Rewrite, rephrase and suggestions work on a single passage and are
    always one call at `creative_temperature`.

    Example:
        >>> analyzer = DocumentAnalyzer(JsonModel(client), TextDocument(text))
        >>> corrections = await analyzer.check_grammar(AnalysisScope.FULL)
    """

    def __init__(
        self,
        model: JsonModel,
        document: DocumentProvider,
        *,
        prompts: PromptsLibrary | None = None,
        config: AnalysisConfig = AnalysisConfig(),
        profile_store: ProfileStore | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._model = model
        self._prompts = prompts or PromptsLibrary.bundled()
        self._config = config
        self._profile_store = profile_store
        self._resolver = ScopeResolver(document)
        self._analyzer = ChunkAnalyzer(
            model,
            pacing_delay=config.pacing_delay,
            temperature=config.temperature,
            metrics_hook=metrics_hook,
        )
        self.metrics_hook = metrics_hook

    async def check_grammar(
        self,
        scope: AnalysisScope = AnalysisScope.FULL,
        selected_chapters: Iterable[int] = (),
        on_progress: ProgressCallback | None = None,
        mode: CorrectionMode | None = None,
    ) -> list[GrammarCorrection]:
        system_prompt = self._prompts.render(
            "grammar",
            PROMPT_VERSION,
            mode_instructions=GRAMMAR_MODE_INSTRUCTIONS[
                mode or self._config.correction_mode
            ],
        )
        profile = self._load_profile()
        if profile:
            system_prompt += (
                "\n\nAuthor's style profile. Report clear deviations from it "
                f"as type style_break:\n{json.dumps(profile, ensure_ascii=False)}"
            )
        return await self.run(
            AnalysisKind.GRAMMAR, system_prompt, scope, selected_chapters, on_progress
        )

    async def proofread(
        self,
        scope: AnalysisScope = AnalysisScope.FULL,
        selected_chapters: Iterable[int] = (),
        on_progress: ProgressCallback | None = None,
        discipline: str | None = None,
        text_type: str | None = None,
    ) -> ProofreadResult:
        system_prompt = self._prompts.render(
            "proofreading",
            PROMPT_VERSION,
            discipline=discipline or self._config.discipline,
            text_type=text_type or self._config.text_type,
        )
        return await self.run(
            AnalysisKind.PROOFREADING,
            system_prompt,
            scope,
            selected_chapters,
            on_progress,
        )

    async def check_sources(
        self,
        scope: AnalysisScope = AnalysisScope.FULL,
        selected_chapters: Iterable[int] = (),
        on_progress: ProgressCallback | None = None,
        citation_style: str | None = None,
    ) -> LegitimacyResult:
        system_prompt = self._prompts.render(
            "legitimacy",
            PROMPT_VERSION,
            citation_style=citation_style or self._config.citation_style,
        )
        return await self.run(
            AnalysisKind.SOURCES, system_prompt, scope, selected_chapters, on_progress
        )

    async def analyze_style(
        self,
        scope: AnalysisScope = AnalysisScope.FULL,
        selected_chapters: Iterable[int] = (),
        on_progress: ProgressCallback | None = None,
    ) -> StyleResult:
        """Profile the writing style from a bounded sample.

        The profile is saved to the profile store when one is configured.
        """
        system_prompt = self._prompts.render("style_analysis", PROMPT_VERSION)
        result: StyleResult = await self.run(
            AnalysisKind.STYLE, system_prompt, scope, selected_chapters, on_progress
        )

        if self._profile_store is not None:
            self._profile_store.save(result.style_profile.model_dump(exclude_none=True))
            logger.info("Saved style profile (%s)", result.style_profile.formality)
        return result

    async def rewrite(self, text: str | None = None) -> RewriteResult:
        """Rewrite a passage in the author's style.

        Uses the stored style profile when there is one, otherwise a
        generic academic rewrite. `text` defaults to the current selection.
        Only the first `rewrite_max_words` words are sent.

        Raises:
            MalformedResponseError: If the response has no rewritten text.
        """
        passage = await self._passage(text, "rewrite")
        profile = self._load_profile()
        if profile:
            system_prompt = self._prompts.render(
                "rewrite",
                PROMPT_VERSION,
                style_profile=json.dumps(profile, ensure_ascii=False, indent=2),
            )
        else:
            system_prompt = self._prompts.render("rewrite_no_profile", PROMPT_VERSION)

        raw = await self._invoke(
            system_prompt, passage, temperature=self._config.creative_temperature
        )
        result = _parse(RewriteResult, raw)
        logger.info(
            "Rewrote %d words with %d changes (profile=%s)",
            count_words(passage),
            len(result.changes),
            bool(profile),
        )
        return result

    async def rephrase(self, text: str | None = None) -> RephraseResult:
        """Three academic rephrasings of a passage (formal, precise, elaborate).

        Raises:
            MalformedResponseError: If the response has no variants list.
        """
        passage = await self._passage(text, "rephrase")
        system_prompt = self._prompts.render("rephrase", PROMPT_VERSION)
        raw = await self._invoke(
            system_prompt, passage, temperature=self._config.creative_temperature
        )
        return _parse(RephraseResult, raw)

    async def suggest(self, before: str, after: str) -> SuggestionsResult:
        """Suggest text for the insertion point between `before` and `after`.

        Each side is cut to `suggestion_context_words` words nearest the
        insertion point.
        """
        limit = self._config.suggestion_context_words
        context = (
            f"--- TEXT BEFORE ---\n{' '.join(before.split()[-limit:])}\n\n"
            f"--- INSERT HERE ---\n\n"
            f"--- TEXT AFTER ---\n{' '.join(after.split()[:limit])}"
        )
        profile = self._load_profile()
        system_prompt = self._prompts.render(
            "suggestions",
            PROMPT_VERSION,
            style_profile=(
                json.dumps(profile, ensure_ascii=False) if profile else NEUTRAL_STYLE
            ),
        )
        raw = await self._invoke(
            system_prompt, context, temperature=self._config.creative_temperature
        )
        return _parse(SuggestionsResult, raw)

    async def run(
        self,
        kind: AnalysisKind,
        system_prompt: str,
        scope: AnalysisScope = AnalysisScope.FULL,
        selected_chapters: Iterable[int] = (),
        on_progress: ProgressCallback | None = None,
    ) -> Any:
        """Resolve the scope, analyze it and merge into one result.

        STYLE is sent as one call on the first `style_sample_words` words.

        Raises:
            ScopeEmptyError: If the document has no text at all.
            BackendError: If any backend call fails. Nothing partial is returned.
            MergeError: If no backend result matched the schema of `kind`.
        """
        start = monotonic()
        resolved = await self._resolver.resolve(scope, selected_chapters)
        label = _SCOPE_LABELS[resolved.scope]
        words = count_words(resolved.text)
        self.metrics_hook.record_gauge(
            names.ANALYSIS_INPUT_WORDS, words, labels={"kind": kind.value}
        )

        if kind == AnalysisKind.STYLE:
            logger.info(
                "Running style on a sample of %d words (%s)",
                min(words, self._config.style_sample_words),
                resolved.scope.value,
            )
            sample = _first_words(resolved.text, self._config.style_sample_words)
            results = await self._direct(label, sample, system_prompt, on_progress)
        elif words < self._config.direct_word_limit:
            logger.info(
                "Running %s on %d words (%s) in one call",
                kind.value,
                words,
                resolved.scope.value,
            )
            results = await self._direct(
                label, resolved.text, system_prompt, on_progress
            )
        else:
            logger.info(
                "Running %s on %d words (%s) in chunks",
                kind.value,
                words,
                resolved.scope.value,
            )
            chunked = chunk_document(
                resolved.paragraphs,
                max_words=self._config.max_words_per_chunk,
                overlap_words=self._config.overlap_words,
                toc_max_chars=self._config.toc_max_chars,
                metrics_hook=self.metrics_hook,
            )
            results = await self._analyzer.analyze(
                chunked.chunks, chunked.meta, system_prompt, on_progress
            )

        merged: UnifiedResult = merge_results(kind, results, self.metrics_hook)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(
            names.ANALYSIS_RUN_DURATION, elapsed_ms, labels={"kind": kind.value}
        )
        self.metrics_hook.increment(
            names.ANALYSIS_RUNS_TOTAL,
            labels={"kind": kind.value, "chunked": str(len(results) > 1).lower()},
        )
        return merged

    async def _direct(
        self,
        label: str,
        text: str,
        system_prompt: str,
        on_progress: ProgressCallback | None,
    ) -> dict[str, Any]:
        await report_progress(on_progress, 0, 1, label)
        raw = await self._invoke(system_prompt, text)
        await report_progress(on_progress, 1, 1, label)
        return {"document": raw}

    async def _passage(self, text: str | None, action: str) -> str:
        if text is None:
            text = await self._resolver.resolve_text(AnalysisScope.SELECTION)
        passage = _first_words(text, self._config.rewrite_max_words)
        if not passage:
            raise ScopeEmptyError(f"no text to {action}")
        return passage

    def _load_profile(self) -> dict[str, Any] | None:
        return self._profile_store.load() if self._profile_store else None

    async def _invoke(
        self, system_prompt: str, text: str, temperature: float | None = None
    ) -> Any:
        if temperature is None:
            temperature = self._config.temperature
        return await self._model.invoke(
            [
                Message(role=Role.SYSTEM, content=system_prompt),
                Message(role=Role.USER, content=text),
            ],
            temperature=temperature,
        )


def _first_words(text: str, limit: int) -> str:
    return " ".join(text.split()[:limit])


def _parse(model: type[ResultT], raw: Any) -> ResultT:
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Backend response does not match {model.__name__}: "
            f"{e.error_count()} errors"
        ) from e
