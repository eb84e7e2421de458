# src/manuscript_kit/analysis/analyzer.py

import asyncio
import inspect
import logging
from collections import deque
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from time import monotonic
from typing import Any

from manuscript_kit.chunking.chunking import Chunk, MetaContext
from manuscript_kit.llms.base import Message, Role
from manuscript_kit.llms.json_model import JsonModel
from manuscript_kit.observability import names
from manuscript_kit.observability.base import MetricsHook, NoOpMetricsHook

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None | Awaitable[None]]

DEFAULT_PACING_DELAY = 1.5


async def report_progress(
    on_progress: ProgressCallback | None, done: int, total: int, label: str
) -> None:
    if on_progress is None:
        return
    outcome = on_progress(done, total, label)
    if inspect.isawaitable(outcome):
        await outcome


def build_chunk_payload(chunk: Chunk, meta: MetaContext) -> str:
    """Render the user message for one chunk."""
    parts = [
        "--- DOCUMENT CONTEXT ---",
        meta.table_of_contents,
        f"({meta.total_words} words, {meta.total_chapters} chapters)",
        "",
        f"--- CHAPTER: {chunk.chapter_label} ---",
    ]
    if chunk.overlap_before:
        parts.append(f"[Previous context: {chunk.overlap_before}]")
    parts.append("")
    parts.append(chunk.text)
    return "\n".join(parts)


@dataclass
class _DispatchState:
    """Single in-flight dispatch loop state."""

    pending: deque[Chunk]
    total: int
    index: int = 0
    last_call_at: float | None = None
    results: dict[str, Any] = field(default_factory=dict)


class ChunkAnalyzer:
    """Sends chunks to the backend strictly one at a time.

    Calls are paced by `pacing_delay` seconds between completions so a
    low per-minute request quota is never exceeded. A failing chunk
    aborts the whole run; nothing partial is returned.
    """

    def __init__(
        self,
        model: JsonModel,
        pacing_delay: float = DEFAULT_PACING_DELAY,
        temperature: float | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._model = model
        self._pacing_delay = pacing_delay
        self._temperature = temperature
        self.metrics_hook = metrics_hook

    async def analyze(
        self,
        chunks: list[Chunk],
        meta: MetaContext,
        system_prompt: str,
        on_progress: ProgressCallback | None = None,
    ) -> dict[str, Any]:
        """Analyze every chunk with the same system prompt.

        Args:
            chunks: Chunks in document order.
            meta: Document-level context attached to every request.
            system_prompt: Defines the analysis kind; identical across chunks.
            on_progress: Called as (done, total, chapter_label) before and
                after each backend call. May be sync or async.

        Returns:
            Parsed backend result per chunk id, in chunk order.

        Raises:
            BackendError: From the first failing chunk call.
        """
        state = _DispatchState(pending=deque(chunks), total=len(chunks))
        logger.info("Analyzing %d chunks sequentially", state.total)

        while state.pending:
            chunk = state.pending.popleft()
            await self._wait_for_pacing(state)

            await report_progress(
                on_progress, state.index, state.total, chunk.chapter_label
            )
            logger.debug(
                "Dispatching chunk %s (%d/%d): %s",
                chunk.id,
                state.index + 1,
                state.total,
                chunk.chapter_label,
            )

            start = monotonic()
            state.results[chunk.id] = await self._model.invoke(
                [
                    Message(role=Role.SYSTEM, content=system_prompt),
                    Message(role=Role.USER, content=build_chunk_payload(chunk, meta)),
                ],
                temperature=self._temperature,
            )
            state.last_call_at = monotonic()

            self.metrics_hook.record_latency(
                names.ANALYSIS_CHUNK_DURATION, 1000 * (state.last_call_at - start)
            )
            self.metrics_hook.increment(names.ANALYSIS_CHUNKS_TOTAL)

            state.index += 1
            await report_progress(
                on_progress, state.index, state.total, chunk.chapter_label
            )

        return state.results

    async def _wait_for_pacing(self, state: _DispatchState) -> None:
        if state.last_call_at is None:
            return
        remaining = self._pacing_delay - (monotonic() - state.last_call_at)
        if remaining > 0:
            await asyncio.sleep(remaining)


async def analyze_chunks(
    model: JsonModel,
    chunks: list[Chunk],
    meta: MetaContext,
    system_prompt: str,
    on_progress: ProgressCallback | None = None,
    pacing_delay: float = DEFAULT_PACING_DELAY,
) -> dict[str, Any]:
    """One-shot form of ChunkAnalyzer.analyze."""
    analyzer = ChunkAnalyzer(model, pacing_delay=pacing_delay)
    return await analyzer.analyze(chunks, meta, system_prompt, on_progress)
