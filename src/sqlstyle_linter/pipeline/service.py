"""Pipeline orchestration service: read, check/format, collect."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
import sys
from typing import Callable, Sequence

from sqlstyle_linter.common import CheckReport, Diagnostic, FileResult
from sqlstyle_linter.engine import format_text, lint_text
from sqlstyle_linter.observability import get_logger
from sqlstyle_linter.rules import RuleSet

logger = get_logger(__name__)

STDIN = "-"
STDIN_NAME = "<stdin>"

_Task = Callable[[str], FileResult]


def collect_sources(paths: Sequence[str | Path]) -> tuple[str, ...]:
    """Expands directories to their ``*.sql`` files.

    Explicit files, ``-`` (standard input) and missing paths are kept as
    given; a missing path later surfaces as an ``io-error`` diagnostic.
    """

    sources: list[str] = []
    for raw in paths or [STDIN]:
        path = Path(raw)
        if str(raw) != STDIN and path.is_dir():
            found = sorted(item for item in path.rglob("*.sql") if item.is_file())
            logger.debug("collected %d file(s) under %s", len(found), path)
            sources.extend(str(item) for item in found)
        else:
            sources.append(str(raw))
    return tuple(sources)


def run_check(
    paths: Sequence[str | Path],
    ruleset: RuleSet,
    *,
    workers: int = 1,
    stdin_text: str | None = None,
) -> CheckReport:
    """Checks every source and returns the report in input order."""

    sources = collect_sources(paths)
    stdin_text = _stdin_if_needed(sources, stdin_text)
    logger.info("check started: files=%d, workers=%d", len(sources), workers)

    def task(source: str) -> FileResult:
        text, failure = _read(source, stdin_text)
        if failure is not None:
            return failure
        return FileResult(path=_display(source), diagnostics=lint_text(text, ruleset, path=_display(source)))

    report = _run(sources, task, workers)
    logger.info(
        "check completed: errors=%d, warnings=%d, interrupted=%s",
        report.error_count,
        report.warning_count,
        report.interrupted,
    )
    return report


def run_format(
    paths: Sequence[str | Path],
    ruleset: RuleSet,
    *,
    in_place: bool = False,
    workers: int = 1,
    stdin_text: str | None = None,
) -> CheckReport:
    """Formats every source; ``FileResult.formatted`` holds the rewritten text."""

    sources = collect_sources(paths)
    stdin_text = _stdin_if_needed(sources, stdin_text)
    logger.info("format started: files=%d, workers=%d, in_place=%s", len(sources), workers, in_place)

    def task(source: str) -> FileResult:
        text, failure = _read(source, stdin_text)
        if failure is not None:
            return failure
        formatted = format_text(text, ruleset)
        changed = formatted != text
        if in_place and changed and source != STDIN:
            try:
                Path(source).write_text(formatted, encoding="utf-8")
            except OSError as exc:
                logger.error("cannot write %s: %s", source, exc)
                return _io_failure(source, f"cannot write file: {exc}")
            logger.info("rewrote %s", source)
        return FileResult(path=_display(source), formatted=formatted, changed=changed)

    report = _run(sources, task, workers)
    logger.info("format completed: changed=%d", sum(1 for item in report.files if item.changed))
    return report


def _run(sources: Sequence[str], task: _Task, workers: int) -> CheckReport:
    results: list[FileResult | None] = [None] * len(sources)
    interrupted = False

    if workers <= 1 or len(sources) <= 1:
        try:
            for position, source in enumerate(sources):
                results[position] = task(source)
        except KeyboardInterrupt:
            interrupted = True
    else:
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="sqlstyle")
        futures: list[Future[FileResult]] = [executor.submit(task, source) for source in sources]
        try:
            for position, future in enumerate(futures):
                results[position] = future.result()
        except KeyboardInterrupt:
            interrupted = True
            for future in futures:
                future.cancel()
            for position, future in enumerate(futures):
                if results[position] is None and _completed(future):
                    results[position] = future.result()
        finally:
            executor.shutdown(wait=not interrupted, cancel_futures=True)

    if interrupted:
        logger.warning("interrupted: %d of %d file(s) finished", sum(item is not None for item in results), len(sources))
    files = tuple(item for item in results if item is not None)
    return CheckReport(files=files, interrupted=interrupted)


def _completed(future: Future[FileResult]) -> bool:
    return future.done() and not future.cancelled() and future.exception() is None


def _stdin_if_needed(sources: Sequence[str], stdin_text: str | None) -> str | None:
    if stdin_text is None and STDIN in sources:
        return sys.stdin.read()
    return stdin_text


def _read(source: str, stdin_text: str | None) -> tuple[str, FileResult | None]:
    if source == STDIN:
        return stdin_text or "", None
    try:
        return Path(source).read_text(encoding="utf-8"), None
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("cannot read %s: %s", source, exc)
        return "", _io_failure(source, f"cannot read file: {exc}")


def _io_failure(source: str, message: str) -> FileResult:
    path = _display(source)
    diagnostic = Diagnostic("io-error", "error", "internal", 1, 1, message, path=path)
    return FileResult(path=path, diagnostics=(diagnostic,))


def _display(source: str) -> str:
    return STDIN_NAME if source == STDIN else source
