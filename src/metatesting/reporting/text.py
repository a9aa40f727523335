from __future__ import annotations

from metatesting.testset import AbstractTestSet, ResultCounts, get_test_counts

_COLUMNS = ("Pass", "Fail", "Error", "Broken", "Total")


def _rows(
    ts: AbstractTestSet, depth: int, verbose: bool
) -> list[tuple[str, ResultCounts, float | None]]:
    label = "  " * depth + ts.description
    rows = [(label, get_test_counts(ts), getattr(ts, "elapsed", None))]
    if verbose:
        for child in ts.results:
            if isinstance(child, AbstractTestSet):
                rows.extend(_rows(child, depth + 1, verbose))
    return rows


def format_summary(
    ts: AbstractTestSet,
    verbose: bool | None = None,
    show_timing: bool | None = None,
) -> str:
    """Render a "Test Summary" table for a testset.

    ``verbose`` and ``show_timing`` default to the testset's own settings;
    verbose lists every nested testset on its own indented row.
    """
    if verbose is None:
        verbose = getattr(ts, "verbose", False)
    if show_timing is None:
        show_timing = getattr(ts, "show_timing", False)

    rows = _rows(ts, 0, verbose)
    title = "Test Summary:"
    label_width = max(len(title), *(len(label) for label, _, _ in rows))

    columns = list(_COLUMNS)
    if show_timing:
        columns.append("Time")

    lines = [
        f"{title:<{label_width}} | " + "  ".join(f"{c:>6}" for c in columns)
    ]
    for label, counts, elapsed in rows:
        cells = [counts.passes, counts.fails, counts.errors, counts.broken, counts.total]
        rendered = [f"{c:>6}" for c in cells]
        if show_timing:
            rendered.append(f"{elapsed:>5.1f}s" if elapsed is not None else f"{'':>6}")
        lines.append(f"{label:<{label_width}} | " + "  ".join(rendered))
    return "\n".join(lines)
