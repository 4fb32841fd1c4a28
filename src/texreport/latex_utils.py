"""LaTeX table serialization: column alignment and number formatting."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

ConvertNum = Callable[[int, float], str]

DEFAULT_NUM_FMT = "%g"

_EXPONENT_MARKERS = (("e-", "-"), ("e+", ""))


@dataclass(frozen=True)
class TableOptions:
    """Per-table formatting options."""

    align: bool = True
    num_fmt: str = DEFAULT_NUM_FMT
    col_sep: float = 0.5
    table_pos: str = "h"
    font_size: str = ""


def tex_num(fmt: str, num: float, scientific_notation: bool = False) -> str:
    """Format *num* with *fmt*, optionally typesetting the exponent.

    With *scientific_notation*, an ``e+NN``/``e-NN`` suffix becomes
    ``\\cdot 10^{NN}``. A zero exponent is dropped and a single leading
    zero is stripped from the exponent digits.
    """
    text = (fmt or DEFAULT_NUM_FMT) % num
    if not scientific_notation:
        return text

    for marker, sign in _EXPONENT_MARKERS:
        mantissa, found, exponent = text.partition(marker)
        if not found:
            continue
        if not exponent.isdigit():
            return text
        if int(exponent) == 0:
            return mantissa
        if len(exponent) > 1 and exponent[0] == "0":
            exponent = exponent[1:]
        return f"{mantissa}\\cdot 10^{{{sign}{exponent}}}"
    return text


def _column(table: Mapping[str, ArrayLike], key: str) -> NDArray[np.float64]:
    """Return the values stored under *key* as a flat float array."""
    values = table.get(key)
    if values is None:
        return np.empty(0, dtype=np.float64)
    return np.asarray(values, dtype=np.float64).ravel()


def _render_cells(
    keys: Sequence[str],
    table: Mapping[str, ArrayLike],
    key2convert: Mapping[str, ConvertNum] | None,
    num_fmt: str,
) -> list[list[str]]:
    """Render every cell as text, column by column.

    The row count is taken from the first key. Missing trailing values in
    other columns become empty cells; surplus values are ignored.
    """
    if not keys:
        return []
    nrows = len(_column(table, keys[0]))
    fmt = num_fmt or DEFAULT_NUM_FMT

    columns: list[list[str]] = []
    for key in keys:
        values = _column(table, key)
        convert = key2convert.get(key) if key2convert else None
        cells: list[str] = []
        for i in range(nrows):
            if i >= len(values):
                cells.append("")
                continue
            value = float(values[i])
            cells.append(convert(i, value) if convert else fmt % value)
        columns.append(cells)
    return columns


def format_table(
    keys: Sequence[str],
    table: Mapping[str, ArrayLike],
    key2tex: Mapping[str, str] | None = None,
    key2convert: Mapping[str, ConvertNum] | None = None,
    *,
    align: bool = True,
    num_fmt: str = DEFAULT_NUM_FMT,
) -> str:
    """Render the header and data rows of a tabular block.

    Args:
        keys: Column keys, in output order.
        table: Maps each key to its column values.
        key2tex: Optional header text per key; the raw key otherwise.
        key2convert: Optional ``(row, value) -> str`` converter per key;
            *num_fmt* otherwise.
        align: Right-justify every column to its widest entry.
        num_fmt: printf-style format for values without a converter.

    Returns:
        Header line followed by one line per row, without a trailing newline.
    """
    headers = [key2tex.get(key, key) if key2tex else key for key in keys]
    columns = _render_cells(keys, table, key2convert, num_fmt)

    if align:
        widths = [
            max([len(header)] + [len(cell) for cell in cells])
            for header, cells in zip(headers, columns)
        ]
        headers = [h.rjust(w) for h, w in zip(headers, widths)]
        columns = [[c.rjust(w) for c in cells] for cells, w in zip(columns, widths)]

    lines = [" & ".join(headers) + " \\\\ \\hline"]
    nrows = len(columns[0]) if columns else 0
    for i in range(nrows):
        lines.append(" & ".join(cells[i] for cells in columns) + " \\\\")
    return "\n".join(lines)


def table_block(
    caption: str,
    label: str,
    keys: Sequence[str],
    table: Mapping[str, ArrayLike],
    key2tex: Mapping[str, str] | None = None,
    key2convert: Mapping[str, ConvertNum] | None = None,
    options: TableOptions | None = None,
) -> str:
    """Wrap :func:`format_table` in a captioned, labelled ``table*`` environment."""
    opts = options or TableOptions()

    lines: list[str] = [
        f"\\begin{{table*}} [{opts.table_pos}] \\centering",
        f"\\caption{{{caption}}}",
    ]
    if opts.font_size:
        lines.append(opts.font_size)
    lines.append("\\setlength{\\tabcolsep}{%gem}" % opts.col_sep)
    lines.append(f"\\begin{{tabular}}[c]{{{'c' * len(keys)}}} \\toprule")
    lines.append(
        format_table(
            keys,
            table,
            key2tex,
            key2convert,
            align=opts.align,
            num_fmt=opts.num_fmt,
        )
    )
    lines.append("\\bottomrule")
    lines.append("\\end{tabular}")
    lines.append(f"\\label{{tab:{label}}}")
    lines.append("\\end{table*}")

    return "\n".join(lines)
