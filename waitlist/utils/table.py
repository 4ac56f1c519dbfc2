from typing import List, Sequence


def render_table(rows: Sequence[Sequence[str]], padding: int = 2) -> str:
    """Align rows into columns separated by at least `padding` spaces.

    Every cell but the last one in a row is padded to its column's width; the
    last cell is written as-is, so a row may end in spaces when it has empty
    trailing cells.
    """
    widths: List[int] = []
    for row in rows:
        for i, cell in enumerate(row[:-1]):
            if i == len(widths):
                widths.append(0)
            widths[i] = max(widths[i], len(cell))

    lines = []
    for row in rows:
        if not row:
            lines.append("")
            continue
        aligned = [cell.ljust(widths[i] + padding) for i, cell in enumerate(row[:-1])]
        lines.append("".join(aligned) + row[-1])
    return "".join(line + "\n" for line in lines)
