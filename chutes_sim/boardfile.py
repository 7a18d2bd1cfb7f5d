"""Read and write board files.

Format::

    # comment
    10 10          # rows columns
    L 1 38         # ladder from square 1 to 38
    S 16 6         # snake (or C for chute) from 16 down to 6

Squares are 1-based in the file and 0-based everywhere else.
"""

from __future__ import annotations

from pathlib import Path

from chutes_sim.board import BoardTopology, Jump
from chutes_sim.errors import BoardFormatError, ConfigurationError

JUMP_KINDS = {"S", "C", "L"}


def _strip_comment(line: str) -> str:
    return line.split("#", 1)[0].strip()


def _parse_int(source: str, line_number: int, token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise BoardFormatError(source, line_number, f"{what} must be an integer, got {token!r}") from None


def parse_board(text: str, source: str = "<string>") -> BoardTopology:
    """Parse board-file *text* into a 0-based topology."""
    dims: tuple[int, int] | None = None
    header_line = 0
    jumps: list[Jump] = []

    lines = text.splitlines()
    for line_number, raw in enumerate(lines, start=1):
        line = _strip_comment(raw)
        if not line:
            continue
        tokens = line.split()

        if dims is None:
            if len(tokens) != 2:
                raise BoardFormatError(source, line_number, "expected 'ROWS COLUMNS'")
            rows = _parse_int(source, line_number, tokens[0], "rows")
            columns = _parse_int(source, line_number, tokens[1], "columns")
            dims = (rows, columns)
            header_line = line_number
            continue

        if len(tokens) != 3 or tokens[0].upper() not in JUMP_KINDS:
            raise BoardFormatError(source, line_number, "expected 'S|C|L START END'")
        start = _parse_int(source, line_number, tokens[1], "start")
        end = _parse_int(source, line_number, tokens[2], "end")
        jumps.append(Jump(start - 1, end - 1))

    if dims is None:
        raise BoardFormatError(source, max(len(lines), 1), "missing 'ROWS COLUMNS' header")

    try:
        return BoardTopology.from_grid(dims[0], dims[1], jumps)
    except ConfigurationError as exc:
        raise BoardFormatError(source, header_line, str(exc)) from exc


def load_board(path: Path | str) -> BoardTopology:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise BoardFormatError(str(path), 0, f"cannot read board file: {exc}") from exc
    return parse_board(text, source=str(path))


def format_board(topology: BoardTopology, rows: int, columns: int) -> str:
    """Render *topology* in board-file format (1-based squares)."""
    if rows * columns != topology.size:
        raise ConfigurationError(
            f"{rows}x{columns} does not match board size {topology.size}"
        )
    lines = [f"{rows} {columns}"]
    for jump in topology.jumps:
        kind = "L" if jump.is_ladder else "S"
        lines.append(f"{kind} {jump.start + 1} {jump.end + 1}")
    return "\n".join(lines) + "\n"
