"""Markdown rendering of assembled comparison matrices."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from regtables.models import Cell, DetailTable, Matrix


class MarkdownMatrixRenderer:
    """Renders a Matrix (and optional detail tables) as Markdown."""

    def __init__(self, show_standard_errors: bool = True) -> None:
        """Initialize renderer.

        Args:
            show_standard_errors: Put each standard error under its coefficient

        """
        self.show_standard_errors = show_standard_errors

    @staticmethod
    def _escape(text: str) -> str:
        return text.replace("|", "\\|").replace("\r\n", "\n").replace("\n", "<br>")

    def _format_cell(self, cell: Cell) -> str:
        if cell.is_empty:
            return ""
        text = self._escape(cell.coefficient)
        if self.show_standard_errors and cell.standard_error:
            text += f"<br>{self._escape(cell.standard_error)}"
        return text

    def _table(self, header: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
        lines = [
            "| " + " | ".join(self._escape(h) for h in header) + " |",
            "|" + "|".join("---" for _ in header) + "|",
        ]
        lines.extend("| " + " | ".join(row) + " |" for row in rows)
        return "\n".join(lines)

    def render_matrix(self, matrix: Matrix) -> str:
        """Render the comparison matrix with its title."""
        rows = [
            [self._escape(row.variable), *(self._format_cell(c) for c in row.cells)]
            for row in matrix.rows
        ]
        rows += [
            [self._escape(s.label), *(self._escape(v) for v in s.values)]
            for s in matrix.summary_rows
        ]
        return f"## {matrix.title}\n\n{self._table(matrix.header, rows)}\n"

    def render_detail(self, table: DetailTable) -> str:
        """Render a detail table with its title."""
        rows = [[self._escape(cell) for cell in row] for row in table.rows]
        return f"### {table.title}\n\n{self._table(table.header, rows)}\n"

    def render(
        self, matrix: Matrix, details: Sequence[DetailTable] = (), preamble: str = ""
    ) -> str:
        """Render the matrix followed by any detail tables.

        A non-empty preamble is placed above the matrix as-is.
        """
        sections = [self.render_matrix(matrix)]
        sections.extend(self.render_detail(t) for t in details)
        text = "\n".join(sections)
        return f"{preamble}\n\n{text}" if preamble else text

    def write(
        self,
        path: Path,
        matrix: Matrix,
        details: Sequence[DetailTable] = (),
        preamble: str = "",
    ) -> Path:
        """Write the rendered report to a file.

        Args:
            path: Output file; parent directories are created
            matrix: Matrix to render
            details: Detail tables appended after the matrix
            preamble: Text placed above the matrix

        Returns:
            Path to the written file

        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(matrix, details, preamble), encoding="utf-8")
        return path
