"""Summary of generated files."""

from __future__ import annotations

from pathlib import Path


class Reporter:
    """Collects generated file paths and their line counts."""

    def __init__(self) -> None:
        self.generated_files: dict[Path, int] = {}

    def record_file(self, path: Path | str, line_count: int) -> None:
        """Record a written file. Recording the same path again replaces it."""
        self.generated_files[Path(path)] = line_count

    @property
    def total_lines(self) -> int:
        return sum(self.generated_files.values())

    def __len__(self) -> int:
        return len(self.generated_files)

    def render(self) -> str:
        lines = ["Generated Files Report:", "======================"]
        for path, count in self.generated_files.items():
            lines.append(f"- {path} ({count} lines)")
        lines.append("")
        lines.append(f"Total files generated: {len(self.generated_files)}")
        return "\n".join(lines)
