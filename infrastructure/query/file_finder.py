"""Find query definition files by ID."""
from pathlib import Path
from typing import Optional


class QueryFileFinder:
    """Search query files under the given base directory."""

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def find_by_id(self, query_id: str) -> Optional[Path]:
        """
        Find a query file by its ID (the file stem).

        When several extensions exist for the same ID, .json wins over
        .yaml, which wins over .yml.
        """
        if not self.base_dir.is_dir():
            return None

        priority = [".json", ".yaml", ".yml"]
        candidates: list[Path] = []

        for ext in priority:
            for file_path in self.base_dir.rglob(f"{query_id}{ext}"):
                if file_path.is_file():
                    candidates.append(file_path)

        if not candidates:
            return None

        candidates.sort(key=lambda path: (priority.index(path.suffix), str(path)))
        return candidates[0]
