from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

LAYOUT_SUFFIX = ".layout.json"


def iter_map_paths(directory: Path) -> Iterable[Path]:
    for path in directory.glob("*.json"):
        if not path.name.endswith(LAYOUT_SUFFIX):
            yield path


def layout_path_for(map_path: Path, output_dir: Path) -> Path:
    return output_dir / f"{map_path.stem}{LAYOUT_SUFFIX}"


def strip_map_comments(content: str) -> str:
    result_lines: list[str] = []
    for line in content.splitlines():
        in_string = False
        escaped = False
        cleaned = []
        for idx, char in enumerate(line):
            if not escaped and char == '"':
                in_string = not in_string
            if not in_string and char == "/" and idx + 1 < len(line) and line[idx + 1] == "/":
                break
            cleaned.append(char)
            escaped = char == "\\" and not escaped
        result_lines.append("".join(cleaned))
    return "\n".join(result_lines)
