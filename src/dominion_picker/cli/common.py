from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any, Iterable, Sequence


def _json_dump(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def resolve_output_path(path_value: str | Path | None) -> Path | None:
    if path_value is None:
        return None
    return Path(path_value).expanduser().resolve()


def write_json_outputs(
    *,
    payload: Any,
    out_path: str | Path | None = None,
    emit_stdout: bool = False,
) -> Path | None:
    """Write ``payload`` as JSON to a file and/or stdout."""
    out_resolved = resolve_output_path(out_path)

    if out_resolved is not None:
        out_resolved.parent.mkdir(parents=True, exist_ok=True)
        out_resolved.write_text(_json_dump(payload), encoding="utf-8")

    if emit_stdout:
        print(_json_dump(payload).rstrip(os.linesep))

    return out_resolved


def format_rows(columns: Sequence[str], rows: Iterable[dict]) -> list[str]:
    """Render rows as tab-separated lines under a header line."""
    lines = ["\t".join(columns)]
    for row in rows:
        lines.append(
            "\t".join("" if row.get(col) is None else str(row.get(col)) for col in columns)
        )
    return lines


def exit_with_message(message: str, *, code: int = 0) -> None:
    stream = sys.stderr if code else sys.stdout
    stream.write(message + os.linesep)
    stream.flush()
    raise SystemExit(code)
