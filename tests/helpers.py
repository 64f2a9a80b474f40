"""Shared test helpers: builders for history rows and transcript lines."""

import os
from datetime import datetime
from pathlib import Path

import orjson

DAY = "2026-02-09"
PROJECT = "/home/wiz/projects/myapp"


def local_ms(day: str = DAY, hour: int = 10, minute: int = 0, second: int = 0) -> int:
    """Epoch milliseconds for a local wall-clock time on day."""
    y, m, d = (int(part) for part in day.split("-"))
    return int(datetime(y, m, d, hour, minute, second).timestamp() * 1000)


def set_mtime(path: Path, day: str = DAY, hour: int = 12) -> None:
    ts = local_ms(day, hour) / 1000
    os.utime(path, (ts, ts))


def write_jsonl(path: Path, rows) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        for row in rows:
            if isinstance(row, str):
                f.write(row.encode() + b"\n")
            else:
                f.write(orjson.dumps(row) + b"\n")
    return path


def history_row(session_id: str, display: str, timestamp: int, project: str = PROJECT) -> dict:
    return {"display": display, "timestamp": timestamp, "project": project, "sessionId": session_id}


def user_line(content, **extra) -> dict:
    line = {"type": "user", "message": {"role": "user", "content": content}}
    line.update(extra)
    return line


def assistant_line(content, model: str = "claude-sonnet-4-5", usage: dict | None = None, **extra) -> dict:
    message = {"role": "assistant", "content": content, "model": model}
    if usage is not None:
        message["usage"] = usage
    line = {"type": "assistant", "message": message}
    line.update(extra)
    return line


def tool_use(name: str, **tool_input) -> dict:
    return {"type": "tool_use", "id": f"toolu_{name}", "name": name, "input": tool_input}


def text(value: str) -> dict:
    return {"type": "text", "text": value}
