from __future__ import annotations

"""Logs por execução do worker e o resumo de ciclos gravado ao lado.

Cada execução escreve ``<log_dir>/<run_id>.log``; o worker grava também
``<run_id>.state.json`` com os totais acumulados após cada ciclo.
"""

import json
import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Iterator, List, Optional
from uuid import uuid4

LOG_DIR = Path("logs")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
ROOT_LOGGER = "djeautomation"
STATE_SUFFIX = ".state.json"


@dataclass
class RunLog:
    run_id: str
    log_path: Path
    state_path: Optional[Path]
    modified: datetime
    size_bytes: int

    def load_state(self) -> dict[str, Any] | None:
        if self.state_path is None:
            return None
        try:
            return json.loads(self.state_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return None

    def remove(self) -> None:
        self.log_path.unlink(missing_ok=True)
        if self.state_path is not None:
            self.state_path.unlink(missing_ok=True)


def generate_run_id() -> str:
    return f"dje-{datetime.now():%Y%m%d-%H%M%S}-{uuid4().hex[:6]}"


def setup_run_logger(run_id: str, log_dir: Path = LOG_DIR, level: int = logging.INFO) -> Path:
    """Direciona os logs do pacote para ``<log_dir>/<run_id>.log``."""

    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"{run_id}.log"
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger = logging.getLogger(ROOT_LOGGER)
    for old in [h for h in logger.handlers if isinstance(h, logging.FileHandler)]:
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    logger.setLevel(level)
    return log_path


def state_path(run_id: str, log_dir: Path = LOG_DIR) -> Path:
    return log_dir / f"{run_id}{STATE_SUFFIX}"


def write_state(run_id: str, state: dict[str, Any], log_dir: Path = LOG_DIR) -> Path:
    log_dir.mkdir(parents=True, exist_ok=True)
    path = state_path(run_id, log_dir)
    path.write_text(json.dumps(state, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def _scan(log_dir: Path) -> Iterator[RunLog]:
    if not log_dir.is_dir():
        return
    for log_path in log_dir.glob("*.log"):
        try:
            info = log_path.stat()
        except FileNotFoundError:
            continue
        state = state_path(log_path.stem, log_dir)
        yield RunLog(
            run_id=log_path.stem,
            log_path=log_path,
            state_path=state if state.exists() else None,
            modified=datetime.fromtimestamp(info.st_mtime),
            size_bytes=info.st_size,
        )


def list_logs(limit: int | None = None, log_dir: Path = LOG_DIR) -> List[RunLog]:
    """Execuções mais recentes primeiro."""

    runs = sorted(_scan(log_dir), key=lambda run: run.modified, reverse=True)
    return runs[:limit] if limit is not None else runs


def show_log(run_id: str, tail: bool = False, lines: int = 50, log_dir: Path = LOG_DIR) -> str:
    log_path = log_dir / f"{run_id}.log"
    if not log_path.exists():
        raise FileNotFoundError(f"Log {log_path} não encontrado")
    with log_path.open(encoding="utf-8", errors="ignore") as handle:
        content = deque(handle, maxlen=lines) if tail and lines > 0 else list(handle)
    return "".join(content).rstrip("\n")


def show_state(run_id: str, log_dir: Path = LOG_DIR) -> str:
    path = state_path(run_id, log_dir)
    if not path.exists():
        raise FileNotFoundError(f"Resumo {path} não encontrado")
    return path.read_text(encoding="utf-8")


def cleanup_logs(max_days: int | None = None, max_mb: int | None = None, log_dir: Path = LOG_DIR) -> dict:
    """Remove execuções antigas por idade e depois por tamanho total do diretório."""

    oldest_first = sorted(_scan(log_dir), key=lambda run: run.modified)
    remaining = sum(run.size_bytes for run in oldest_first)
    cutoff = datetime.now() - timedelta(days=max_days) if max_days and max_days > 0 else None
    budget = max_mb * 1024 * 1024 if max_mb and max_mb > 0 else None

    deleted: List[str] = []
    for run in oldest_first:
        expired = cutoff is not None and run.modified < cutoff
        over_budget = budget is not None and remaining > budget
        if not (expired or over_budget):
            continue
        run.remove()
        remaining -= run.size_bytes
        deleted.append(run.run_id)
    return {"deleted": deleted, "remaining_bytes": remaining}
