"""
Generation Logger - Structured logging for page generation runs.

Each generation produces one request event and exactly one terminal event:
- generation_request:  page, model, prompt preview
- generation_complete: chunks received, HTML length, latency
- generation_error:    provider failure, nothing persisted
- generation_aborted:  client disconnected, nothing persisted

Log Format:
==========
    [2025-07-01 12:00:00] INFO [pagen.ai] Generation complete: {"event": ...}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Configure the AI logger
logger = logging.getLogger("pagen.ai")
logger.setLevel(logging.INFO)

# Create console handler if not exists
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


class GenerationLogger:
    """
    Structured logger for page generation.

    Usage:
        gen_logger = GenerationLogger()
        gen_logger.log_request(page_id=1, model="deepseek-v3", prompt=prompt)
        ...
        gen_logger.log_complete(page_id=1, model="deepseek-v3", chunks=42,
                                html_length=9000, latency_ms=15000)
    """

    def __init__(self, base_logger: Optional[logging.Logger] = None):
        self._logger = base_logger or logger

    def _payload(self, event: str, page_id: int, model: str, **fields: Any) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "event": event,
            "page_id": page_id,
            "model": model,
        }
        data.update(fields)
        data["timestamp"] = datetime.now(timezone.utc).isoformat()
        return data

    def log_request(self, page_id: int, model: str, prompt: str) -> None:
        data = self._payload(
            "generation_request",
            page_id,
            model,
            prompt_length=len(prompt),
            prompt_preview=prompt[:100] + "..." if len(prompt) > 100 else prompt,
        )
        self._logger.info(f"Generation request: {json.dumps(data, ensure_ascii=False)}")

    def log_complete(
        self,
        page_id: int,
        model: str,
        chunks: int,
        html_length: int,
        latency_ms: float,
    ) -> None:
        data = self._payload(
            "generation_complete",
            page_id,
            model,
            chunks=chunks,
            html_length=html_length,
            latency_ms=round(latency_ms, 1),
        )
        self._logger.info(f"Generation complete: {json.dumps(data, ensure_ascii=False)}")

    def log_error(
        self,
        page_id: int,
        model: str,
        error: str,
        chunks: int = 0,
        latency_ms: float = 0.0,
    ) -> None:
        data = self._payload(
            "generation_error",
            page_id,
            model,
            error=error,
            chunks=chunks,
            latency_ms=round(latency_ms, 1),
        )
        self._logger.error(f"Generation error: {json.dumps(data, ensure_ascii=False)}")

    def log_aborted(self, page_id: int, model: str, chunks: int, latency_ms: float) -> None:
        data = self._payload(
            "generation_aborted",
            page_id,
            model,
            chunks=chunks,
            latency_ms=round(latency_ms, 1),
        )
        self._logger.warning(f"Generation aborted: {json.dumps(data, ensure_ascii=False)}")


# Singleton instance for convenience
generation_logger = GenerationLogger()
