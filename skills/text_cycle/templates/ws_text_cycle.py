"""
Cycle a text input from outside OBS, over OBS WebSocket v5.

Env vars:
  TEXT_CYCLE_SOURCE    name of the text input to update (required)
  TEXT_CYCLE_LINES     newline-delimited list of strings
  TEXT_CYCLE_FILE      path to a UTF-8 file with one string per line
                       (used when TEXT_CYCLE_LINES is not set)
  TEXT_CYCLE_INTERVAL  seconds between changes (default: 30)

Connection settings come from OBS_WS_HOST, OBS_WS_PORT, OBS_WS_PASSWORD.
"""

import logging
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from skills.obs_websocket.templates.python_client import ObsController, ObsWsConfig
from skills.text_cycle.templates.cycler import DEFAULT_INTERVAL_SECONDS, TextCycler, validate_interval
from skills.text_cycle.templates.rotator import parse_text_list
from skills.text_cycle.templates.scheduler import ThreadScheduler

logger = logging.getLogger(__name__)


@dataclass
class TextCycleConfig:
    source_name: str
    items: List[str] = field(default_factory=list)
    interval: int = DEFAULT_INTERVAL_SECONDS

    @staticmethod
    def from_env() -> "TextCycleConfig":
        source_name = os.getenv("TEXT_CYCLE_SOURCE", "").strip()
        if not source_name:
            raise ValueError("TEXT_CYCLE_SOURCE is not set")

        lines = os.getenv("TEXT_CYCLE_LINES")
        file_path = os.getenv("TEXT_CYCLE_FILE", "")
        if lines is None:
            if not file_path:
                raise ValueError("Neither TEXT_CYCLE_LINES nor TEXT_CYCLE_FILE is set")
            path = Path(file_path)
            if not path.is_file():
                raise ValueError(f"TEXT_CYCLE_FILE not found: {file_path}")
            lines = path.read_text(encoding="utf-8", errors="replace")

        interval = os.getenv("TEXT_CYCLE_INTERVAL", str(DEFAULT_INTERVAL_SECONDS))
        return TextCycleConfig(
            source_name=source_name,
            items=parse_text_list(lines),
            interval=validate_interval(interval),
        )


def build_cycler(controller: ObsController, scheduler=None) -> TextCycler:
    return TextCycler(apply=controller.set_text, scheduler=scheduler or ThreadScheduler())


def run(cfg: TextCycleConfig, ws_cfg: Optional[ObsWsConfig] = None, stop_event=None):
    """Connect, start cycling, and block until ``stop_event`` is set or Ctrl+C."""
    controller = ObsController(ws_cfg or ObsWsConfig.from_env())
    cycler = build_cycler(controller)
    stop_event = stop_event or threading.Event()

    try:
        available = controller.list_text_inputs()
        if cfg.source_name not in available:
            logger.warning(f"Text input '{cfg.source_name}' not found; available: {', '.join(available) or 'none'}")

        cycler.configure(cfg.source_name, cfg.items, cfg.interval)
        logger.info(f"Cycling {len(cfg.items)} item(s) on '{cfg.source_name}' every {cycler.interval} s")

        while not stop_event.wait(0.5):
            pass
    except KeyboardInterrupt:
        logger.info("Interrupted; stopping.")
    finally:
        cycler.stop()
        controller.disconnect()
