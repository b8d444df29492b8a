"""
OBS WebSocket Python client (obsws-python) for driving text inputs.

Install:
  pip install obsws-python

Env vars (recommended):
  OBS_WS_HOST, OBS_WS_PORT, OBS_WS_PASSWORD
"""

import logging
import os
from dataclasses import dataclass
from typing import List

from obsws_python import ReqClient
from obsws_python.error import OBSSDKRequestError

logger = logging.getLogger(__name__)

TEXT_INPUT_KINDS = (
    "text_gdiplus",
    "text_ft2_source",
)


@dataclass
class ObsWsConfig:
    host: str = "localhost"
    port: int = 4455
    password: str = ""

    @staticmethod
    def from_env() -> "ObsWsConfig":
        host = os.getenv("OBS_WS_HOST", "localhost")
        port = int(os.getenv("OBS_WS_PORT", "4455"))
        password = os.getenv("OBS_WS_PASSWORD", "")
        return ObsWsConfig(host=host, port=port, password=password)


class ObsController:
    def __init__(self, cfg: ObsWsConfig, client=None):
        self.cfg = cfg
        if client is None:
            client = ReqClient(host=cfg.host, port=cfg.port, password=cfg.password)
        self.client = client

    def set_text(self, input_name: str, text: str) -> bool:
        """Overlay ``text`` onto the input's settings. False when OBS rejects the input."""
        try:
            self.client.set_input_settings(input_name, {"text": text}, True)
        except OBSSDKRequestError as e:
            logger.debug(f"set_input_settings failed for '{input_name}': {e}")
            return False
        return True

    def list_text_inputs(self) -> List[str]:
        inputs = self.client.get_input_list().inputs or []
        return [inp.get("inputName") for inp in inputs if inp.get("unversionedInputKind") in TEXT_INPUT_KINDS]

    def disconnect(self):
        self.client.disconnect()
