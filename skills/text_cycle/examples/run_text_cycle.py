"""
Example: cycle a text input over OBS WebSocket.

Requires:
  pip install obsws-python

Env vars:
  OBS_WS_HOST, OBS_WS_PORT, OBS_WS_PASSWORD
  TEXT_CYCLE_SOURCE, TEXT_CYCLE_LINES or TEXT_CYCLE_FILE, TEXT_CYCLE_INTERVAL
"""

import logging
import os

from skills.obs_websocket.templates.python_client import ObsWsConfig
from skills.text_cycle.templates.ws_text_cycle import TextCycleConfig, run


def main():
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run(TextCycleConfig.from_env(), ObsWsConfig.from_env())


if __name__ == "__main__":
    main()
