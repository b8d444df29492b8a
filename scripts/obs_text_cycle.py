# Requires the repository to be installed into the Python used by OBS:
#   pip install -e .

import obspython as obs
import logging

from skills.text_cycle.templates.cycler import (
    DEFAULT_INTERVAL_SECONDS,
    DEFAULT_TEXT_LIST,
    MAX_INTERVAL_SECONDS,
    MIN_INTERVAL_SECONDS,
    TextCycler,
)
from skills.text_cycle.templates.rotator import parse_text_list

# -----------------------------
# Constants and shared state
# -----------------------------
_TAG = "[text-cycle]"
HOTKEY_NAME = "force_cycle_text.hotkey"
HOTKEY_DESCRIPTION = "(Text Cycle) Cycle Text Now"

TEXT_SOURCE_IDS = (
    "text_gdiplus",
    "text_gdiplus_v2",
    "text_gdiplus_v3",
    "text_ft2_source",
    "text_ft2_source_v2",
)

_hotkey_id = obs.OBS_INVALID_HOTKEY_ID
_log_handler = None

# End section: constants and shared state


# -----------------------------
# Logging helpers
# -----------------------------
def _log(level, msg):
    # Purpose: Prefix and route script log messages through OBS logging.
    obs.script_log(level, f"{_TAG} {msg}")


class ObsLogHandler(logging.Handler):
    # Purpose: Forward records from the text_cycle library loggers to the OBS script log.

    def emit(self, record):
        try:
            msg = self.format(record)
        except Exception:
            self.handleError(record)
            return
        _log(_obs_level(record.levelno), msg)


def _obs_level(levelno):
    # Purpose: Map a logging level onto the matching OBS log level.
    if levelno >= logging.ERROR:
        return obs.LOG_ERROR
    if levelno >= logging.WARNING:
        return obs.LOG_WARNING
    if levelno >= logging.INFO:
        return obs.LOG_INFO
    return obs.LOG_DEBUG


def _attach_log_handler():
    # Purpose: Route text_cycle library logs to the OBS script log once per load.
    global _log_handler
    if _log_handler is not None:
        return
    _log_handler = ObsLogHandler()
    lib_logger = logging.getLogger("skills.text_cycle")
    lib_logger.addHandler(_log_handler)
    lib_logger.setLevel(logging.INFO)


def _detach_log_handler():
    # Purpose: Stop routing library logs when the script unloads.
    global _log_handler
    if _log_handler is None:
        return
    logging.getLogger("skills.text_cycle").removeHandler(_log_handler)
    _log_handler = None

# End section: logging helpers


# -----------------------------
# OBS host bindings
# -----------------------------
class ObsTimerScheduler:
    # Purpose: Drive a single repeating callback through the OBS timer API.

    def __init__(self):
        self._fn = None

    def every(self, interval_seconds, fn):
        self.cancel()
        self._fn = fn
        obs.timer_add(fn, int(interval_seconds * 1000))

    def cancel(self):
        if self._fn is not None:
            obs.timer_remove(self._fn)
            self._fn = None


def _set_text_on_source(source_name, text_value):
    # Purpose: Write the text into a source's settings; False when the source is missing.
    src = obs.obs_get_source_by_name(source_name)
    if not src:
        return False

    try:
        settings = obs.obs_data_create()
        try:
            obs.obs_data_set_string(settings, "text", text_value)
            obs.obs_source_update(src, settings)
        finally:
            obs.obs_data_release(settings)
        return True
    finally:
        obs.obs_source_release(src)


def _text_source_names():
    # Purpose: List the names of every existing text source.
    names = []
    sources = obs.obs_enum_sources()
    if sources is None:
        return names

    try:
        for source in sources:
            if obs.obs_source_get_unversioned_id(source) in TEXT_SOURCE_IDS:
                names.append(obs.obs_source_get_name(source))
    finally:
        obs.source_list_release(sources)
    return names


_cycler = TextCycler(apply=_set_text_on_source, scheduler=ObsTimerScheduler())

# End section: OBS host bindings


# -----------------------------
# Manual triggers
# -----------------------------
def force_cycle_text(props, prop):
    # Purpose: Button callback that cycles the text immediately.
    _cycler.cycle_now()
    return True


def on_cycle_hotkey(pressed):
    # Purpose: Hotkey callback; only the key-down edge cycles.
    if pressed:
        _cycler.cycle_now()

# End section: manual triggers


# -----------------------------
# OBS script metadata and UI
# -----------------------------
def script_description():
    # Purpose: Describe this script in the OBS Scripts panel.
    return "Cycles through a list of text strings for a specified text source at a set interval."


def script_defaults(settings):
    # Purpose: Define default values for user-configurable script properties.
    obs.obs_data_set_default_int(settings, "interval", DEFAULT_INTERVAL_SECONDS)
    obs.obs_data_set_default_string(settings, "text_list", DEFAULT_TEXT_LIST)


def script_properties():
    # Purpose: Build the source dropdown, text list, interval, and cycle button.
    props = obs.obs_properties_create()

    try:
        p = obs.obs_properties_add_list(
            props,
            "source_name",
            "Text Source",
            obs.OBS_COMBO_TYPE_EDITABLE,
            obs.OBS_COMBO_FORMAT_STRING,
        )
    except Exception as e:
        _log(obs.LOG_WARNING, f"Source dropdown unavailable ({e}); using a text field.")
        p = None

    if p is not None:
        for name in _text_source_names():
            obs.obs_property_list_add_string(p, name, name)
    else:
        obs.obs_properties_add_text(props, "source_name", "Text Source", obs.OBS_TEXT_DEFAULT)

    obs.obs_properties_add_text(props, "text_list", "Text List (one per line)", obs.OBS_TEXT_MULTILINE)
    obs.obs_properties_add_int(
        props, "interval", "Interval (seconds)", MIN_INTERVAL_SECONDS, MAX_INTERVAL_SECONDS, 1
    )
    obs.obs_properties_add_button(props, "force_cycle_btn", "Cycle Text Now", force_cycle_text)
    return props


def script_update(settings):
    # Purpose: Apply settings; resets the rotation and restarts the timer.
    source_name = obs.obs_data_get_string(settings, "source_name")
    text_list = parse_text_list(obs.obs_data_get_string(settings, "text_list"))
    interval = obs.obs_data_get_int(settings, "interval")

    _cycler.configure(source_name, text_list, interval)

# End section: OBS script metadata and UI


# -----------------------------
# OBS lifecycle registration
# -----------------------------
def script_load(settings):
    # Purpose: Register the cycle hotkey and restore its saved binding.
    global _hotkey_id
    _attach_log_handler()

    _hotkey_id = obs.obs_hotkey_register_frontend(HOTKEY_NAME, HOTKEY_DESCRIPTION, on_cycle_hotkey)
    a = obs.obs_data_get_array(settings, HOTKEY_NAME)
    try:
        obs.obs_hotkey_load(_hotkey_id, a)
    finally:
        obs.obs_data_array_release(a)
    _log(obs.LOG_INFO, "Loaded.")


def script_save(settings):
    # Purpose: Persist the hotkey binding.
    a = obs.obs_hotkey_save(_hotkey_id)
    try:
        obs.obs_data_set_array(settings, HOTKEY_NAME, a)
    finally:
        obs.obs_data_array_release(a)


def script_unload():
    # Purpose: Stop the timer when the script is unloaded.
    _cycler.stop()
    _log(obs.LOG_INFO, "Unloaded.")
    _detach_log_handler()

# End section: OBS lifecycle registration
