from __future__ import annotations

import importlib
import sys
import types
from typing import Callable

import pytest


class ManualScheduler:
    def __init__(self) -> None:
        self.fn: Callable[[], None] | None = None
        self.interval: float | None = None
        self.scheduled = 0
        self.cancelled = 0

    def every(self, interval_seconds: float, fn: Callable[[], None]) -> None:
        self.fn = fn
        self.interval = interval_seconds
        self.scheduled += 1

    def cancel(self) -> None:
        self.fn = None
        self.cancelled += 1

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            assert self.fn is not None, "nothing scheduled"
            self.fn()


@pytest.fixture
def manual_scheduler() -> ManualScheduler:
    return ManualScheduler()


class RecordingSink:
    def __init__(self, known: set[str] | None = None) -> None:
        self.known = known if known is not None else {"Ticker"}
        self.applied: list[tuple[str, str]] = []

    def __call__(self, source_name: str, text: str) -> bool:
        if source_name not in self.known:
            return False
        self.applied.append((source_name, text))
        return True

    @property
    def texts(self) -> list[str]:
        return [text for _, text in self.applied]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


class FakeObsData:
    def __init__(self, values: dict | None = None) -> None:
        self.values = dict(values or {})
        self.defaults: dict = {}
        self.released = False

    def get(self, key, fallback):
        if key in self.values:
            return self.values[key]
        return self.defaults.get(key, fallback)


class FakeSource:
    def __init__(self, name: str, unversioned_id: str) -> None:
        self.name = name
        self.unversioned_id = unversioned_id
        self.text: str | None = None
        self.refs = 0


class FakeProperties:
    def __init__(self) -> None:
        self.props: dict[str, dict] = {}


def build_fake_obs() -> types.ModuleType:
    obs = types.ModuleType("obspython")
    obs.LOG_ERROR, obs.LOG_WARNING, obs.LOG_INFO, obs.LOG_DEBUG = 100, 200, 300, 400
    obs.OBS_INVALID_HOTKEY_ID = -1
    obs.OBS_COMBO_TYPE_EDITABLE = "editable"
    obs.OBS_COMBO_FORMAT_STRING = "string"
    obs.OBS_TEXT_DEFAULT = "default"
    obs.OBS_TEXT_MULTILINE = "multiline"

    obs.logs = []
    obs.timers = []
    obs.sources = {}
    obs.hotkeys = {}
    obs.hotkey_bindings = {}
    obs.list_prop_fails = False

    obs.script_log = lambda level, msg: obs.logs.append((level, msg))

    def timer_add(fn, ms):
        obs.timers.append((fn, ms))

    def timer_remove(fn):
        obs.timers[:] = [(f, ms) for f, ms in obs.timers if f is not fn]

    obs.timer_add = timer_add
    obs.timer_remove = timer_remove

    def add_source(name, unversioned_id="text_gdiplus_v2"):
        obs.sources[name] = FakeSource(name, unversioned_id)
        return obs.sources[name]

    obs.add_source = add_source

    def get_source_by_name(name):
        src = obs.sources.get(name)
        if src is not None:
            src.refs += 1
        return src

    def source_release(src):
        src.refs -= 1

    obs.obs_get_source_by_name = get_source_by_name
    obs.obs_source_release = source_release
    obs.obs_enum_sources = lambda: list(obs.sources.values())
    obs.source_list_release = lambda sources: None
    obs.obs_source_get_unversioned_id = lambda src: src.unversioned_id
    obs.obs_source_get_name = lambda src: src.name

    obs.obs_data_create = FakeObsData

    def data_release(data):
        data.released = True

    def source_update(src, data):
        src.text = data.values.get("text")

    obs.obs_data_release = data_release
    obs.obs_data_set_string = lambda data, key, value: data.values.__setitem__(key, value)
    obs.obs_data_get_string = lambda data, key: data.get(key, "")
    obs.obs_data_get_int = lambda data, key: data.get(key, 0)
    obs.obs_data_set_default_int = lambda data, key, value: data.defaults.__setitem__(key, value)
    obs.obs_data_set_default_string = lambda data, key, value: data.defaults.__setitem__(key, value)
    obs.obs_source_update = source_update

    obs.obs_properties_create = FakeProperties

    def add_prop(props, name, **info):
        props.props[name] = info
        return info

    def properties_add_list(props, name, desc, combo_type, combo_format):
        if obs.list_prop_fails:
            raise TypeError("obs_properties_add_list signature mismatch")
        return add_prop(props, name, kind="list", desc=desc, combo_type=combo_type, items=[])

    obs.obs_properties_add_list = properties_add_list
    obs.obs_property_list_add_string = lambda prop, name, value: prop["items"].append((name, value))
    obs.obs_properties_add_text = lambda props, name, desc, text_type: add_prop(
        props, name, kind="text", desc=desc, text_type=text_type
    )
    obs.obs_properties_add_int = lambda props, name, desc, lo, hi, step: add_prop(
        props, name, kind="int", desc=desc, range=(lo, hi, step)
    )
    obs.obs_properties_add_button = lambda props, name, desc, callback: add_prop(
        props, name, kind="button", desc=desc, callback=callback
    )

    def hotkey_register_frontend(name, desc, callback):
        hotkey_id = len(obs.hotkeys) + 1
        obs.hotkeys[hotkey_id] = (name, desc, callback)
        return hotkey_id

    def hotkey_load(hotkey_id, array):
        obs.hotkey_bindings[hotkey_id] = list(array)

    obs.obs_hotkey_register_frontend = hotkey_register_frontend
    obs.obs_hotkey_load = hotkey_load
    obs.obs_hotkey_save = lambda hotkey_id: list(obs.hotkey_bindings.get(hotkey_id, []))
    obs.obs_data_get_array = lambda data, key: list(data.values.get(key, []))
    obs.obs_data_set_array = lambda data, key, array: data.values.__setitem__(key, array)
    obs.obs_data_array_release = lambda array: None
    return obs


@pytest.fixture
def fake_obs(monkeypatch: pytest.MonkeyPatch) -> types.ModuleType:
    obs = build_fake_obs()
    monkeypatch.setitem(sys.modules, "obspython", obs)
    return obs


@pytest.fixture
def obs_script(fake_obs, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delitem(sys.modules, "obs_text_cycle", raising=False)
    module = importlib.import_module("obs_text_cycle")
    yield module
    module.script_unload()
    sys.modules.pop("obs_text_cycle", None)


@pytest.fixture
def settings_factory() -> Callable[..., FakeObsData]:
    def _factory(**values: object) -> FakeObsData:
        return FakeObsData(values)

    return _factory
