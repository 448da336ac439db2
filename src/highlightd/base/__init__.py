# -*- mode: python; encoding: utf-8 -*-
#
# Copyright 2021 the highlightd contributors
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may not
# use this file except in compliance with the License.  You may obtain a copy of
# the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.  See the
# License for the specific language governing permissions and limitations under
# the License.

from contextvars import ContextVar
import os
import sys
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, TypeVar

import yaml


class Error(Exception):
    pass


class InvalidConfiguration(Error):
    pass


class MissingConfiguration(Error):
    pass


def in_virtualenv() -> bool:
    return sys.prefix != sys.base_prefix


def settings_dir() -> str:
    if "HIGHLIGHTD_HOME" in os.environ:
        return os.path.join(os.environ["HIGHLIGHTD_HOME"], "etc")
    # If installed in a virtual environment (default case) then return a sub-
    # directory inside the virtual environment.
    if in_virtualenv():
        return os.path.join(sys.prefix, "etc")
    # Otherwise, fall back to a reasonable system directory.
    return "/etc/highlightd"


def settings_path() -> str:
    return os.path.join(settings_dir(), "settings.yaml")


Settings = Mapping[str, Any]

_SETTINGS: ContextVar[Settings] = ContextVar("settings")


def default_settings() -> Dict[str, Tuple[str, Any]]:
    """Return the packaged defaults as {key: (description, value)}

    Keys are dotted paths, e.g. "service.port"."""

    from highlightd import data

    defaults: Dict[str, Tuple[str, Any]] = {}

    def process(key_path, structure):
        assert isinstance(structure, dict), (key_path, structure)
        if "value" in structure and "description" in structure:
            assert key_path
            key = ".".join(key_path)
            assert key not in defaults
            defaults[key] = (structure["description"], structure["value"])
        else:
            for key, substructure in structure.items():
                process(key_path + [key], substructure)

    process([], data.load_yaml("settings.yaml"))
    return defaults


def flatten(structure: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    flattened: Dict[str, Any] = {}
    for key, value in structure.items():
        key = f"{prefix}{key}"
        if isinstance(value, dict):
            flattened.update(flatten(value, key + "."))
        else:
            flattened[key] = value
    return flattened


def _check_value(key: str, value: Any, default: Any) -> None:
    if default is None or value is None:
        return
    # bool is a subclass of int, so compare the exact types.
    if type(value) is not type(default):
        raise InvalidConfiguration(
            f"{key}: expected {type(default).__name__}, got {value!r}"
        )
    if isinstance(default, list) and not all(isinstance(item, str) for item in value):
        raise InvalidConfiguration(f"{key}: expected a list of strings, got {value!r}")


def load_settings(
    path: Optional[str] = None, overrides: Optional[Mapping[str, Any]] = None
) -> Settings:
    """Load defaults, then |path| (if it exists), then |overrides|"""

    settings = {key: value for key, (_, value) in default_settings().items()}

    def apply(source: str, values: Mapping[str, Any]) -> None:
        for key, value in values.items():
            if key not in settings:
                raise InvalidConfiguration(f"{source}: unknown setting: {key}")
            _check_value(key, value, settings[key])
            settings[key] = value

    if path is None:
        path = settings_path()

    try:
        with open(path, "r", encoding="utf-8") as file:
            site_settings = yaml.safe_load(file)
    except FileNotFoundError:
        site_settings = None
    except OSError as error:
        raise MissingConfiguration(f"{path}: {error}") from None
    except yaml.YAMLError as error:
        raise InvalidConfiguration(f"{path}: {error}") from None

    if site_settings is not None:
        if not isinstance(site_settings, dict):
            raise InvalidConfiguration(f"{path}: expected a mapping")
        apply(path, flatten(site_settings))

    if overrides:
        apply(
            "overrides",
            {key: value for key, value in overrides.items() if value is not None},
        )

    return MappingProxyType(settings)


def settings() -> Settings:
    try:
        return _SETTINGS.get()
    except LookupError:
        pass

    loaded = load_settings()
    _SETTINGS.set(loaded)
    return loaded


def configure(settings: Settings) -> None:
    _SETTINGS.set(settings)


T = TypeVar("T")


def asserted(value: Optional[T]) -> T:
    assert value is not None
    return value


__all__ = [
    "Error",
    "InvalidConfiguration",
    "MissingConfiguration",
    "Settings",
    "asserted",
    "configure",
    "default_settings",
    "load_settings",
    "settings",
    "settings_dir",
]
