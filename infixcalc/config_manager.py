# config_manager.py
import json
from pathlib import Path

config_json = Path(__file__).resolve().parent / "config.json"
ui_strings = Path(__file__).resolve().parent / "ui_strings.json"


# Used for every key config.json does not provide
DEFAULT_SETTINGS = {
    "precision": 50,
    "max_nesting_depth": 64,
    "decimal_places": 10,
    "fractions": False,
    "use_degrees": False,
    "darkmode": False,
    "after_paste_enter": False
}

# Hard ceiling for max_nesting_depth; deeper nesting would exhaust the interpreter stack
NESTING_LIMIT = 150


def load_setting_value(key_value):
    try:
        with open(config_json, 'r', encoding= 'utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return {}


    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, DEFAULT_SETTINGS.get(key_value, 0))


def load_setting_description(key_value):
    try:
        with open(ui_strings, 'r', encoding= 'utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return {}


    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def load_settings(overrides=None):
    """All settings: defaults, then config.json, then `overrides`."""
    settings = dict(DEFAULT_SETTINGS)
    settings.update(load_setting_value("all"))
    if overrides:
        settings.update(overrides)

    settings["max_nesting_depth"] = max(1, min(int(settings["max_nesting_depth"]), NESTING_LIMIT))
    settings["precision"] = max(2, int(settings["precision"]))
    return settings


def save_setting(settings_dict):
    try:
        with open (config_json, 'w', encoding= 'utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError:
        return{}
