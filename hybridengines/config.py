"""Preference loading and JSON preprocessing utilities."""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path

from .paths import get_preferences_path

DEFAULT_CORDOVA_COMMAND = "cordova"

# Preference key holding the "id:version,id:version" default engine string.
PREF_DEFAULT_ENGINES = "default_engines"


class ConfigError(Exception):
    """Raised when preference or state file loading fails.

    Provides detailed error messages including line numbers,
    column positions, and caret indicators for syntax errors.
    """
    pass


@dataclass
class Preferences:
    """User preferences shared by every project."""
    default_engines: str | None = None
    engine_root: str | None = None
    local_engines: list[str] = field(default_factory=list)
    cordova_command: str = DEFAULT_CORDOVA_COMMAND

    def __post_init__(self):
        if not self.cordova_command or not isinstance(self.cordova_command, str):
            raise ValueError("cordova_command must be a non-empty string")
        if not isinstance(self.local_engines, list):
            raise ValueError("local_engines must be a list")


def validate_preferences(data: dict) -> Preferences:
    """Validate and convert raw dict to a Preferences dataclass.

    Args:
        data: Raw dict from load_config()

    Returns:
        Preferences with validated fields

    Raises:
        ConfigError: If validation fails with clear field path errors
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Preferences must be a JSON object, got {type(data).__name__}")

    for field_name in (PREF_DEFAULT_ENGINES, "engine_root"):
        value = data.get(field_name)
        if value is not None and not isinstance(value, str):
            raise ConfigError(
                f"{field_name} must be a string or null, got {type(value).__name__}"
            )

    local_engines = data.get("local_engines") or []
    if not isinstance(local_engines, list):
        raise ConfigError(
            f"local_engines must be a list, got {type(local_engines).__name__}"
        )
    for i, location in enumerate(local_engines):
        if not isinstance(location, str) or not location.strip():
            raise ConfigError(f"local_engines[{i}] must be a non-empty string")

    cordova_command = data.get("cordova_command", DEFAULT_CORDOVA_COMMAND)
    if not isinstance(cordova_command, str) or not cordova_command.strip():
        raise ConfigError("cordova_command must be a non-empty string")

    try:
        return Preferences(
            default_engines=data.get(PREF_DEFAULT_ENGINES),
            engine_root=data.get("engine_root"),
            local_engines=list(local_engines),
            cordova_command=cordova_command,
        )
    except ValueError as e:
        raise ConfigError(str(e))


def preprocess_jsonish(text: str) -> str:
    """
    Preprocess JSON-ish text into strict JSON.

    Strips // line comments and trailing commas before ] or }. Stripped
    characters become spaces so line/column positions in error messages
    still point at the original text.
    """
    out = list(text)
    n = len(text)
    i = 0
    in_string = False

    while i < n:
        char = text[i]
        if in_string:
            if char == "\\":
                i += 2
                continue
            if char == '"':
                in_string = False
            i += 1
            continue

        if char == '"':
            in_string = True
        elif char == "/" and i + 1 < n and text[i + 1] == "/":
            while i < n and text[i] != "\n":
                out[i] = " "
                i += 1
            continue
        elif char == ",":
            # Trailing comma: only whitespace and comments until ] or }
            j = i + 1
            while j < n:
                if text[j] in " \t\r\n":
                    j += 1
                elif text.startswith("//", j):
                    while j < n and text[j] != "\n":
                        j += 1
                else:
                    break
            if j < n and text[j] in "]}":
                out[i] = " "
        i += 1

    return "".join(out)


def _format_syntax_error(original_text: str, error: json.JSONDecodeError, source: str) -> str:
    lines = original_text.split("\n")
    msg_parts = [
        f"{source} syntax error at line {error.lineno}, col {error.colno}: {error.msg}"
    ]
    if 1 <= error.lineno <= len(lines):
        msg_parts.append(lines[error.lineno - 1])
        msg_parts.append(" " * (error.colno - 1) + "^")
    return "\n".join(msg_parts)


def load_config(path_or_text: Path | str) -> dict:
    """Load and parse a JSON object from a file or raw text.

    The input can be 'JSON-ish': trailing commas and // line comments are
    tolerated.

    Raises:
        ConfigError: If the file cannot be read, contains syntax errors or
            is not a JSON object.
        TypeError: If path_or_text is neither Path nor str.
    """
    if isinstance(path_or_text, Path):
        source = path_or_text.name
        try:
            original_text = path_or_text.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ConfigError(f"File not found: {path_or_text}")
        except PermissionError:
            raise ConfigError(f"Permission denied reading file: {path_or_text}")
        except UnicodeDecodeError:
            raise ConfigError(f"File is not valid UTF-8: {path_or_text}")
        except OSError as e:
            raise ConfigError(f"Error reading file {path_or_text}: {e}")
    elif isinstance(path_or_text, str):
        source = "Config"
        original_text = path_or_text
    else:
        raise TypeError(f"path_or_text must be Path or str, got {type(path_or_text).__name__}")

    try:
        result = json.loads(preprocess_jsonish(original_text))
    except json.JSONDecodeError as e:
        raise ConfigError(_format_syntax_error(original_text, e, source)) from e

    if not isinstance(result, dict):
        raise ConfigError(f"{source} must be a JSON object, got {type(result).__name__}")

    return result


def load_preferences(path: Path | None = None) -> Preferences:
    """Load user preferences; a missing file means "all defaults"."""
    if path is None:
        path = get_preferences_path()
    if not path.exists():
        return Preferences()
    return validate_preferences(load_config(path))


def save_preferences(preferences: Preferences, path: Path | None = None) -> None:
    """Write preferences as strict JSON."""
    if path is None:
        path = get_preferences_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(preferences), f, indent=2)
        f.write("\n")


__all__ = [
    "ConfigError",
    "DEFAULT_CORDOVA_COMMAND",
    "PREF_DEFAULT_ENGINES",
    "Preferences",
    "validate_preferences",
    "preprocess_jsonish",
    "load_config",
    "load_preferences",
    "save_preferences",
]
