"""Config utility for persistent PhotonRename settings.

Stores default rename options in ~/.config/photonrename/config.toml (or under
$XDG_CONFIG_HOME) and resolves every option with the precedence
CLI > environment > config file > built-in default. Uses tomli/tomli-w for
TOML parsing and writing.
"""

import contextlib
import os
from pathlib import Path
from typing import Any, Dict, Optional, TypeVar, cast

import tomli
import tomli_w

from photonrename.models.config import RenameConfig

# XDG_CONFIG_HOME wins over ~/.config when set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
CONFIG_DIR = _xdg_config_home / "photonrename"
CONFIG_FILE = CONFIG_DIR / "config.toml"

ENV_PREFIX = "PHOTONRENAME_"
RENAME_SECTION = "rename"

_TRUTHY = {"1", "true", "yes", "on"}

T = TypeVar("T")


def _read_config_file() -> Dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""
    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: Dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve ``data["a"]["b"]`` for ``"a.b"``, or None if any level is missing."""
    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = ENV_PREFIX) -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "rename.start_number" -> "PHOTONRENAME_RENAME_START_NUMBER".
    """
    return prefix + dotted_key.replace(".", "_").upper()


def _coerce(value: Any, default: T) -> T:
    """Coerce a raw env/config value to the type of *default*.

    Unparseable values fall back to *default*.
    """
    if isinstance(default, bool):
        if isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            return cast(T, value.lower() in _TRUTHY)
        return default
    if isinstance(default, int):
        if isinstance(value, int) and not isinstance(value, bool):
            return cast(T, value)
        with contextlib.suppress(ValueError, TypeError):
            return cast(T, int(value))
        return default
    if isinstance(default, str):
        return cast(T, str(value))
    return cast(T, value)


def resolve_setting(key: str, *, default: T, cli_value: Optional[T] = None) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"rename.pattern"``.
        default: Value to fall back to when no overrides found.
        cli_value: Value passed from a CLI option (``None`` when not provided).

    Returns:
        The resolved value, coerced to the type of *default*.
    """
    if cli_value is not None:
        return cli_value

    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce(file_val, default)

    return default


def set_setting(key: str, value: Any) -> None:
    """Persist *value* under dotted *key* in config.toml."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    *parents, leaf = key.split(".")
    section = data
    for part in parents:
        section = section.setdefault(part, {})
    section[leaf] = value
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)


def rename_setting_names() -> list[str]:
    """Names of the rename options that can be stored as defaults."""
    return list(RenameConfig.model_fields)


def set_rename_default(name: str, raw_value: str) -> Any:
    """Store a default for rename option *name*, parsed from a CLI string.

    Returns:
        The value that was written.

    Raises:
        KeyError: If *name* is not a rename option.
        ValueError: If *raw_value* does not parse as the option's type.
    """
    if name not in RenameConfig.model_fields:
        raise KeyError(name)
    default = RenameConfig.model_fields[name].default
    if isinstance(default, bool):
        value: Any = raw_value.lower() in _TRUTHY
    elif isinstance(default, int):
        value = int(raw_value)
    else:
        value = raw_value
    # Validate against the model before persisting.
    RenameConfig(**{name: value})
    set_setting(f"{RENAME_SECTION}.{name}", value)
    return value


def resolve_rename_config(**cli_values: Any) -> RenameConfig:
    """Build a RenameConfig from CLI values, env, config file and defaults.

    Args:
        **cli_values: RenameConfig field values from the command line; ``None``
            means "not given".
    """
    resolved = {
        name: resolve_setting(
            f"{RENAME_SECTION}.{name}",
            default=field.default,
            cli_value=cli_values.get(name),
        )
        for name, field in RenameConfig.model_fields.items()
    }
    return RenameConfig(**resolved)
