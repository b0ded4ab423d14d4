"""
Effect preset storage for Rover Lens.

This module persists named effect presets (an effect kind plus its knob
values) in a JSON file.

The preset file schema:
- schema_version: integer
- presets: {name: {"effect": <effect name>, "params": {<knob>: <value>}}}

Functions:
    load_preset_data: Load and validate the whole preset file
    save_preset: Add or replace a named preset
    load_preset: Load a named preset as (EffectKind, parameters)
    list_presets: List preset names
    delete_preset: Remove a named preset
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union
import logging

from RL_Libs.constants import (
    FIELD_EFFECT,
    FIELD_PARAMS,
    FIELD_PRESETS,
    FIELD_SCHEMA_VERSION,
    PRESET_SCHEMA_VERSION,
    PRESETS_FILE_NAME,
)
from RL_Libs.EffectsLib.effect_params import (
    EffectKind,
    EffectParameters,
    params_from_dict,
    parse_effect_kind,
)
from RL_Libs.EffectsLib.effect_pipeline import resolve_params

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def get_presets_path(directory: PathLike) -> Path:
    """Path of the preset file inside a directory."""
    return Path(directory) / PRESETS_FILE_NAME


def _empty_preset_data() -> Dict[str, Any]:
    return {
        FIELD_SCHEMA_VERSION: PRESET_SCHEMA_VERSION,
        FIELD_PRESETS: {},
    }


def load_preset_data(preset_file: PathLike) -> Dict[str, Any]:
    """
    Load the preset file with validation.

    A missing file yields an empty preset collection.

    Raises:
        ValueError: If the file is not valid JSON, has an unsupported schema
                    version, or the presets entry is malformed
    """
    preset_file = Path(preset_file)
    if not preset_file.exists():
        return _empty_preset_data()

    try:
        data = json.loads(preset_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Preset file {preset_file} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Preset file {preset_file} must contain a JSON object")

    version = data.get(FIELD_SCHEMA_VERSION, PRESET_SCHEMA_VERSION)
    if version != PRESET_SCHEMA_VERSION:
        raise ValueError(
            f"Unsupported preset schema version {version} in {preset_file} "
            f"(expected {PRESET_SCHEMA_VERSION})"
        )

    presets = data.get(FIELD_PRESETS, {})
    if not isinstance(presets, dict):
        raise ValueError(f"'{FIELD_PRESETS}' in {preset_file} must be an object")

    return {
        FIELD_SCHEMA_VERSION: PRESET_SCHEMA_VERSION,
        FIELD_PRESETS: presets,
    }


def _write_preset_data(preset_file: Path, data: Dict[str, Any]) -> None:
    preset_file.parent.mkdir(parents=True, exist_ok=True)
    preset_file.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")


def save_preset(
    preset_file: PathLike,
    name: str,
    kind: Union[str, EffectKind],
    params: Union[EffectParameters, Dict[str, Any], None] = None,
) -> None:
    """
    Add or replace a named preset.

    Raises:
        ValueError: If name is empty or the effect kind is unknown
    """
    name = str(name).strip()
    if not name:
        raise ValueError("Preset name cannot be empty")

    preset_file = Path(preset_file)
    resolved = resolve_params(kind, params)

    data = load_preset_data(preset_file)
    data[FIELD_PRESETS][name] = {
        FIELD_EFFECT: resolved.kind.value,
        FIELD_PARAMS: resolved.to_dict(),
    }
    _write_preset_data(preset_file, data)
    logger.debug(f"Saved preset '{name}' ({resolved.kind.value}) to {preset_file}")


def load_preset(preset_file: PathLike, name: str) -> Tuple[EffectKind, EffectParameters]:
    """
    Load a named preset.

    Raises:
        KeyError: If no preset has that name
        ValueError: If the preset names an unknown effect
    """
    presets = load_preset_data(preset_file)[FIELD_PRESETS]
    if name not in presets:
        available = ", ".join(sorted(presets)) or "(none)"
        raise KeyError(f"No preset named '{name}'. Available presets: {available}")

    entry = presets[name]
    if not isinstance(entry, dict) or not isinstance(entry.get(FIELD_PARAMS, {}), dict):
        raise ValueError(f"Preset '{name}' is malformed")
    kind = parse_effect_kind(entry.get(FIELD_EFFECT, ""))
    return kind, params_from_dict(kind, entry.get(FIELD_PARAMS) or {})


def list_presets(preset_file: PathLike) -> List[str]:
    return sorted(load_preset_data(preset_file)[FIELD_PRESETS])


def delete_preset(preset_file: PathLike, name: str) -> bool:
    """
    Remove a named preset.

    Returns:
        True if removed, False if no preset had that name
    """
    preset_file = Path(preset_file)
    data = load_preset_data(preset_file)
    if name not in data[FIELD_PRESETS]:
        return False

    del data[FIELD_PRESETS][name]
    _write_preset_data(preset_file, data)
    return True
