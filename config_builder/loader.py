"""Descriptor loading, validation and merging.

A descriptor is a YAML file whose top level is a mapping with a ``vms`` list.
Several descriptors can be layered: later files override earlier ones, VM
entries are matched by ``name``.
"""

import copy
import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from config_builder.exceptions import (
    DescriptorNotFoundError,
    DescriptorParseError,
    DescriptorValidationError,
    ModelCollectionError,
    ModelError,
)
from config_builder.model import Root

logger = logging.getLogger(__name__)

SCHEMA_FILE = Path(__file__).parent / "schema" / "descriptor.schema.json"

# os.pathsep separated list of descriptor files used when none are given
DESCRIPTOR_ENV = "CONFIG_BUILDER_DESCRIPTOR"

# Module-level schema cache
_SCHEMA_CACHE: dict[str, dict] = {}


def _load_descriptor_schema() -> dict:
    """
    Load and cache the descriptor JSON schema.

    Raises:
        FileNotFoundError: If the schema file is missing from the installation
    """
    schema_name = "descriptor"
    if schema_name not in _SCHEMA_CACHE:
        if not SCHEMA_FILE.exists():
            raise FileNotFoundError(
                f"Descriptor schema file not found: {SCHEMA_FILE}\n"
                f"This indicates an incomplete installation. Please reinstall config-builder:\n"
                f"  pip install --force-reinstall config-builder"
            )
        _SCHEMA_CACHE[schema_name] = json.loads(SCHEMA_FILE.read_text())
    return _SCHEMA_CACHE[schema_name]


def validate_descriptor(data: Any) -> tuple[bool, list[str]]:
    """
    Validate the shape of descriptor data against the JSON schema.

    Args:
        data: Descriptor data as parsed from YAML

    Returns:
        tuple: (is_valid, error_messages)
    """
    try:
        validator = Draft7Validator(_load_descriptor_schema())
    except SchemaError as e:
        return (False, [f"Invalid descriptor schema: {e}"])
    except FileNotFoundError as e:
        return (False, [str(e)])

    errors = []
    for error in sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path]):
        path = ".".join(str(p) for p in error.path) if error.path else "root"
        message = f"Descriptor error at '{path}': {error.message}"
        if error.validator == "type":
            message += f" (expected {error.validator_value}, got {type(error.instance).__name__})"
        errors.append(message)

    return (not errors, errors)


def load_descriptor(path: str | Path) -> dict[str, Any]:
    """
    Load a single descriptor file.

    Args:
        path: Path to a YAML descriptor

    Returns:
        Descriptor data; an empty file yields an empty dict

    Raises:
        DescriptorNotFoundError: If the file doesn't exist
        DescriptorParseError: If the YAML can't be parsed
        DescriptorValidationError: If the top level is not a mapping
    """
    path = Path(path)
    if not path.is_file():
        raise DescriptorNotFoundError(str(path))

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise DescriptorParseError(str(path), str(e)) from e

    if data is None:
        logger.warning(f"Descriptor {path} is empty")
        return {}
    if not isinstance(data, dict):
        raise DescriptorValidationError(
            [f"top level must be a mapping, got {type(data).__name__}"], str(path)
        )

    logger.debug(f"Loaded descriptor {path}")
    return data


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = copy.deepcopy(value)
    return base


def _merge_vms(base_vms: list, override_vms: list) -> list:
    merged = copy.deepcopy(base_vms)
    by_name = {vm.get("name"): vm for vm in merged if isinstance(vm, dict) and vm.get("name")}

    for vm in override_vms:
        name = vm.get("name") if isinstance(vm, dict) else None
        if name is not None and name in by_name:
            logger.debug(f"Merging override for VM {name!r}")
            _deep_merge(by_name[name], vm)
        else:
            entry = copy.deepcopy(vm)
            merged.append(entry)
            if name is not None:
                by_name[name] = entry
    return merged


def merge_descriptors(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Merge two descriptors without modifying either.

    Mappings are merged recursively, ``vms`` lists are merged by VM name and
    any other value from *override* replaces the one in *base*.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if key == "vms" and isinstance(merged.get("vms"), list) and isinstance(value, list):
            merged["vms"] = _merge_vms(merged["vms"], value)
        elif key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def descriptor_paths_from_env() -> list[Path]:
    """Descriptor files listed in CONFIG_BUILDER_DESCRIPTOR, if set."""
    value = os.environ.get(DESCRIPTOR_ENV, "")
    return [Path(entry) for entry in value.split(os.pathsep) if entry]


def load_root(paths: Iterable[str | Path]) -> Root:
    """
    Load, merge and validate descriptors and build the root model.

    Args:
        paths: Descriptor files, lowest precedence first

    Returns:
        Populated Root model

    Raises:
        DescriptorNotFoundError: If no files are given or one is missing
        DescriptorParseError: If a file can't be parsed
        DescriptorValidationError: If the merged descriptor is invalid
    """
    paths = [Path(p) for p in paths]
    if not paths:
        raise DescriptorNotFoundError()

    merged: dict[str, Any] = {}
    for path in paths:
        merged = merge_descriptors(merged, load_descriptor(path))

    label = ", ".join(str(p) for p in paths)
    is_valid, errors = validate_descriptor(merged)
    if not is_valid:
        raise DescriptorValidationError(errors, label)

    try:
        root = Root.new_from_hash(merged)
    except (ModelError, ModelCollectionError) as e:
        raise DescriptorValidationError([e.message], label, suggestion=e.suggestion) from e

    logger.info(f"Loaded {len(root.vms)} VM(s) from {label}")
    return root
