"""
Entry points for reading service descriptors.

A descriptor is produced by introspecting a LoopBack application (or written
by hand) and stored as YAML or JSON. This module turns it into a validated
`ServiceDescriptor`; everything downstream works on typed objects only.
"""

import json
from os.path import abspath, dirname, join
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import ValidationError

from loopback_sdk_codegen.errors import DescriptorError
from loopback_sdk_codegen.schema import ServiceDescriptor


# ------------------------------------------------------------------------------
# Constants
THIS_DIR = dirname(abspath(__file__))
TEMPLATES_DIR = join(THIS_DIR, "templates", "objc")


# ------------------------------------------------------------------------------
# Public descriptor builders

def load_descriptor(descriptor_path: Union[str, Path]) -> ServiceDescriptor:
    """Read and validate a descriptor from a YAML or JSON file."""
    path = Path(descriptor_path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DescriptorError(f"Cannot read descriptor {path}: {e}") from e

    return build_descriptor(_parse_content(content, path))


def build_descriptor(data: Any) -> ServiceDescriptor:
    """Validate an already-parsed descriptor (mapping or list of classes)."""
    if isinstance(data, ServiceDescriptor):
        return data
    if data is None:
        raise DescriptorError("Descriptor is empty")
    try:
        return ServiceDescriptor.model_validate(data)
    except ValidationError as e:
        raise DescriptorError(f"Invalid service descriptor:\n{e}") from e


def _parse_content(content: str, path: Path):
    try:
        if path.suffix == ".json":
            return json.loads(content)
        # YAML is a superset of JSON, so anything else goes through the YAML parser
        return yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DescriptorError(f"Cannot parse descriptor {path}: {e}") from e
