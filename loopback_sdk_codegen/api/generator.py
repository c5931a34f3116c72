"""
Main entry point for Objective-C SDK code generation.

Architecture:
    - extractors/: descriptor normalization, scope reconstruction, type mapping
    - builders/:   selector synthesis and relation includes
    - generators/: Jinja2 rendering and file output

The run is fail-fast: any unsupported type, unknown base model or duplicated
body argument raises before a single file is written.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..language import build_descriptor
from .builders import build_include_map, build_objc_model
from .extractors import build_scopes, describe_models
from .gen_logging import get_logger, log_event
from .generators import render_objc_files, write_generated_files
from .models import ExposedModels, ModelInfo

logger = get_logger(__name__)


@dataclass
class ObjcMetadata:
    """Enriched models plus the relation include map, ready for rendering."""
    models: Dict[str, ModelInfo]
    exposed: ExposedModels
    include_map: Dict[str, List[str]] = field(default_factory=dict)


def describe_service(descriptor, model_prefix: str = "") -> ObjcMetadata:
    """
    Normalize a descriptor and resolve its scopes.

    Phase 1 fixes the set of exposed models; everything after it only reads
    that set.
    """
    descriptor = build_descriptor(descriptor)

    log_event(logger, "PHASE 1", "Describing models...", logging.INFO)
    models = describe_models(descriptor)
    exposed = ExposedModels(models.keys(), model_prefix=model_prefix)
    logger.info(f"  Found {len(models)} exposed models")

    log_event(logger, "PHASE 2", "Reconstructing scopes...", logging.INFO)
    build_scopes(models, exposed)

    return ObjcMetadata(models=models, exposed=exposed)


def build_objc_metadata(descriptor, model_prefix: str = "") -> ObjcMetadata:
    """Run the whole metadata pipeline: describe, scopes, type mapping, selectors, includes."""
    metadata = describe_service(descriptor, model_prefix)

    log_event(logger, "PHASE 3", "Synthesizing Objective-C types and selectors...", logging.INFO)
    for meta in metadata.models.values():
        build_objc_model(meta, metadata.exposed)

    metadata.include_map = build_include_map(metadata.models, metadata.exposed)
    return metadata


def generate_objc_models(
    descriptor,
    model_prefix: str = "",
    templates_dir: Optional[Union[str, Path]] = None,
) -> Dict[str, str]:
    """
    Generate the Objective-C representation of the models.

    Returns:
        A map indexed by file names with file contents as the value.
    """
    metadata = build_objc_metadata(descriptor, model_prefix)

    log_event(logger, "PHASE 4", "Rendering Objective-C sources...", logging.INFO)
    return render_objc_files(metadata.models, templates_dir)


def generate_to_directory(
    descriptor,
    out_dir: Union[str, Path],
    model_prefix: str = "",
    templates_dir: Optional[Union[str, Path]] = None,
) -> List[Path]:
    """Render everything first, then write; a failed run leaves `out_dir` untouched."""
    files = generate_objc_models(descriptor, model_prefix, templates_dir)
    written = write_generated_files(files, out_dir)
    log_event(logger, "GENERATED", f"{len(written)} files in {out_dir}", logging.INFO)
    return written


__all__ = [
    "ObjcMetadata",
    "describe_service",
    "build_objc_metadata",
    "generate_objc_models",
    "generate_to_directory",
]
