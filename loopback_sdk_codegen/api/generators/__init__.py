"""Code generators for Objective-C bindings."""

from .objc_generator import (
    IMPORT_ALL_HEADER,
    make_environment,
    referenced_classes,
    render_objc_files,
    write_generated_files,
)

__all__ = [
    "IMPORT_ALL_HEADER",
    "make_environment",
    "referenced_classes",
    "render_objc_files",
    "write_generated_files",
]
