"""Signature synthesis and relation include builders."""

from .signature_builder import (
    build_objc_model,
    build_objc_props,
    build_objc_methods,
    build_objc_method,
    has_optional_arguments,
    convert_to_objc_success_block_type,
    METHOD_NAMES_TO_SKIP,
    OBJC_METHOD_NAMES_TO_SKIP,
    METHOD_NAME_REPLACEMENT_TABLE,
)
from .include_builder import build_relation_graph, build_include_map

__all__ = [
    "build_objc_model",
    "build_objc_props",
    "build_objc_methods",
    "build_objc_method",
    "has_optional_arguments",
    "convert_to_objc_success_block_type",
    "METHOD_NAMES_TO_SKIP",
    "OBJC_METHOD_NAMES_TO_SKIP",
    "METHOD_NAME_REPLACEMENT_TABLE",
    "build_relation_graph",
    "build_include_map",
]
