"""Descriptor normalization, scope reconstruction and type mapping."""

from .model_extractor import describe_models, is_user_model
from .scope_extractor import build_scopes, build_scope_method, scope_api_name
from .type_mapper import (
    convert_to_objc_prop_type,
    convert_to_objc_arg_type,
    convert_to_objc_return_type,
    map_prop_type,
    map_arg_type,
    map_return_type,
)

__all__ = [
    "describe_models",
    "is_user_model",
    "build_scopes",
    "build_scope_method",
    "scope_api_name",
    "convert_to_objc_prop_type",
    "convert_to_objc_arg_type",
    "convert_to_objc_return_type",
    "map_prop_type",
    "map_arg_type",
    "map_return_type",
]
