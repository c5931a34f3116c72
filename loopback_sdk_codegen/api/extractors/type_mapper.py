"""
Type mapping from LoopBack descriptor types to Objective-C types.

All tables list their rules in a uniform manner; structural cases that have
no type name use the `<...>` notation (`<array>`, `<void>`). Lookups go
exact compound key, then bare key, then structural marker, then failure.
"""

from typing import Optional

from ...errors import (
    UnsupportedArgumentTypeError,
    UnsupportedPropertyTypeError,
    UnsupportedReturnTypeError,
)
from ...utils import type_display_name
from ..models import ExposedModels

MODEL_TYPE_PLACEHOLDER = "<objcModelType>"

# Type declaration conversion table for properties.
PROP_TYPE_CONVERSION_TABLE = {
    "String":   "(nonatomic, copy) NSString *",
    "Number":   "NSNumber *",
    "Boolean":  "BOOL ",
    "<array>":  "(nonatomic) NSArray *",
    "ObjectID": "(nonatomic, copy) NSString *",
    "Date":     "NSDate *",
    "object":   "NSDictionary *",
    "Object":   "NSDictionary *",
}

# Type conversion table for arguments.
ARG_TYPE_CONVERSION_TABLE = {
    # Special case: the argument whose type is `object` and name is `data`.
    "object data": MODEL_TYPE_PLACEHOLDER,
    "object":      "NSDictionary *",
    "Object":      "NSDictionary *",
    "any":         "id",
    "Any":         "id",
    "boolean":     "NSNumber *",
    "Boolean":     "NSNumber *",
    "string":      "NSString *",
    "String":      "NSString *",
    "number":      "NSNumber *",
    "Number":      "NSNumber *",
    "<array>":     "NSArray *",
}

# Return type to Obj-C return type conversion table.
RETURN_TYPE_CONVERSION_TABLE = {
    "object":   "NSDictionary",
    "Object":   "NSDictionary",
    "number":   "NSNumber",
    "Number":   "NSNumber",
    "string":   "NSString",
    "String":   "NSString",
    "boolean":  "BOOL",
    "Boolean":  "BOOL",
    "<array>":  "NSArray",
    "<void>":   "void",
}

_ARRAY_TYPE_NAMES = ("array", "Array")


def _is_array_type(type_) -> bool:
    return isinstance(type_, (list, tuple)) or type_ in _ARRAY_TYPE_NAMES


def convert_to_objc_prop_type(type_) -> Optional[str]:
    """Property declaration prefix (attributes + type), or None when unsupported."""
    if _is_array_type(type_):
        return PROP_TYPE_CONVERSION_TABLE["<array>"]
    if isinstance(type_, dict):
        # anonymous nested object, e.g. {street: 'string', city: 'string'}
        return PROP_TYPE_CONVERSION_TABLE["object"]
    if not isinstance(type_, str):
        type_ = getattr(type_, "__name__", None)
    return PROP_TYPE_CONVERSION_TABLE.get(type_)


def convert_to_objc_arg_type(type_, name: str, objc_model_type: str) -> Optional[str]:
    """Argument type, or None when unsupported."""
    objc_type = None
    if isinstance(type_, str):
        objc_type = ARG_TYPE_CONVERSION_TABLE.get(f"{type_} {name}")
        objc_type = objc_type or ARG_TYPE_CONVERSION_TABLE.get(type_)
    if objc_type is None and _is_array_type(type_):
        objc_type = ARG_TYPE_CONVERSION_TABLE["<array>"]
    if objc_type:
        objc_type = objc_type.replace(MODEL_TYPE_PLACEHOLDER, objc_model_type)
    return objc_type


def convert_to_objc_return_type(
    type_,
    model_name: str,
    objc_model_name: str,
    exposed: ExposedModels,
    returns_array: bool = False,
) -> Optional[str]:
    """Return type name (without pointer), or None when unsupported."""
    if returns_array:
        return RETURN_TYPE_CONVERSION_TABLE["<array>"]

    if isinstance(type_, str) and type_ == model_name:
        return objc_model_name

    # Not the model itself, maybe another exposed model (case-insensitive)
    foreign = exposed.objc_name(type_)
    if foreign is not None:
        return foreign

    if type_ is None:
        type_ = "<void>"
    elif isinstance(type_, (list, tuple)):
        type_ = "<array>"
    elif isinstance(type_, dict):
        # anonymous object type, e.g. {arg: 'info', type: {count: 'number'}}
        type_ = "object"
    elif type_ in _ARRAY_TYPE_NAMES:
        type_ = "<array>"

    if not isinstance(type_, str):
        return None
    return RETURN_TYPE_CONVERSION_TABLE.get(type_)


# ------------------------------------------------------------------------------
# Strict variants used by the synthesizer: unsupported types abort generation

def map_prop_type(type_, prop_name: str, model_name: str) -> str:
    objc_type = convert_to_objc_prop_type(type_)
    if objc_type is None:
        raise UnsupportedPropertyTypeError(type_display_name(type_), prop_name, model_name)
    return objc_type


def map_arg_type(type_, arg_name: str, objc_model_type: str, method_name: str, model_name: str) -> str:
    objc_type = convert_to_objc_arg_type(type_, arg_name, objc_model_type)
    if objc_type is None:
        raise UnsupportedArgumentTypeError(
            type_display_name(type_), arg_name, method_name, model_name
        )
    return objc_type


def map_return_type(type_, method, model_name: str, objc_model_name: str, exposed: ExposedModels) -> str:
    objc_type = convert_to_objc_return_type(
        type_, model_name, objc_model_name, exposed, returns_array=method.returns_array
    )
    if objc_type is None:
        raise UnsupportedReturnTypeError(type_display_name(type_), method.name, model_name)
    return objc_type
