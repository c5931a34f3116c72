"""
Typed schema of the service descriptor consumed by the generator.

The descriptor is what the introspection side of a LoopBack application
reports about its remotable classes: one entry per class, with the shared
constructor, properties, settings (base model, relations, ACLs, validations),
remote methods and the target class of every relation accessor.

Any field the host framework may leave out has an explicit default here, so
the pipeline never probes for attributes at runtime.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _as_list(value):
    """LoopBack allows a single mapping wherever a list of params is expected."""
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    return value


class _Descriptor(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
        arbitrary_types_allowed=True,
        protected_namespaces=(),
    )


class EndpointDescriptor(_Descriptor):
    """HTTP binding of a remote method or of the shared constructor."""

    verb: str = "post"
    path: Optional[str] = None


class ParamDescriptor(_Descriptor):
    arg: str
    type: Any = "any"
    required: bool = False
    # Either a mapping such as {"source": "body"} or a callable that computes
    # the value on the server.
    http: Any = None
    model: Optional[str] = None
    description: Any = None

    @property
    def http_source(self) -> Optional[str]:
        if isinstance(self.http, dict):
            return self.http.get("source")
        return None

    @property
    def computed_by_server(self) -> bool:
        return callable(self.http)


class ReturnDescriptor(_Descriptor):
    arg: Optional[str] = None
    type: Any = None
    root: bool = False


class MethodDescriptor(_Descriptor):
    name: str
    accepts: List[ParamDescriptor] = Field(default_factory=list)
    returns: List[ReturnDescriptor] = Field(default_factory=list)
    is_static: bool = Field(True, alias="isStatic")
    http: Optional[EndpointDescriptor] = None
    deprecated: bool = False
    internal: bool = False
    description: Any = None

    @field_validator("accepts", "returns", mode="before")
    @classmethod
    def wrap_single_entry(cls, value):
        return _as_list(value)

    @field_validator("http", mode="before")
    @classmethod
    def first_endpoint(cls, value):
        # Methods exposed on several routes list them all; the first one wins.
        if isinstance(value, list):
            return value[0] if value else None
        return value


CTOR_PATH = "/:id"


class CtorDescriptor(_Descriptor):
    accepts: List[ParamDescriptor] = Field(default_factory=list)
    # Instance method paths are prefixed with `http.path`, never None here
    http: EndpointDescriptor = Field(
        default_factory=lambda: EndpointDescriptor(verb="get", path=CTOR_PATH)
    )

    @field_validator("accepts", mode="before")
    @classmethod
    def wrap_single_entry(cls, value):
        return _as_list(value)

    @field_validator("http", mode="before")
    @classmethod
    def default_binding(cls, value):
        if value is None:
            return {"verb": "get", "path": CTOR_PATH}
        if isinstance(value, EndpointDescriptor):
            value = value.model_dump()
        if isinstance(value, dict) and value.get("path") is None:
            return {"verb": "get", **value, "path": CTOR_PATH}
        return value


# Attributes LoopBack accepts next to `type` in a property definition.
PROPERTY_ATTRIBUTES = frozenset((
    "type", "id", "generated", "required", "default", "defaultFn",
    "description", "doc", "index", "hidden", "protected", "length",
    "precision", "scale", "format", "jsonSchema", "updateOnly",
    # connector-specific column settings
    "mysql", "postgresql", "mongodb", "oracle", "mssql", "db2",
))


def is_property_definition(value: dict) -> bool:
    """
    True for `{type: String, required: true}`, False for an anonymous nested
    object such as `{lat: Number, type: String}`.

    A mapping with `type` is a definition unless another key outside the
    known attributes declares a field (its value is a type name, a list or a
    mapping). Use `{type: {...}}` to be explicit about nested objects.
    """
    if "type" not in value:
        return False
    return not any(
        key not in PROPERTY_ATTRIBUTES and isinstance(field_type, (str, list, dict))
        for key, field_type in value.items()
    )


class PropertyDescriptor(_Descriptor):
    type: Any = None
    id: Any = False
    generated: bool = False
    required: bool = False

    @model_validator(mode="before")
    @classmethod
    def expand_shorthand(cls, value):
        # `name: String` is shorthand for `name: {type: String}`
        if isinstance(value, PropertyDescriptor):
            return value
        if isinstance(value, dict) and is_property_definition(value):
            return value
        return {"type": value}


class RelationDescriptor(_Descriptor):
    type: Optional[str] = None
    model: Optional[str] = None
    through: Optional[str] = None
    foreign_key: Optional[str] = Field(None, alias="foreignKey")


class ModelSettingsDescriptor(_Descriptor):
    # A string naming the base model, or the base constructor itself.
    base: Any = None
    relations: Dict[str, RelationDescriptor] = Field(default_factory=dict)
    acls: List[Any] = Field(default_factory=list)
    validations: Any = Field(default_factory=list)

    @field_validator("relations", "acls", mode="before")
    @classmethod
    def empty_when_null(cls, value, info):
        if value is None:
            return {} if info.field_name == "relations" else []
        return value


class ModelClassDescriptor(_Descriptor):
    name: str
    plural_name: Optional[str] = Field(None, alias="pluralName")
    ctor: Optional[CtorDescriptor] = None
    is_user: bool = Field(False, alias="isUser")
    properties: Dict[str, PropertyDescriptor] = Field(default_factory=dict)
    settings: ModelSettingsDescriptor = Field(default_factory=ModelSettingsDescriptor)
    methods: List[MethodDescriptor] = Field(default_factory=list)
    scope_targets: Dict[str, Optional[str]] = Field(default_factory=dict, alias="scopeTargets")

    @field_validator("properties", "scope_targets", mode="before")
    @classmethod
    def empty_mapping_when_null(cls, value):
        return value or {}

    @field_validator("settings", mode="before")
    @classmethod
    def default_settings_when_null(cls, value):
        return value or {}


class ServiceDescriptor(_Descriptor):
    models: List[ModelClassDescriptor] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def accept_bare_list(cls, value):
        if isinstance(value, list):
            return {"models": value}
        return value

    @field_validator("models", mode="before")
    @classmethod
    def models_by_name(cls, value):
        # {"Customer": {...}} is the same as [{"name": "Customer", ...}]
        if isinstance(value, dict):
            return [
                {"name": name, **desc} if isinstance(desc, dict) else desc
                for name, desc in value.items()
            ]
        return value or []
