"""
Intermediate representation shared by the generation phases.

The normalizer turns raw descriptors into `ModelInfo` records, the scope
reconstructor adds `scopes`, and the signature synthesizer fills the `objc_*`
fields that the templates read. Method records are never edited in place to
change their identity: `MethodInfo.derive` returns a new record.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from loopback_sdk_codegen.utils import pascal_case

BODY_SOURCE = "body"
SERVER_SOURCES = ("req", "res", "context")


@dataclass(frozen=True)
class ParamInfo:
    """One accepted argument of a remote method."""
    arg: str
    type: Any = "any"
    required: bool = False
    http_source: Optional[str] = None
    # `http` was a callable: the server computes the value itself
    server_computed: bool = False
    model: Optional[str] = None

    @property
    def is_body(self) -> bool:
        return self.http_source == BODY_SOURCE

    @property
    def is_server_computed(self) -> bool:
        return self.server_computed or self.http_source in SERVER_SOURCES

    @property
    def is_required(self) -> bool:
        return self.required or self.is_body


@dataclass(frozen=True)
class ReturnInfo:
    arg: Optional[str] = None
    type: Any = None


@dataclass(frozen=True)
class HttpInfo:
    verb: str = "post"
    path: str = "/"


@dataclass
class MethodInfo:
    """A remote method after normalization (RemoteMethodDescriptor)."""
    name: str
    accepts: Tuple[ParamInfo, ...] = ()
    returns: Tuple[ReturnInfo, ...] = ()
    is_static: bool = True
    http: HttpInfo = field(default_factory=HttpInfo)
    deprecated: bool = False
    internal: bool = False
    # createMany scope methods always return a collection
    returns_array: bool = False
    objc_generated: bool = field(default=False, compare=False)

    def derive(self, **patch) -> "MethodInfo":
        """Return a copy of this method with `patch` applied on top."""
        return replace(self, objc_generated=False, **patch)

    @property
    def return_info(self) -> ReturnInfo:
        # Multiple return values are not supported; only the first one counts.
        return self.returns[0] if self.returns else ReturnInfo()


@dataclass(frozen=True)
class PropertyInfo:
    name: str
    type: Any = None
    is_id: bool = False
    generated: bool = False
    required: bool = False


@dataclass(frozen=True)
class RelationInfo:
    name: str
    type: Optional[str] = None
    model: Optional[str] = None
    through: Optional[str] = None
    foreign_key: Optional[str] = None


@dataclass
class ScopeInfo:
    """Relation accessor API built from `prototype.__<op>__<scope>` methods."""
    target_class: str
    methods: Dict[str, MethodInfo] = field(default_factory=dict)


@dataclass(frozen=True)
class ObjcProperty:
    name: str
    type: str


@dataclass(frozen=True)
class ObjcArgument:
    arg: str
    name: str
    type: str
    rhs: str
    is_body: bool = False


@dataclass(frozen=True)
class ObjcMethod:
    raw_name: str
    name: str
    prototype: str
    return_arg: Optional[str]
    return_type: str
    # Element type name of an array return, e.g. "Order" for ["Order"]
    collection_element_type: str = ""
    return_kind: str = "object"
    param_assignments: Optional[str] = None
    body_param_assignment: Optional[str] = None
    arguments: Tuple[ObjcArgument, ...] = ()
    http_verb: str = "POST"
    http_path: str = "/"


@dataclass
class ModelInfo:
    name: str
    plural_name: str
    base_model: Any
    properties: Dict[str, PropertyInfo] = field(default_factory=dict)
    is_id_generated: bool = False
    relations: Dict[str, RelationInfo] = field(default_factory=dict)
    acls: List[Any] = field(default_factory=list)
    validations: Any = field(default_factory=list)
    methods: List[MethodInfo] = field(default_factory=list)
    scope_targets: Dict[str, Optional[str]] = field(default_factory=dict)
    # scope name -> ScopeInfo, or None once the scope was rejected
    scopes: Dict[str, Optional[ScopeInfo]] = field(default_factory=dict)

    # Filled in by the signature synthesizer
    objc_model_name: str = ""
    objc_repo_name: str = ""
    objc_base_model: str = ""
    objc_props: List[ObjcProperty] = field(default_factory=list)
    objc_methods: List[ObjcMethod] = field(default_factory=list)
    more_include: List[str] = field(default_factory=list)


class ExposedModels:
    """
    Read-only registry of the models bindings are generated for.

    Built once from the complete normalized model set, before any type
    resolution reads it.
    """

    def __init__(self, names: Iterable[str], model_prefix: str = ""):
        self._names = tuple(names)
        self._by_lower = {}
        for name in self._names:
            self._by_lower.setdefault(name.lower(), name)
        self.model_prefix = model_prefix

    def __contains__(self, name) -> bool:
        return isinstance(name, str) and name in self._names

    def __iter__(self):
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def lookup(self, name) -> Optional[str]:
        """Case-insensitive lookup; returns the declared model name."""
        if not isinstance(name, str):
            return None
        return self._by_lower.get(name.lower())

    def objc_name(self, name) -> Optional[str]:
        """Generated class name of an exposed model, e.g. "order" -> "XXOrder"."""
        declared = self.lookup(name)
        if declared is None:
            return None
        return objc_model_name(declared, self.model_prefix)


def objc_model_name(model_name: str, model_prefix: str = "") -> str:
    return model_prefix + pascal_case(model_name)
