"""
Objective-C signature synthesis for models and their remote methods.

Every remote method yields one selector with its required arguments only and,
when it also accepts optional arguments, a second selector with all of them:

    findById:(id)id_ success:... failure:...
    findByIdWithId:(id)id_ filter:(NSDictionary *)filter success:... failure:...

Arguments the server computes itself (request, response, context) never
appear in a selector.
"""

from typing import List, Optional

from ...errors import MultipleBodyArgumentsError, UnknownBaseModelError
from ...utils import upper_first
from ..extractors.type_mapper import (
    RETURN_TYPE_CONVERSION_TABLE,
    map_arg_type,
    map_prop_type,
    map_return_type,
)
from ..gen_logging import for_model, get_logger, log_event
from ..models import (
    ExposedModels,
    MethodInfo,
    ModelInfo,
    ObjcArgument,
    ObjcMethod,
    ObjcProperty,
    objc_model_name,
)

logger = get_logger(__name__)

KNOWN_BASE_MODELS = ("Model", "PersistedModel")
SDK_CLASS_PREFIX = "LB"

METHOD_NAMES_TO_SKIP = (
    # The followings are pre-implemented in LBPersistedModel.
    "create",
    "upsert",
    "deleteById",
    # The followings are to be supported.
    "createChangeStream",
    "prototype.updateAttributes",
    "prototype.patchAttributes",
)

OBJC_METHOD_NAMES_TO_SKIP = (
    # `updateAll` invocation fails with an empty `where` argument and there is
    # no way to provide a working implementation for it.
    "updateAllWithData",
)

# Amend auto-generated method names which don't sound right.
METHOD_NAME_REPLACEMENT_TABLE = {
    "findByIdWithId":     "findById",
    "findWithSuccess":    "allWithSuccess",
    "updateAllWithWhere": "updateAllWithWhereFilter",
    "countWithWhere":     "countWithWhereFilter",
}

SEGMENT_INDENT = "\n        "
FAILURE_SEGMENT = SEGMENT_INDENT + "failure:(SLFailureBlock)failure"


def build_objc_model(meta: ModelInfo, exposed: ExposedModels) -> ModelInfo:
    """Fill the objc_* fields of one model; raises on anything unsupported."""
    log_event(for_model(logger, meta.name), "MODEL", "synthesizing types and selectors")

    meta.objc_model_name = objc_model_name(meta.name, exposed.model_prefix)
    meta.objc_repo_name = meta.objc_model_name + "Repository"
    if meta.base_model not in KNOWN_BASE_MODELS:
        raise UnknownBaseModelError(meta.base_model, meta.name)
    meta.objc_base_model = SDK_CLASS_PREFIX + meta.base_model

    meta.objc_props = build_objc_props(meta)
    build_objc_methods(meta, exposed)
    return meta


def build_objc_props(meta: ModelInfo) -> List[ObjcProperty]:
    log = for_model(logger, meta.name)
    props = []
    for prop_name, prop in meta.properties.items():
        if prop_name == "id":
            # `_id` is already defined in LBPersistedModel
            continue
        log_event(log, "PROP", f"{prop_name}: {prop.type!r}")
        props.append(ObjcProperty(name=prop_name, type=map_prop_type(prop.type, prop_name, meta.name)))
    return props


def build_objc_methods(meta: ModelInfo, exposed: ExposedModels) -> List[ObjcMethod]:
    """Append the selectors of every not-yet-generated method to `meta.objc_methods`."""
    log = for_model(logger, meta.name)
    for method in meta.methods:
        if method.objc_generated:
            log_event(log, "SKIP", f"{method.name} was already generated")
            continue
        log_event(log, "METHOD", method.name)

        entry = build_objc_method(meta, method, exposed, skip_optional_arguments=True)
        if entry is not None:
            meta.objc_methods.append(entry)
        if has_optional_arguments(method):
            entry = build_objc_method(meta, method, exposed, skip_optional_arguments=False)
            if entry is not None:
                meta.objc_methods.append(entry)

    return meta.objc_methods


def build_objc_method(
    meta: ModelInfo,
    method: MethodInfo,
    exposed: ExposedModels,
    skip_optional_arguments: bool,
) -> Optional[ObjcMethod]:
    """
    Synthesize one selector for `method`.

    Returns None when the method (or the synthesized name) is on a skip list.
    Raises on unsupported types and on a second body argument.
    """
    if method.name in METHOD_NAMES_TO_SKIP:
        return None

    method_name = method.name.replace("prototype.", "", 1)
    prototype = ""
    has_arguments = False
    param_assignments = []
    body_param_assignment = None
    arguments = []

    for param in method.accepts:
        # Skip arguments derived by a server-side code
        if param.is_server_computed:
            continue
        if not param.is_required and skip_optional_arguments:
            continue

        objc_model_type = meta.objc_model_name + " *"
        if param.model:
            objc_model_type = (exposed.objc_name(param.model) or param.model) + " *"

        arg_type = map_arg_type(param.type, param.arg, objc_model_type, method.name, meta.name)
        arg_name = "id_" if param.arg == "id" else param.arg

        arg_right_value = arg_name
        if arg_type == objc_model_type:
            arg_right_value = f"[{arg_name} toDictionary]"
        elif arg_type == "NSDictionary *":
            arg_right_value = f"({arg_name} ? {arg_name} : @{{}})"

        if not has_arguments:
            method_name += "With" + upper_first(param.arg)
            has_arguments = True
        else:
            prototype += " " + param.arg

        if param.is_body:
            if body_param_assignment is not None:
                raise MultipleBodyArgumentsError(method.name, meta.name)
            body_param_assignment = arg_right_value
        else:
            param_assignments.append(f'@"{param.arg}": {arg_right_value}')

        prototype += f":({arg_type}){arg_name}"
        arguments.append(ObjcArgument(
            arg=param.arg,
            name=arg_name,
            type=arg_type,
            rhs=arg_right_value,
            is_body=param.is_body,
        ))

    returns = method.return_info
    objc_return_type = map_return_type(returns.type, method, meta.name, meta.objc_model_name, exposed)
    success_block_type = convert_to_objc_success_block_type(objc_return_type)

    if not has_arguments:
        method_name += "WithSuccess"
        prototype += f":({success_block_type})success"
    else:
        prototype += f"{SEGMENT_INDENT}success:({success_block_type})success"
    prototype += FAILURE_SEGMENT

    if method_name in OBJC_METHOD_NAMES_TO_SKIP:
        log_event(for_model(logger, meta.name), "SKIP", f"{method_name} cannot be invoked safely")
        return None
    method_name = METHOD_NAME_REPLACEMENT_TABLE.get(method_name, method_name)

    method.objc_generated = True
    return ObjcMethod(
        raw_name=method.name,
        name=method_name,
        prototype=f"(void){method_name}{prototype}",
        return_arg=returns.arg,
        return_type=objc_return_type,
        collection_element_type=_collection_element_type(method),
        return_kind=_return_kind(objc_return_type, meta.objc_model_name),
        param_assignments=", ".join(param_assignments) or None,
        body_param_assignment=body_param_assignment,
        arguments=tuple(arguments),
        http_verb=method.http.verb.upper(),
        http_path=method.http.path,
    )


def has_optional_arguments(method: MethodInfo) -> bool:
    return any(
        not param.is_server_computed and not param.is_required
        for param in method.accepts
    )


def convert_to_objc_success_block_type(objc_type: str) -> str:
    if objc_type == "void":
        return_arg_type = ""
    elif objc_type == "BOOL":
        # primitive type
        return_arg_type = objc_type
    else:
        return_arg_type = objc_type + " *"
    return f"void (^)({return_arg_type})"


def _collection_element_type(method: MethodInfo) -> str:
    type_ = method.return_info.type
    if isinstance(type_, (list, tuple)):
        return type_[0] if type_ and isinstance(type_[0], str) else ""
    return ""


def _return_kind(objc_return_type: str, own_objc_model_name: str) -> str:
    if objc_return_type == "void":
        return "void"
    if objc_return_type == "BOOL":
        return "primitive"
    if objc_return_type == own_objc_model_name:
        return "model"
    if objc_return_type == "NSArray":
        return "collection"
    if objc_return_type in RETURN_TYPE_CONVERSION_TABLE.values():
        return "object"
    return "foreign_model"
