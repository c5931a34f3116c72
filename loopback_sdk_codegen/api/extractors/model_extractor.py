"""Normalize raw class descriptors into ModelInfo records."""

import logging
from typing import Dict, Optional

from pluralizer import Pluralizer

from ..gen_logging import for_model, get_logger, log_event
from ..models import (
    HttpInfo,
    MethodInfo,
    ModelInfo,
    ParamInfo,
    PropertyInfo,
    RelationInfo,
    ReturnInfo,
)

logger = get_logger(__name__)
pluralizer = Pluralizer()

USER_MODEL_NAME = "User"


def describe_models(descriptor) -> Dict[str, ModelInfo]:
    """
    Build the canonical model map (keyed by model name, in declaration order).

    Classes without a shared constructor are not LoopBack models, and the User
    model (or anything extending it) ships prebuilt with the iOS SDK; both are
    skipped. Scopes are not resolved here, see `scope_extractor.build_scopes`.
    """
    classes_by_name = {c.name: c for c in descriptor.models}
    result = {}

    for raw in descriptor.models:
        if raw.ctor is None:
            # Skip classes that don't have a shared ctor
            log_event(for_model(logger, raw.name), "SKIP", "not a LoopBack model", logging.INFO)
            continue

        if is_user_model(raw, classes_by_name):
            log_event(for_model(logger, raw.name), "SKIP", "the User model is provided by the SDK", logging.INFO)
            continue

        result[raw.name] = _describe_model(raw)

    return result


def is_user_model(raw, classes_by_name) -> bool:
    """True for the User model itself and for any model whose base chain reaches it."""
    seen = set()
    current = raw
    while current is not None and current.name not in seen:
        if current.is_user or current.name == USER_MODEL_NAME:
            return True
        seen.add(current.name)
        base = current.settings.base
        if not isinstance(base, str):
            return False
        if base == USER_MODEL_NAME:
            return True
        current = classes_by_name.get(base)
    return False


def _describe_model(raw) -> ModelInfo:
    settings = raw.settings

    base_model = settings.base
    if base_model is not None and callable(base_model):
        # A constructor instead of a model name cannot be mapped to an SDK class
        base_model = ""

    properties = {
        name: PropertyInfo(
            name=name,
            type=prop.type,
            is_id=bool(prop.id),
            generated=bool(prop.generated),
            required=bool(prop.required),
        )
        for name, prop in raw.properties.items()
    }

    relations = {
        name: RelationInfo(
            name=name,
            type=rel.type,
            model=rel.model,
            through=rel.through,
            foreign_key=rel.foreign_key,
        )
        for name, rel in settings.relations.items()
    }

    ctor_accepts = tuple(_param_info(p) for p in raw.ctor.accepts)
    ctor_path = raw.ctor.http.path

    return ModelInfo(
        name=raw.name,
        plural_name=raw.plural_name or pluralizer.pluralize(raw.name),
        base_model=base_model,
        properties=properties,
        is_id_generated=_is_id_generated(raw),
        relations=relations,
        acls=list(settings.acls),
        validations=settings.validations,
        methods=[_method_info(m, ctor_accepts, ctor_path) for m in raw.methods],
        scope_targets=dict(raw.scope_targets),
    )


def _is_id_generated(raw) -> bool:
    """`generated` flag of the first identifier property, False without one."""
    ids = [
        (index, name, prop)
        for index, (name, prop) in enumerate(raw.properties.items())
        if prop.id
    ]
    if not ids:
        return False

    def id_order(entry):
        index, _, prop = entry
        # `id: 2` orders composite keys; `id: true` keeps declaration order
        position = prop.id if isinstance(prop.id, int) and not isinstance(prop.id, bool) else 1
        return (position, index)

    _, _, first = min(ids, key=id_order)
    return bool(first.generated)


def _method_info(raw_method, ctor_accepts, ctor_path: str) -> MethodInfo:
    accepts = tuple(_param_info(p) for p in raw_method.accepts)
    http = _http_info(raw_method)

    if not raw_method.is_static:
        # Instance methods need the ctor arguments (the id) to address the instance
        accepts = ctor_accepts + accepts
        http = HttpInfo(verb=http.verb, path=_join_paths(ctor_path, http.path))

    return MethodInfo(
        name=raw_method.name,
        accepts=accepts,
        returns=tuple(ReturnInfo(arg=r.arg, type=r.type) for r in raw_method.returns),
        is_static=raw_method.is_static,
        http=http,
        deprecated=raw_method.deprecated,
        internal=raw_method.internal,
    )


def _param_info(raw_param) -> ParamInfo:
    return ParamInfo(
        arg=raw_param.arg,
        type=raw_param.type,
        required=bool(raw_param.required),
        http_source=raw_param.http_source,
        server_computed=raw_param.computed_by_server,
        model=raw_param.model,
    )


def _http_info(raw_method) -> HttpInfo:
    endpoint = raw_method.http
    verb = (endpoint.verb if endpoint else None) or "post"
    path: Optional[str] = endpoint.path if endpoint else None
    if path is None:
        path = "/" + raw_method.name.replace("prototype.", "", 1)
    return HttpInfo(verb=verb.lower(), path=path)


def _join_paths(prefix: str, path: str) -> str:
    prefix = prefix.rstrip("/")
    if not path or path == "/":
        return prefix or "/"
    return prefix + "/" + path.lstrip("/")
