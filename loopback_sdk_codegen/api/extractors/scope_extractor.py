"""
Reverse-engineer scope (relation accessor) methods.

LoopBack exposes relation accessors as instance methods named
`prototype.__<op>__<scope>`, e.g. `prototype.__get__orders` or
`prototype.__delete__orders`. This module groups them into per-model scopes
keyed by an API name (`orders`, `orders.destroyAll`, `orders.create`, ...).
"""

import re
from typing import Dict

from ..gen_logging import for_model, get_logger, log_event
from ..models import ExposedModels, MethodInfo, ModelInfo, ScopeInfo

logger = get_logger(__name__)

SCOPE_METHOD_REGEX = re.compile(r"^prototype\.__([^_]+)__(.+)$")


def build_scopes(models: Dict[str, ModelInfo], exposed: ExposedModels) -> None:
    """Annotate every model with its `scopes` map."""
    for model_name in models:
        build_scopes_of_model(models[model_name], exposed)


def build_scopes_of_model(model: ModelInfo, exposed: ExposedModels) -> ModelInfo:
    model.scopes = {}
    methods = []
    for method in model.methods:
        methods.append(build_scope_method(model, method, exposed))
    model.methods = methods
    return model


def build_scope_method(model: ModelInfo, method: MethodInfo, exposed: ExposedModels) -> MethodInfo:
    """
    Register `method` under its scope if it is a relation accessor.

    Returns the method as it should appear in the model's method list: scope
    methods lose their `prototype.` marker (`prototype.__get__orders` becomes
    `get__orders`), anything else is returned unchanged.
    """
    match = SCOPE_METHOD_REGEX.match(method.name)
    if not match:
        return method

    op, scope_name = match.group(1), match.group(2)
    renamed = method.derive(name=f"{op}__{scope_name}")

    log = for_model(logger, model.name, scope=scope_name)
    if scope_name not in model.scopes:
        target_class = model.scope_targets.get(scope_name)
        if not target_class:
            log.warning("scope is missing its target class, its iOS code won't be generated")
            model.scopes[scope_name] = None
            return renamed

        if exposed.lookup(target_class) is None:
            log.warning(
                f'scope targets class "{target_class}", which is not exposed via remoting; '
                f"its iOS code won't be generated"
            )
            model.scopes[scope_name] = None
            return renamed

        model.scopes[scope_name] = ScopeInfo(target_class=target_class)

    scope = model.scopes[scope_name]
    if scope is None:
        # The warning was already reported for an earlier method of this scope
        return renamed

    api_name = scope_api_name(op, scope_name)
    # override possibly inherited values
    scope_method = renamed.derive(name=scope_name, deprecated=False, internal=False)
    scope.methods[api_name] = scope_method
    log_event(log, "SCOPE", api_name)

    if "create" in scope_method.name or "create" in api_name:
        create_many_api_name = api_name.replace("create", "createMany", 1)
        scope.methods[create_many_api_name] = scope_method.derive(
            name=scope_method.name.replace("create", "createMany", 1),
            returns_array=True,
        )
        log_event(log, "SCOPE", create_many_api_name)

    return renamed


def scope_api_name(op: str, scope_name: str) -> str:
    if op == "get":
        # the scope accessor itself
        return scope_name
    if op == "delete":
        return f"{scope_name}.destroyAll"
    return f"{scope_name}.{op}"
