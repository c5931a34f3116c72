"""
Relation graph between exposed models.

Each generated header must forward-declare the other generated classes its
model relates to (`model` and `through` of every relation). The graph is a
NetworkX DiGraph with one node per exposed model and an edge per relation
target; successors come back in relation declaration order.
"""

from typing import Dict, List

import networkx as nx

from ..models import ExposedModels, ModelInfo


def build_relation_graph(models: Dict[str, ModelInfo], exposed: ExposedModels) -> nx.DiGraph:
    graph = nx.DiGraph()
    for model_name in models:
        graph.add_node(model_name)

    for model_name, meta in models.items():
        for relation in meta.relations.values():
            for related in (relation.model, relation.through):
                target = exposed.lookup(related)
                if target is None or target == model_name or target not in models:
                    # Unknown targets (e.g. the prebuilt User model) ship with the SDK
                    continue
                if not graph.has_edge(model_name, target):
                    graph.add_edge(model_name, target, relation=relation.name)

    return graph


def build_include_map(models: Dict[str, ModelInfo], exposed: ExposedModels) -> Dict[str, List[str]]:
    """Generated class names each model references, deduplicated and order-stable."""
    graph = build_relation_graph(models, exposed)
    include_map = {}
    for model_name, meta in models.items():
        include_map[model_name] = [
            exposed.objc_name(target) for target in graph.successors(model_name)
        ]
        meta.more_include = include_map[model_name]
    return include_map
