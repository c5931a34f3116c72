"""
Unit tests for the relation graph used for header includes.

Tests the relation graph built with NetworkX.
"""

import networkx as nx

from loopback_sdk_codegen.api.builders import build_include_map, build_relation_graph


class TestRelationGraph:

    def test_edges_follow_relations(self, customer_order_descriptor, describe):
        models, exposed = describe(customer_order_descriptor)
        graph = build_relation_graph(models, exposed)

        assert isinstance(graph, nx.DiGraph)
        assert set(graph.nodes) == {"Customer", "Order"}
        assert graph.has_edge("Customer", "Order")
        assert graph.has_edge("Order", "Customer")
        assert graph.edges["Customer", "Order"]["relation"] == "orders"

    def test_through_models_and_unknown_targets(self, make_model, describe):
        physician = make_model("Physician")
        physician["settings"]["relations"] = {
            "patients": {"type": "hasMany", "model": "Patient", "through": "Appointment"},
            "owner": {"type": "belongsTo", "model": "User"},
            "self": {"type": "belongsTo", "model": "Physician"},
        }
        models, exposed = describe([physician, make_model("Patient"), make_model("Appointment")])
        graph = build_relation_graph(models, exposed)

        assert list(graph.successors("Physician")) == ["Patient", "Appointment"]
        assert not graph.has_edge("Physician", "Physician")


class TestIncludeMap:

    def test_prefixed_and_deduplicated(self, make_model, describe):
        customer = make_model("customer")
        customer["settings"]["relations"] = {
            "orders": {"type": "hasMany", "model": "order"},
            "lastOrder": {"type": "hasOne", "model": "Order"},
        }
        models, exposed = describe([customer, make_model("order")], model_prefix="XX")

        include_map = build_include_map(models, exposed)

        assert include_map == {"customer": ["XXOrder"], "order": []}
        assert models["customer"].more_include == ["XXOrder"]
