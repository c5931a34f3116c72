"""
Pytest configuration and shared fixtures for the SDK generator test suite.
"""

import copy
import json
import logging
import shutil
import tempfile
from pathlib import Path

import pytest
import yaml

from loopback_sdk_codegen.api.extractors import build_scopes, describe_models
from loopback_sdk_codegen.api.models import ExposedModels
from loopback_sdk_codegen.language import build_descriptor


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def examples_dir(project_root):
    """Return the examples directory."""
    return project_root / "examples"


@pytest.fixture
def temp_output_dir():
    """Create a temporary directory for generated code output."""
    temp_dir = tempfile.mkdtemp(prefix="lbsdk_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_gen_logger():
    """The CLI detaches the lbsdk.gen logger from the root; undo that for caplog."""
    yield
    gen_logger = logging.getLogger("lbsdk.gen")
    for handler in list(gen_logger.handlers):
        gen_logger.removeHandler(handler)
    gen_logger.propagate = True
    gen_logger.setLevel(logging.NOTSET)


# ------------------------------------------------------------------------------
# Descriptor factories

ID_PARAM = {"arg": "id", "type": "any", "required": True, "http": {"source": "path"}}


def model_class(name, properties=None, methods=None, base="PersistedModel", **extra):
    """A LoopBack model class descriptor with a shared ctor."""
    desc = {
        "name": name,
        "ctor": {"accepts": [copy.deepcopy(ID_PARAM)], "http": {"verb": "get", "path": "/:id"}},
        "properties": properties if properties is not None else {"id": {"type": "Number", "id": True}},
        "settings": {"base": base},
        "methods": methods or [],
    }
    desc.update(extra)
    return desc


def remote_method(name, accepts=None, returns=None, **extra):
    desc = {"name": name, "accepts": accepts or [], "returns": returns or []}
    desc.update(extra)
    return desc


@pytest.fixture
def make_model():
    """Factory fixture building a model class descriptor."""
    return model_class


@pytest.fixture
def make_method():
    """Factory fixture building a remote method descriptor."""
    return remote_method


@pytest.fixture
def id_param():
    return copy.deepcopy(ID_PARAM)


@pytest.fixture
def describe():
    """Normalize a descriptor and resolve scopes; returns (models, exposed)."""
    def _describe(data, model_prefix=""):
        models = describe_models(build_descriptor(data))
        exposed = ExposedModels(models.keys(), model_prefix=model_prefix)
        build_scopes(models, exposed)
        return models, exposed
    return _describe


# ------------------------------------------------------------------------------
# Test data fixtures for common scenarios

@pytest.fixture
def customer_order_descriptor():
    """Two related models, a non-model class and a User subclass."""
    customer = model_class(
        "Customer",
        properties={
            "id": {"type": "Number", "id": True, "generated": True},
            "name": "String",
            "email": {"type": "String", "required": True},
            "tags": ["String"],
        },
        methods=[
            remote_method(
                "create",
                accepts=[{"arg": "data", "type": "object", "http": {"source": "body"}}],
                returns={"arg": "data", "type": "Customer", "root": True},
            ),
            remote_method(
                "findById",
                accepts=[copy.deepcopy(ID_PARAM)],
                returns={"arg": "data", "type": "Customer", "root": True},
                http={"verb": "get", "path": "/:id"},
            ),
            remote_method(
                "find",
                accepts=[{"arg": "filter", "type": "object"}],
                returns=[{"arg": "data", "type": ["Customer"], "root": True}],
                http={"verb": "get", "path": "/"},
            ),
            remote_method(
                "count",
                accepts={"arg": "where", "type": "object"},
                returns={"arg": "count", "type": "number"},
                http={"verb": "get", "path": "/count"},
            ),
            remote_method(
                "prototype.__get__orders",
                accepts=[{"arg": "filter", "type": "object"}],
                returns={"arg": "orders", "type": ["Order"], "root": True},
                http={"verb": "get", "path": "/orders"},
                isStatic=False,
            ),
            remote_method(
                "prototype.__create__orders",
                accepts=[{
                    "arg": "data", "type": "object", "model": "Order",
                    "http": {"source": "body"},
                }],
                returns={"arg": "data", "type": "Order", "root": True},
                http={"verb": "post", "path": "/orders"},
                isStatic=False,
            ),
            remote_method(
                "prototype.__delete__orders",
                http={"verb": "delete", "path": "/orders"},
                isStatic=False,
            ),
        ],
        scopeTargets={"orders": "Order"},
    )
    customer["settings"]["relations"] = {
        "orders": {"type": "hasMany", "model": "Order", "foreignKey": "customerId"},
    }

    order = model_class(
        "Order",
        properties={
            "id": {"type": "Number", "id": True},
            "total": "Number",
            "placedAt": "Date",
            "customerId": "Number",
        },
        methods=[
            remote_method(
                "findById",
                accepts=[copy.deepcopy(ID_PARAM)],
                returns={"arg": "data", "type": "Order", "root": True},
                http={"verb": "get", "path": "/:id"},
            ),
        ],
    )
    order["settings"]["relations"] = {
        "customer": {"type": "belongsTo", "model": "Customer", "foreignKey": "customerId"},
    }

    email = {"name": "Email", "properties": {"to": "String"}}
    member = model_class("Member", base="User")

    return {"models": [customer, order, email, member]}


@pytest.fixture
def write_descriptor_file(temp_output_dir):
    """Factory fixture to write a descriptor to a temporary YAML or JSON file."""
    def _write(data, filename: str = "descriptor.yaml") -> Path:
        file_path = temp_output_dir / filename
        if filename.endswith(".json"):
            file_path.write_text(json.dumps(data))
        else:
            file_path.write_text(yaml.safe_dump(data, sort_keys=False))
        return file_path
    return _write
