"""
Shared test fixtures for the varaudit test suite.
"""

import pytest

from varaudit.core import DocumentNode, Paint, Variable, VariableCollection
from varaudit.host import SnapshotDocument, SnapshotVariableStore


def _reference(variable_id):
    if variable_id is None:
        return None
    return {"type": "VARIABLE_ALIAS", "id": variable_id}


@pytest.fixture
def make_node():
    """Factory for document nodes.

    Usage:
        node = make_node("n1", bindings={"width": "V1"}, fills=["V2"])

    Binding values may be a variable id, None, or a list of ids/None.
    """

    def _make(
        node_id,
        name=None,
        bindings=None,
        fills=(),
        strokes=(),
        children=(),
    ):
        bound = {}
        for key, value in (bindings or {}).items():
            if isinstance(value, list):
                bound[key] = [_reference(item) for item in value]
            else:
                bound[key] = _reference(value)
        return DocumentNode(
            id=node_id,
            name=name or node_id,
            boundVariables=bound,
            fills=[
                Paint(boundVariables={"color": _reference(v)} if v else {})
                for v in fills
            ],
            strokes=[
                Paint(boundVariables={"color": _reference(v)} if v else {})
                for v in strokes
            ],
            children=list(children),
        )

    return _make


@pytest.fixture
def make_variable():
    """Factory for variables; `aliases` maps mode ids to target variable ids."""

    def _make(
        variable_id,
        name,
        collection_id="C",
        values=None,
        aliases=None,
        remote=False,
        key=None,
    ):
        values_by_mode = dict(values or {"m1": 1})
        for mode_id, target in (aliases or {}).items():
            values_by_mode[mode_id] = {"type": "VARIABLE_ALIAS", "id": target}
        return Variable(
            id=variable_id,
            name=name,
            variableCollectionId=collection_id,
            valuesByMode=values_by_mode,
            remote=remote,
            key=key,
        )

    return _make


@pytest.fixture
def collection():
    return VariableCollection(id="C", name="Tokens")


@pytest.fixture
def scenario(make_node, make_variable, collection):
    """Collection C with A, B and a font-family token F; the page binds only A."""
    variables = [
        make_variable("A", "color/bg/rest"),
        make_variable("B", "color/bg/hovered"),
        make_variable("F", "typography/font-family/base"),
    ]
    page = [
        make_node(
            "frame",
            name="Card",
            children=[make_node("label", name="Label", fills=["A"])],
        )
    ]
    document = SnapshotDocument(page)
    store = SnapshotVariableStore(variables, [collection])
    return document, store
