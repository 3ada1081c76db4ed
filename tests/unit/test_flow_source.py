"""Flow export unit source."""

import json

import pytest

from leftover_checker.flow_source import FlowFileSource, FlowFormatError, unit_display_name
from leftover_checker.interfaces import UnitSourceProvider

FLOWS = [
    {"id": "tab1", "type": "tab", "label": "Orders"},
    {"id": "fn1", "type": "function", "z": "tab1", "name": "Parse", "func": "node.warn(msg);\nreturn msg;"},
    {"id": "fn2bbbbbbbbb", "type": "function", "z": "tab1", "func": "return msg;"},
    {"id": "fn3", "type": "function", "z": "tab9xxxxxxxxx", "name": "Other", "func": "debugger;\nreturn msg;"},
    {"id": "inj", "type": "inject", "z": "tab1"},
    {"id": "fn4", "type": "function", "z": "tab1", "func": ""},
    "not a node",
]


def test_groups_follow_first_appearance():
    source = FlowFileSource.from_data(FLOWS)
    assert isinstance(source, UnitSourceProvider)
    assert source.group_ids() == ["tab1", "tab9xxxxxxxxx"]


def test_group_names():
    source = FlowFileSource.from_data(FLOWS)
    assert source.group_name("tab1") == "Orders"
    assert source.group_name("tab9xxxxxxxxx") == "Flow tab9xxxx"
    assert source.group_name("") == "Global"


def test_units_are_function_nodes_with_code():
    units = FlowFileSource.from_data(FLOWS).units("tab1")
    assert [(u.id, u.name) for u in units] == [("fn1", "Parse"), ("fn2bbbbbbbbb", "Function Node fn2bbbbb")]
    assert units[0].source_text == "node.warn(msg);\nreturn msg;"


def test_unit_display_name():
    assert unit_display_name({"id": "abc", "name": "Router"}) == "Router"
    assert unit_display_name({"id": "0123456789"}) == "Function Node 01234567"


def test_wrapped_export_and_file_loading(tmp_path):
    path = tmp_path / "flows.json"
    path.write_text(json.dumps({"rev": "1", "flows": FLOWS[:4]}), encoding="utf-8")
    source = FlowFileSource.from_path(path)
    assert source.group_ids() == ["tab1", "tab9xxxxxxxxx"]


def test_bad_export_shape():
    with pytest.raises(FlowFormatError):
        FlowFileSource.from_data({"nodes": []})
