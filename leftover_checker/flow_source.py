"""
Unit source over a Node-RED flow export (``flows.json``).

Function nodes (``type == "function"`` with code in ``func``) are the units;
they are grouped by the tab id in their ``z`` field, and tab labels become
group names.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .interfaces import UnitSource


class FlowFormatError(ValueError):
    """The flow export is not a list of node objects."""


def unit_display_name(node: Dict[str, Any]) -> str:
    """Node name, or a short id based fallback for unnamed function nodes."""
    name = node.get("name")
    if name:
        return str(name)
    return f"Function Node {str(node.get('id', ''))[:8]}"


class FlowFileSource:
    """Groups function nodes of a flow export by tab."""

    def __init__(self, nodes: Iterable[Dict[str, Any]]):
        self.nodes: List[Dict[str, Any]] = [n for n in nodes if isinstance(n, dict)]
        self._tabs: Dict[str, str] = {}
        for node in self.nodes:
            if node.get("type") == "tab" and node.get("id"):
                self._tabs[str(node["id"])] = str(node.get("label") or node.get("name") or "")

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "FlowFileSource":
        """Load a flow export from disk."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_data(data)

    @classmethod
    def from_data(cls, data: Any) -> "FlowFileSource":
        """Accept either a bare node list or ``{"flows": [...]}``."""
        if isinstance(data, dict) and isinstance(data.get("flows"), list):
            data = data["flows"]
        if not isinstance(data, list):
            raise FlowFormatError("Flow export must be a JSON array of nodes")
        return cls(data)

    def _function_nodes(self, group_id: Optional[str] = None) -> Iterable[Dict[str, Any]]:
        for node in self.nodes:
            if node.get("type") != "function" or not node.get("func"):
                continue
            if group_id is not None and str(node.get("z", "")) != group_id:
                continue
            yield node

    def group_ids(self) -> List[str]:
        ids: List[str] = []
        for node in self._function_nodes():
            group_id = str(node.get("z", ""))
            if group_id not in ids:
                ids.append(group_id)
        return ids

    def group_name(self, group_id: str) -> str:
        label = self._tabs.get(group_id)
        if label:
            return label
        return f"Flow {group_id[:8]}" if group_id else "Global"

    def units(self, group_id: str) -> List[UnitSource]:
        return [
            UnitSource(id=str(node.get("id", "")), name=unit_display_name(node), source_text=str(node["func"]))
            for node in self._function_nodes(group_id)
        ]
