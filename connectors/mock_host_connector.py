"""
In-memory host used by the tests and the projinfo CLI.

It satisfies both host boundaries: MockSolution is the project provider,
MockOutputWindow is the output sink. Every boundary call is recorded in a
CallLog together with the name of the thread that made it.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Mapping, Sequence

import yaml
from box import Box

from connectors.host_interface import (
    FieldSlot,
    HostStatus,
    OutputPane,
    OutputWindow,
    ProjectProvider,
    QueryableNode,
)

IDENTITY_FIELDS = ("instance_id", "type_id")


class CallLog(list):
    """List of (operation, target, thread name) tuples."""

    def record(self, operation: str, target: str) -> None:
        self.append((operation, target, threading.current_thread().name))

    def operations(self) -> list[str]:
        return [entry[0] for entry in self]

    def threads(self) -> set[str]:
        return {entry[2] for entry in self}


class ProjectConfig(Box):
    """
    Configuration of one mock project. Dot-access dict (Box).
    Keys: name, directory, instance_id, type_id,
    unsupported (list of field ids answered as Unsupported),
    fault (message raised as RuntimeError), fault_on ("scalar", "identity" or "both").
    Examples:
        config = ProjectConfig(name="App", directory="/src/App")
        print(config.name)            # App
        print(config["directory"])    # /src/App
    """


##### Nodes #####

class MockProject(QueryableNode):
    """A project node that answers batched queries from its config."""

    def __init__(self, config: Mapping[str, Any] | str, call_log: CallLog | None = None):
        if isinstance(config, str):
            config = yaml.safe_load(config) or {}
        self._config = ProjectConfig(config)
        self.call_log = call_log if call_log is not None else CallLog()

    @property
    def config(self) -> ProjectConfig:
        return self._config

    @property
    def label(self) -> str:
        return str(self._config.get("name") or "<unnamed>")

    def query_scalar(self, fields: Sequence[str]) -> list[FieldSlot]:
        self.call_log.record("query_scalar", self.label)
        self._maybe_fault("scalar")
        return [self._slot(name) for name in fields]

    def query_identity(self, fields: Sequence[str]) -> list[FieldSlot]:
        self.call_log.record("query_identity", self.label)
        self._maybe_fault("identity")
        return [self._slot(name) for name in fields]

    def _slot(self, name: str) -> FieldSlot:
        value = self._config.get(name)
        if value is None or name in self._config.get("unsupported", []):
            return (None, HostStatus.UNSUPPORTED)
        if name in IDENTITY_FIELDS:
            value = uuid.UUID(str(value))
        return (value, HostStatus.OK)

    def _maybe_fault(self, kind: str) -> None:
        message = self._config.get("fault")
        if message and self._config.get("fault_on", "scalar") in (kind, "both"):
            raise RuntimeError(message)


class MockOpaqueNode:
    """A node without the query capability (e.g. a miscellaneous files node)."""

    def __init__(self, label: str, call_log: CallLog | None = None):
        self.label = label
        self.call_log = call_log if call_log is not None else CallLog()

    def __repr__(self) -> str:
        return f"MockOpaqueNode({self.label!r})"


@dataclass
class SolutionFolder:
    """Folder grouping nodes and subfolders."""

    name: str
    parent: SolutionFolder | None = None
    items: list[Any] = field(default_factory=list)

    def path(self) -> str:
        if self.parent is None:
            return "/"
        base = self.parent.path().rstrip("/")
        return f"{base}/{self.name}"

    def add_folder(self, name: str) -> SolutionFolder:
        folder = SolutionFolder(name=name, parent=self)
        self.items.append(folder)
        return folder

    def walk(self) -> Iterator[Any]:
        """Yield every node depth-first; folders themselves are not nodes."""
        for item in self.items:
            if isinstance(item, SolutionFolder):
                yield from item.walk()
            else:
                yield item


##### Provider #####

class MockSolution(ProjectProvider):
    """
    A mock project provider.

    Args:
        name (str): workspace name.
        is_open (bool): when False, enumerate() raises ConnectionError.
        fail_after (int | None): raise ConnectionError after yielding that many nodes.
        call_log (CallLog | None): shared log of boundary calls.
    """

    def __init__(self, name: str = "Solution", is_open: bool = True, fail_after: int | None = None,
                 call_log: CallLog | None = None):
        self.name = name
        self.is_open = is_open
        self.fail_after = fail_after
        self.call_log = call_log if call_log is not None else CallLog()
        self.root = SolutionFolder(name=name)

    def add_project(self, config: Mapping[str, Any], folder: SolutionFolder | None = None) -> MockProject:
        project = MockProject(config, self.call_log)
        (folder or self.root).items.append(project)
        return project

    def add_opaque(self, label: str, folder: SolutionFolder | None = None) -> MockOpaqueNode:
        node = MockOpaqueNode(label, self.call_log)
        (folder or self.root).items.append(node)
        return node

    def nodes(self) -> list[Any]:
        return list(self.root.walk())

    @property
    def info(self) -> Box:
        return Box({
            "type": "mock_host",
            "workspace": self.name,
            "open": self.is_open,
            "projects": len(self.nodes()),
        })

    def enumerate(self) -> Iterator[Any]:
        self.call_log.record("enumerate", self.name)
        if not self.is_open:
            raise ConnectionError("No solution is open")
        return self._iter_nodes()

    def _iter_nodes(self) -> Iterator[Any]:
        for count, node in enumerate(self.root.walk()):
            if self.fail_after is not None and count >= self.fail_after:
                raise ConnectionError(f"Solution closed while enumerating ({count} projects seen)")
            self.call_log.record("next", getattr(node, "label", repr(node)))
            yield node


##### Sink #####

class MockPane(OutputPane):
    """An append-only text pane."""

    def __init__(self, name: str, visible: bool, clear_on_reset: bool, window: MockOutputWindow):
        self._name = name
        self.visible = visible
        self.clear_on_reset = clear_on_reset
        self.window = window
        self.activations = 0
        self._chunks: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def text(self) -> str:
        return "".join(self._chunks)

    def activate(self) -> None:
        self.window.call_log.record("activate", self._name)
        if self.window.fail_activate:
            raise RuntimeError(f"Pane '{self._name}' cannot be activated")
        self.activations += 1
        self.visible = True

    def append_text(self, text: str) -> None:
        self.window.call_log.record("append_text", self._name)
        self._chunks.append(text)

    def reset(self) -> None:
        """Workspace reset: clear the pane if it asked for it."""
        if self.clear_on_reset:
            self._chunks.clear()


class MockOutputWindow(OutputWindow):
    """
    A mock output sink holding named panes.

    Args:
        refuse_create (bool): create_pane returns None instead of a pane.
        fail_activate (bool): pane.activate() raises.
        call_log (CallLog | None): shared log of boundary calls.
    """

    def __init__(self, refuse_create: bool = False, fail_activate: bool = False,
                 call_log: CallLog | None = None):
        self.refuse_create = refuse_create
        self.fail_activate = fail_activate
        self.call_log = call_log if call_log is not None else CallLog()
        self.panes: dict[str, MockPane] = {}
        self.created = 0

    def get_pane(self, name: str) -> MockPane | None:
        self.call_log.record("get_pane", name)
        return self.panes.get(name)

    def create_pane(self, name: str, visible: bool, clear_on_reset: bool) -> MockPane | None:
        self.call_log.record("create_pane", name)
        if self.refuse_create:
            return None
        pane = MockPane(name, visible, clear_on_reset, self)
        self.panes[name] = pane
        self.created += 1
        return pane

    def text(self, name: str) -> str:
        pane = self.panes.get(name)
        return pane.text if pane is not None else ""


##### Loading #####

def load_workspace(value: Mapping[str, Any] | str | Path, call_log: CallLog | None = None) -> MockSolution:
    """
    Build a MockSolution from a mapping, YAML text or a YAML file.

    Layout:
        name: Demo
        open: true
        projects:
          - name: App
            directory: /src/App
            instance_id: 11111111-1111-1111-1111-111111111111
            type_id: 22222222-2222-2222-2222-222222222222
          - folder: Libs
            projects: [...]
          - opaque: Miscellaneous Files
    """
    if isinstance(value, Path):
        payload = yaml.safe_load(value.read_text()) or {}
    elif isinstance(value, str):
        payload = yaml.safe_load(value) or {}
    else:
        payload = value
    if not isinstance(payload, Mapping):
        raise ValueError("Workspace description must be a mapping")
    workspace = Box(payload)
    solution = MockSolution(
        name=workspace.get("name", "Solution"),
        is_open=workspace.get("open", True),
        fail_after=workspace.get("fail_after"),
        call_log=call_log,
    )
    _add_entries(solution, solution.root, workspace.get("projects", []))
    return solution


def _add_entries(solution: MockSolution, folder: SolutionFolder, entries: list[Any]) -> None:
    for entry in entries:
        if "folder" in entry:
            _add_entries(solution, folder.add_folder(entry["folder"]), entry.get("projects", []))
        elif "opaque" in entry:
            solution.add_opaque(entry["opaque"], folder)
        else:
            solution.add_project(entry, folder)
