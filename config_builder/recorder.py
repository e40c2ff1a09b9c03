"""
Recording stand-in for the host configuration object.

A RecordingConfig accepts any attribute access, assignment or call and keeps
a log of the assignments and calls made through it:

    config = RecordingConfig()
    config.vm.box = "ubuntu/jammy64"
    config.vm.network("forwarded_port", guest=80, host=8080)

records ``set config.vm.box`` and ``call config.vm.network``. When a call
receives a callable positional argument (a block, e.g. the body of
``config.vm.define``), the block is run right away against a child recorder
and its mutations are kept as the call's children.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Mutation:
    """One recorded assignment or call."""

    kind: str  # set | call
    path: str
    value: Any = None
    args: list[Any] = field(default_factory=list)
    kwargs: dict[str, Any] = field(default_factory=dict)
    children: list["Mutation"] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Plain data view for YAML/JSON output."""
        if self.kind == "set":
            return {"set": self.path, "value": _plain(self.value)}

        result: dict[str, Any] = {"call": self.path}
        if self.args:
            result["args"] = [_plain(arg) for arg in self.args]
        if self.kwargs:
            result["kwargs"] = {key: _plain(value) for key, value in self.kwargs.items()}
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


def _plain(value: Any) -> Any:
    if isinstance(value, list | tuple):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _plain(item) for key, item in value.items()}
    if callable(value):
        return f"<block {getattr(value, 'name', type(value).__name__)}>"
    return value


class RecordingConfig:
    """Host configuration object that records every mutation made to it."""

    def __init__(self, path: str = "config", log: list[Mutation] | None = None):
        object.__setattr__(self, "_path", path)
        object.__setattr__(self, "_log", log if log is not None else [])
        object.__setattr__(self, "_children", {})

    def __getattr__(self, name: str) -> "RecordingConfig":
        if name.startswith("_"):
            raise AttributeError(name)
        children = self._children
        if name not in children:
            children[name] = RecordingConfig(f"{self._path}.{name}", self._log)
        return children[name]

    def __setattr__(self, name: str, value: Any) -> None:
        self._log.append(Mutation("set", f"{self._path}.{name}", value=value))

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        mutation = Mutation("call", self._path, args=list(args), kwargs=dict(kwargs))
        self._log.append(mutation)

        scope = next((arg for arg in args if isinstance(arg, str)), None)
        if scope is None:
            scope = self._path.rsplit(".", 1)[-1]
        for arg in args:
            if callable(arg):
                arg(RecordingConfig(scope, mutation.children))

    @property
    def mutations(self) -> list[Mutation]:
        """Mutations recorded at this recorder's level, in order."""
        return self._log

    def to_list(self) -> list[dict[str, Any]]:
        return [mutation.to_dict() for mutation in self._log]

    def find(self, path: str) -> list[Mutation]:
        """Return all mutations (at any nesting depth) recorded for ``path``."""
        found = []
        pending = list(self._log)
        while pending:
            mutation = pending.pop(0)
            if mutation.path == path:
                found.append(mutation)
            pending.extend(mutation.children)
        return found

    def __repr__(self):
        return f"RecordingConfig({self._path!r}, {len(self._log)} mutation(s))"
