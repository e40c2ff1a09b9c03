"""Deferred configuration actions.

A model never touches the host configuration object directly. It produces a
ConfigAction: a tagged command object that captures the model's values and
is invoked later with exactly one argument, the host configuration object.
Nested models are composed by sequencing their actions in an ActionSequence.
"""

from collections.abc import Callable, Iterable
from typing import Any

ConfigFunc = Callable[[Any], None]


class ConfigAction:
    """A named, deferred mutation of a host configuration object."""

    def __init__(self, name: str, func: ConfigFunc, nested: Iterable["ConfigAction"] = ()):
        self.name = name
        self.func = func
        # Actions that func hands to the host (e.g. a VM definition block)
        self.nested = list(nested)

    def __call__(self, config: Any) -> None:
        self.func(config)

    def describe(self) -> dict[str, Any] | str:
        """Return the tag tree of this action for display."""
        if self.nested:
            return {self.name: [action.describe() for action in self.nested]}
        return self.name

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class ActionSequence(ConfigAction):
    """Invoke child actions in order against the same config object."""

    def __init__(self, name: str, actions: Iterable[ConfigAction]):
        self.actions = list(actions)
        super().__init__(name, self._run, self.actions)

    def _run(self, config: Any) -> None:
        for action in self.actions:
            action(config)

    @classmethod
    def of(cls, name: str, items: Iterable[Any]) -> "ActionSequence":
        """
        Build a sequence from models and/or actions.

        Models are converted with their own to_action(); anything already a
        ConfigAction is used as is.
        """
        actions = []
        for item in items:
            if isinstance(item, ConfigAction):
                actions.append(item)
            else:
                actions.append(item.to_action())
        return cls(name, actions)

    def describe(self) -> dict[str, Any]:
        return {self.name: [action.describe() for action in self.actions]}

    def __iter__(self):
        return iter(self.actions)

    def __len__(self):
        return len(self.actions)
