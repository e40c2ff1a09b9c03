"""Base class for config-builder models.

A model implements a logic-less interface to one component of the host
provisioning tool's configuration.

- ``Model.new_from_hash`` takes an arbitrarily nested structure of basic data
  types (dicts, lists, numbers, strings) and returns a new instance with its
  attributes set from that structure.
- ``Model.to_action`` turns the instance's attributes into a ConfigAction
  that, when called with the host configuration object, produces the
  configuration the attributes describe. Models that delegate part of their
  configuration to nested models sequence the nested models' actions.

Settable attributes are declared explicitly. Every public dataclass field of
a model gets a plain assignment setter; a method decorated with
``@attribute_setter("name")`` replaces it (or adds a setter with no backing
field). Keys without a registered setter are rejected with
UnknownAttributeError.
"""

import copy
from collections.abc import Callable, Mapping
from dataclasses import fields, is_dataclass
from types import MappingProxyType
from typing import Any, ClassVar, TypeVar

from config_builder.action import ConfigAction
from config_builder.exceptions import InvalidAttributesError, UnknownAttributeError

M = TypeVar("M", bound="Model")
Setter = Callable[["Model", Any], None]

_SETTER_MARK = "__attribute_setter__"


def attribute_setter(name: str) -> Callable[[Setter], Setter]:
    """Register the decorated method as the setter for attribute ``name``."""

    def decorator(func: Setter) -> Setter:
        setattr(func, _SETTER_MARK, name)
        return func

    return decorator


def _assign(name: str) -> Setter:
    def setter(model: "Model", value: Any) -> None:
        setattr(model, name, value)

    setter.__name__ = f"set_{name}"
    return setter


class Model:
    """Abstract base for models populated from a hash."""

    # Filled in by ModelCollection.register for models reachable by type name
    type_name: ClassVar[str | None] = None

    @classmethod
    def setters(cls) -> Mapping[str, Setter]:
        """Return the read-only attribute name -> setter registry of this class."""
        registry = cls.__dict__.get("_setter_registry")
        if registry is None:
            registry = cls._build_setter_registry()
            cls._setter_registry = registry
        return MappingProxyType(registry)

    @classmethod
    def _build_setter_registry(cls) -> dict[str, Setter]:
        registry: dict[str, Setter] = {}
        if is_dataclass(cls):
            for f in fields(cls):
                if not f.name.startswith("_"):
                    registry[f.name] = _assign(f.name)

        # Walk base classes first so subclasses override inherited setters
        for klass in reversed(cls.__mro__):
            for member in vars(klass).values():
                name = getattr(member, _SETTER_MARK, None)
                if name is not None:
                    registry[name] = member
        return registry

    @classmethod
    def attribute_names(cls) -> list[str]:
        """Sorted names of all settable attributes."""
        return sorted(cls.setters())

    @classmethod
    def new_from_hash(cls: type[M], attributes: Mapping[str, Any] | None) -> M:
        """
        Deserialize a hash into a model.

        Args:
            attributes: The model attributes as represented in a hash

        Returns:
            A new, fully populated instance of cls

        Raises:
            UnknownAttributeError: If a key has no setter on cls
        """
        obj = cls()
        obj.attributes_from_hash(attributes)
        return obj

    def attributes_from_hash(self, attributes: Mapping[str, Any] | None) -> None:
        """
        Populate model attributes from a hash.

        All keys are checked before any setter runs. Setters are applied to a
        deep copy of the current state that is committed only when every
        setter succeeded, so a failure leaves this instance as it was.

        Args:
            attributes: The model attributes as represented in a hash

        Raises:
            InvalidAttributesError: If attributes is not a mapping
            UnknownAttributeError: If a key has no setter on this model
        """
        if attributes is None:
            attributes = {}
        if not isinstance(attributes, Mapping):
            raise InvalidAttributesError(type(self), attributes)

        setters = self.setters()
        for attr in attributes:
            if attr not in setters:
                raise UnknownAttributeError(str(attr), type(self), sorted(setters))

        staged = copy.deepcopy(self)
        for attr, value in attributes.items():
            setters[attr](staged, value)
        vars(self).update(vars(staged))

    def to_action(self) -> ConfigAction:
        """
        Generate an action based on the configuration specified by the attributes.

        Returns:
            A ConfigAction taking the host configuration object
        """
        raise NotImplementedError(f"{type(self).__name__} does not implement to_action()")

    def apply(self, config: Any) -> None:
        """Generate the action for this model and call it with ``config``."""
        self.to_action()(config)

    def __call__(self, config: Any) -> None:
        self.apply(config)

    def to_hash(self) -> dict[str, Any]:
        """
        Render the attribute values back into a hash.

        Nested models are rendered recursively; unset (None) values and empty
        collections are left out, so ``new_from_hash(m.to_hash())`` rebuilds
        an equal model.
        """
        result: dict[str, Any] = {}
        if not is_dataclass(self):
            return result
        for f in fields(self):
            if f.name.startswith("_"):
                continue
            value = _dump(getattr(self, f.name))
            if value is None or value == [] or value == {}:
                continue
            result[f.name] = value
        return result


def _dump(value: Any) -> Any:
    if isinstance(value, Model):
        rendered = value.to_hash()
        # Subclasses inherit type_name without being registered under it
        type_name = type(value).__dict__.get("type_name")
        if type_name is not None:
            rendered = {"type": type_name, **rendered}
        return rendered
    if isinstance(value, list | tuple):
        return [_dump(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _dump(item) for key, item in value.items()}
    return value
