"""
Registries of named model types.

Descriptors refer to providers, provisioners and networks by a ``type`` key:

    provisioners:
      - type: shell
        inline: apt-get update

A ModelCollection maps those type names to model classes and builds the
matching model from the rest of the entry.
"""

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any, TypeVar

from config_builder.exceptions import (
    DuplicateModelTypeError,
    InvalidAttributesError,
    MissingModelTypeError,
    UnknownModelTypeError,
)
from config_builder.model.base import Model

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=type[Model])


class ModelCollection:
    """Registry of model classes for one category (provider, provisioner, ...)."""

    TYPE_KEY = "type"

    def __init__(self, category: str):
        self.category = category
        self._models: dict[str, type[Model]] = {}

    def add(self, name: str, model: type[Model]) -> None:
        """Register ``model`` under ``name``."""
        if name in self._models:
            raise DuplicateModelTypeError(self.category, name)
        self._models[name] = model
        model.type_name = name
        logger.debug(f"Registered {self.category} type {name!r} -> {model.__name__}")

    def register(self, name: str) -> Callable[[M], M]:
        """Class decorator form of add()."""

        def decorator(model: M) -> M:
            self.add(name, model)
            return model

        return decorator

    def get(self, name: str) -> type[Model]:
        """Return the model class registered under ``name``."""
        try:
            return self._models[name]
        except KeyError:
            raise UnknownModelTypeError(self.category, str(name), self.names()) from None

    def names(self) -> list[str]:
        return sorted(self._models)

    def holds(self, model: type[Model]) -> bool:
        """Whether ``model`` itself is registered in this collection."""
        return any(registered is model for registered in self._models.values())

    def new_from_hash(self, attributes: Mapping[str, Any]) -> Model:
        """
        Build a model from a collection entry.

        Args:
            attributes: Entry hash; its ``type`` key selects the model class

        Returns:
            Populated model instance

        Raises:
            MissingModelTypeError: If the entry has no ``type`` key
            UnknownModelTypeError: If no model is registered for the type
                or the type is not a string
        """
        if not isinstance(attributes, Mapping):
            raise InvalidAttributesError(f"{self.category} entry", attributes)
        if self.TYPE_KEY not in attributes:
            raise MissingModelTypeError(self.category)

        remaining = dict(attributes)
        type_name = remaining.pop(self.TYPE_KEY)
        if not isinstance(type_name, str):
            raise UnknownModelTypeError(self.category, repr(type_name), self.names())
        model = self.get(type_name)
        return model.new_from_hash(remaining)

    def items(self):
        return sorted(self._models.items())

    def __contains__(self, name: object) -> bool:
        return name in self._models

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._models)

    def __repr__(self):
        return f"ModelCollection({self.category!r}, {self.names()})"


providers = ModelCollection("provider")
provisioners = ModelCollection("provisioner")
networks = ModelCollection("network")
