"""Value helpers used by model setters.

The base Model performs no coercion; concrete setters use these helpers to
check their own values and to build nested models.
"""

from collections.abc import Mapping
from typing import Any

from config_builder.exceptions import InvalidAttributeValueError
from config_builder.model.base import Model
from config_builder.model.collection import ModelCollection


def as_list(value: Any, owner: type, attribute: str) -> list[Any]:
    """Return ``value`` as a list; None becomes an empty list."""
    if value is None:
        return []
    if not isinstance(value, list | tuple):
        raise InvalidAttributeValueError(
            attribute, owner, f"expected a list, got {type(value).__name__}"
        )
    return list(value)


def integer(value: Any, owner: type, attribute: str) -> int | None:
    """Check that ``value`` is an integer (bools are rejected)."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAttributeValueError(
            attribute, owner, f"expected an integer, got {value!r}"
        )
    return value


def build_models(
    value: Any,
    owner: type,
    attribute: str,
    model: type[Model] | ModelCollection,
) -> list[Model]:
    """
    Build a list of nested models from a list of hashes.

    Args:
        value: List of hashes and/or already-built models
        owner: Model class owning the attribute (for error messages)
        attribute: Attribute name (for error messages)
        model: Model class to build, or a collection dispatching on ``type``

    Returns:
        List of model instances in input order

    Raises:
        InvalidAttributeValueError: If an already-built model is of the wrong kind
    """
    built = []
    for item in as_list(value, owner, attribute):
        if isinstance(item, Model):
            if isinstance(model, ModelCollection):
                accepted = model.holds(type(item))
                expected = f"{model.category} model"
            else:
                accepted = isinstance(item, model)
                expected = model.__name__
            if not accepted:
                raise InvalidAttributeValueError(
                    attribute, owner, f"expected a {expected}, got {type(item).__name__}"
                )
            built.append(item)
        elif isinstance(model, ModelCollection):
            built.append(model.new_from_hash(item))
        else:
            if (
                isinstance(item, Mapping)
                and model.type_name is not None
                and item.get(ModelCollection.TYPE_KEY) == model.type_name
            ):
                item = {k: v for k, v in item.items() if k != ModelCollection.TYPE_KEY}
            built.append(model.new_from_hash(item))
    return built


def options(**values: Any) -> dict[str, Any]:
    """Drop unset (None) values from keyword options passed to the host."""
    return {key: value for key, value in values.items() if value is not None}
