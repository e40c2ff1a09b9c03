"""
Tests for model type registries.
"""

from dataclasses import dataclass

import pytest

from config_builder.action import ConfigAction
from config_builder.exceptions import (
    DuplicateModelTypeError,
    InvalidAttributesError,
    MissingModelTypeError,
    UnknownAttributeError,
    UnknownModelTypeError,
)
from config_builder.model import Model, ModelCollection, networks, providers, provisioners


@pytest.fixture
def widgets():
    """A collection with two registered widget models."""
    collection = ModelCollection("widget")

    @collection.register("gear")
    @dataclass
    class Gear(Model):
        teeth: int | None = None

        def to_action(self):
            return ConfigAction("gear", lambda config: None)

    @dataclass
    class Spring(Model):
        stiffness: float | None = None

        def to_action(self):
            return ConfigAction("spring", lambda config: None)

    collection.add("spring", Spring)
    return collection


class TestModelCollection:
    """Tests for ModelCollection."""

    def test_register_and_get(self, widgets):
        """Registered models can be looked up by name."""
        assert widgets.get("gear").__name__ == "Gear"
        assert widgets.names() == ["gear", "spring"]
        assert "gear" in widgets
        assert list(widgets) == ["gear", "spring"]
        assert len(widgets) == 2

    def test_register_sets_type_name(self, widgets):
        """The registered name is recorded on the model class."""
        assert widgets.get("spring").type_name == "spring"

    def test_duplicate_name_rejected(self, widgets):
        """A name can only be registered once per collection."""
        with pytest.raises(DuplicateModelTypeError):
            widgets.add("gear", widgets.get("spring"))

    def test_unknown_type(self, widgets):
        """Unknown names list the known ones."""
        with pytest.raises(UnknownModelTypeError) as exc_info:
            widgets.get("lever")

        assert exc_info.value.type_name == "lever"
        assert "gear" in exc_info.value.suggestion

    def test_new_from_hash_dispatches_on_type(self, widgets):
        """The type key selects the model; the rest populates it."""
        gear = widgets.new_from_hash({"type": "gear", "teeth": 12})

        assert type(gear).__name__ == "Gear"
        assert gear.teeth == 12

    def test_new_from_hash_does_not_modify_input(self, widgets):
        """The entry hash is left as given."""
        entry = {"type": "gear", "teeth": 12}
        widgets.new_from_hash(entry)

        assert entry == {"type": "gear", "teeth": 12}

    def test_missing_type(self, widgets):
        """Entries must name their type."""
        with pytest.raises(MissingModelTypeError):
            widgets.new_from_hash({"teeth": 12})

    def test_unknown_attribute_in_entry(self, widgets):
        """Unknown keys in the entry fail on the selected model."""
        with pytest.raises(UnknownAttributeError) as exc_info:
            widgets.new_from_hash({"type": "gear", "colour": "red"})

        assert exc_info.value.model.__name__ == "Gear"

    def test_entry_must_be_mapping(self, widgets):
        """Entries must be hashes."""
        with pytest.raises(InvalidAttributesError):
            widgets.new_from_hash("gear")

    def test_non_string_type(self, widgets):
        """A type that isn't a string is reported as an unknown type."""
        with pytest.raises(UnknownModelTypeError) as exc_info:
            widgets.new_from_hash({"type": ["gear"], "teeth": 12})

        assert exc_info.value.type_name == "['gear']"
        assert "gear" in exc_info.value.suggestion

    def test_holds(self, widgets):
        """Only the registered classes themselves are held."""
        gear = widgets.get("gear")

        class BigGear(gear):
            pass

        assert widgets.holds(gear)
        assert not widgets.holds(BigGear)
        assert not widgets.holds(Model)


class TestBuiltinCollections:
    """Tests for the collections shipped with config-builder."""

    def test_provider_types(self):
        assert providers.names() == ["virtualbox"]

    def test_provisioner_types(self):
        assert provisioners.names() == ["puppet", "puppet_server", "shell"]

    def test_network_types(self):
        assert networks.names() == ["forwarded_port", "private_network"]
