"""
Tests for descriptor loading, merging and validation.
"""

import pytest

from config_builder.exceptions import (
    DescriptorNotFoundError,
    DescriptorParseError,
    DescriptorValidationError,
    UnknownAttributeError,
)
from config_builder.loader import (
    DESCRIPTOR_ENV,
    descriptor_paths_from_env,
    load_descriptor,
    load_root,
    merge_descriptors,
    validate_descriptor,
)
from config_builder.model.provider import VirtualBox


class TestLoadDescriptor:
    """Tests for reading single descriptor files."""

    def test_load_fixture(self, multi_vm_descriptor):
        data = load_descriptor(multi_vm_descriptor)

        assert [vm["name"] for vm in data["vms"]] == ["web", "db"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(DescriptorNotFoundError) as exc_info:
            load_descriptor(tmp_path / "missing.yaml")

        assert "missing.yaml" in str(exc_info.value)

    def test_empty_file(self, write_descriptor):
        assert load_descriptor(write_descriptor("")) == {}

    def test_invalid_yaml(self, write_descriptor):
        path = write_descriptor("vms: [unclosed\n")

        with pytest.raises(DescriptorParseError):
            load_descriptor(path)

    def test_top_level_must_be_mapping(self, write_descriptor):
        path = write_descriptor("- name: web\n")

        with pytest.raises(DescriptorValidationError) as exc_info:
            load_descriptor(path)

        assert "top level must be a mapping" in str(exc_info.value)


class TestValidateDescriptor:
    """Tests for schema validation of descriptor shape."""

    def test_valid_descriptor(self, multi_vm_descriptor):
        assert validate_descriptor(load_descriptor(multi_vm_descriptor)) == (True, [])

    def test_vms_must_be_list(self):
        is_valid, errors = validate_descriptor({"vms": {"name": "web"}})

        assert not is_valid
        assert "'vms'" in errors[0]

    def test_vm_requires_name(self):
        is_valid, errors = validate_descriptor({"vms": [{"box": "ubuntu/jammy64"}]})

        assert not is_valid
        assert "'name' is a required property" in errors[0]

    def test_typed_entries_require_type(self):
        is_valid, errors = validate_descriptor(
            {"vms": [{"name": "web", "provisioners": [{"inline": "true"}]}]}
        )

        assert not is_valid
        assert "vms.0.provisioners.0" in errors[0]

    def test_collects_all_errors(self):
        is_valid, errors = validate_descriptor({"vms": [{"box": 1}, {"name": ""}]})

        assert not is_valid
        assert len(errors) == 3


class TestMergeDescriptors:
    """Tests for layering descriptors."""

    def test_vms_merged_by_name(self, multi_vm_descriptor, override_descriptor):
        merged = merge_descriptors(
            load_descriptor(multi_vm_descriptor), load_descriptor(override_descriptor)
        )

        assert [vm["name"] for vm in merged["vms"]] == ["web", "db", "cache"]
        web = merged["vms"][0]
        assert web["box"] == "debian/bookworm64"
        assert web["hostname"] == "web.local"
        assert web["providers"] == [{"type": "virtualbox", "memory": 4096}]

    def test_inputs_are_not_modified(self):
        base = {"vms": [{"name": "web", "box": "a"}]}
        override = {"vms": [{"name": "web", "box": "b"}]}

        merge_descriptors(base, override)

        assert base == {"vms": [{"name": "web", "box": "a"}]}
        assert override == {"vms": [{"name": "web", "box": "b"}]}

    def test_nested_mappings_merge(self):
        merged = merge_descriptors({"extra": {"a": 1, "b": 1}}, {"extra": {"b": 2}})

        assert merged == {"extra": {"a": 1, "b": 2}}

    def test_vms_without_name_are_appended(self):
        merged = merge_descriptors({"vms": [{"name": "web"}]}, {"vms": [{"box": "x"}]})

        assert merged["vms"] == [{"name": "web"}, {"box": "x"}]


class TestLoadRoot:
    """Tests for building the root model from descriptors."""

    def test_load_single_descriptor(self, multi_vm_descriptor):
        root = load_root([multi_vm_descriptor])

        assert root.vm_names() == ["web", "db"]
        assert isinstance(root.vms[0].providers[0], VirtualBox)

    def test_layered_descriptors(self, multi_vm_descriptor, override_descriptor):
        root = load_root([multi_vm_descriptor, override_descriptor])

        assert root.vm_names() == ["web", "db", "cache"]
        assert root.vms[0].providers[0].memory == 4096

    def test_no_paths(self):
        with pytest.raises(DescriptorNotFoundError):
            load_root([])

    def test_unknown_attribute_becomes_validation_error(self, unknown_attribute_descriptor):
        with pytest.raises(DescriptorValidationError) as exc_info:
            load_root([unknown_attribute_descriptor])

        assert "attribute colour undefined on SyncedFolder" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, UnknownAttributeError)

    def test_unknown_attribute_lists_accepted_attributes(self, unknown_attribute_descriptor):
        """The model's accepted attributes are carried into the suggestion."""
        with pytest.raises(DescriptorValidationError) as exc_info:
            load_root([unknown_attribute_descriptor])

        suggestion = exc_info.value.suggestion
        assert "host_path" in suggestion
        assert "guest_path" in suggestion
        assert "config-builder models" in suggestion

    def test_schema_errors_reported(self, write_descriptor):
        path = write_descriptor("vms:\n  - box: ubuntu/jammy64\n")

        with pytest.raises(DescriptorValidationError) as exc_info:
            load_root([path])

        assert str(path) in str(exc_info.value)

    def test_empty_descriptor_has_no_vms(self, write_descriptor):
        assert load_root([write_descriptor("")]).vms == []


class TestDescriptorEnvironment:
    """Tests for the CONFIG_BUILDER_DESCRIPTOR variable."""

    def test_unset(self, monkeypatch):
        monkeypatch.delenv(DESCRIPTOR_ENV, raising=False)

        assert descriptor_paths_from_env() == []

    def test_path_list(self, monkeypatch, tmp_path):
        import os

        first, second = tmp_path / "a.yaml", tmp_path / "b.yaml"
        monkeypatch.setenv(DESCRIPTOR_ENV, os.pathsep.join([str(first), "", str(second)]))

        assert descriptor_paths_from_env() == [first, second]
