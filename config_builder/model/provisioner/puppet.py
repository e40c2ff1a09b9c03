"""Puppet apply provisioner model."""

from dataclasses import dataclass, field
from typing import Any

from config_builder.action import ConfigAction
from config_builder.exceptions import InvalidAttributeValueError
from config_builder.model.base import Model, attribute_setter
from config_builder.model.collection import provisioners


def facts(value: Any, owner: type) -> dict[str, Any]:
    """Check that facter facts are given as a mapping."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidAttributeValueError(
            "facter", owner, f"expected a mapping of facts, got {type(value).__name__}"
        )
    return dict(value)


def settings_action(name: str, settings: dict[str, Any]) -> ConfigAction:
    """Action that hands a provisioner block to ``config.vm.provision``."""

    def configure(provisioner):
        for attr, value in settings.items():
            setattr(provisioner, attr, value)

    def provision(config):
        config.vm.provision(name, configure)

    return ConfigAction(f"provisioner:{name}", provision)


@provisioners.register("puppet")
@dataclass
class Puppet(Model):
    """Run ``puppet apply`` in the guest."""

    manifests_path: str | None = None
    manifest_file: str | None = None
    module_path: str | None = None
    facter: dict[str, Any] = field(default_factory=dict)
    options: str | None = None

    @attribute_setter("facter")
    def _set_facter(self, value):
        self.facter = facts(value, type(self))

    def to_action(self) -> ConfigAction:
        settings = {
            attr: getattr(self, attr)
            for attr in ("manifests_path", "manifest_file", "module_path", "options")
            if getattr(self, attr) is not None
        }
        if self.facter:
            settings["facter"] = dict(self.facter)
        return settings_action("puppet", settings)
