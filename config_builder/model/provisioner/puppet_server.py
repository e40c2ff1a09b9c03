"""Puppet agent provisioner model."""

from dataclasses import dataclass, field
from typing import Any

from config_builder.action import ConfigAction
from config_builder.model.base import Model, attribute_setter
from config_builder.model.collection import provisioners
from config_builder.model.provisioner.puppet import facts, settings_action


@provisioners.register("puppet_server")
@dataclass
class PuppetServer(Model):
    """Run ``puppet agent`` against a puppet server."""

    puppet_server: str | None = None
    node_name: str | None = None
    facter: dict[str, Any] = field(default_factory=dict)
    options: str | None = None

    @attribute_setter("facter")
    def _set_facter(self, value):
        self.facter = facts(value, type(self))

    def to_action(self) -> ConfigAction:
        settings = {
            attr: getattr(self, attr)
            for attr in ("puppet_server", "node_name", "options")
            if getattr(self, attr) is not None
        }
        if self.facter:
            settings["facter"] = dict(self.facter)
        return settings_action("puppet_server", settings)
