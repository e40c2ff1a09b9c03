"""Top level model of a descriptor."""

from dataclasses import dataclass, field

from config_builder.action import ActionSequence, ConfigAction
from config_builder.model.base import Model, attribute_setter
from config_builder.model.values import build_models
from config_builder.model.vm import VM


@dataclass
class Root(Model):
    """All machines described by a descriptor."""

    vms: list[VM] = field(default_factory=list)

    @attribute_setter("vms")
    def _set_vms(self, value):
        self.vms = build_models(value, type(self), "vms", VM)

    def vm_names(self) -> list[str]:
        return [vm.name for vm in self.vms]

    def to_action(self) -> ConfigAction:
        return ActionSequence.of("root", self.vms)
