"""VirtualBox provider model."""

from dataclasses import dataclass, field

from config_builder.action import ConfigAction
from config_builder.exceptions import InvalidAttributeValueError
from config_builder.model.base import Model, attribute_setter
from config_builder.model.collection import providers
from config_builder.model.values import as_list, integer


@providers.register("virtualbox")
@dataclass
class VirtualBox(Model):
    """VirtualBox provider settings.

    ``customize`` holds VBoxManage commands, each a list of arguments:

        customize:
          - [modifyvm, ":id", --natdnshostresolver1, "on"]
    """

    name: str | None = None
    gui: bool | None = None
    memory: int | None = None
    cpus: int | None = None
    customize: list[list[str]] = field(default_factory=list)

    @attribute_setter("memory")
    def _set_memory(self, value):
        self.memory = integer(value, type(self), "memory")

    @attribute_setter("cpus")
    def _set_cpus(self, value):
        self.cpus = integer(value, type(self), "cpus")

    @attribute_setter("customize")
    def _set_customize(self, value):
        commands = []
        for command in as_list(value, type(self), "customize"):
            if not isinstance(command, list | tuple):
                raise InvalidAttributeValueError(
                    "customize", type(self), f"expected a list of arguments, got {command!r}"
                )
            commands.append([str(arg) for arg in command])
        self.customize = commands

    def to_action(self) -> ConfigAction:
        settings = {
            attr: getattr(self, attr)
            for attr in ("name", "gui", "memory", "cpus")
            if getattr(self, attr) is not None
        }
        commands = [list(command) for command in self.customize]

        def configure(vb):
            for attr, value in settings.items():
                setattr(vb, attr, value)
            for command in commands:
                vb.customize(command)

        def provider(config):
            config.vm.provider("virtualbox", configure)

        return ConfigAction("provider:virtualbox", provider)
