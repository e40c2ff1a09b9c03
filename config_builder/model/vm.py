"""Virtual machine model."""

from dataclasses import dataclass, field
from typing import Any

from config_builder.action import ActionSequence, ConfigAction
from config_builder.exceptions import IncompleteModelError
from config_builder.model.base import Model, attribute_setter
from config_builder.model.collection import networks, providers, provisioners
from config_builder.model.network import ForwardedPort, PrivateNetwork
from config_builder.model.synced_folder import SyncedFolder
from config_builder.model.values import build_models, options

# Machine settings assigned to ``config.vm`` inside the VM definition
VM_SETTINGS = ("box", "box_url", "hostname", "guest", "communicator")

# Nested model lists, applied in this order
NESTED = (
    "providers",
    "networks",
    "forwarded_ports",
    "private_networks",
    "synced_folders",
    "provisioners",
)


@dataclass
class VM(Model):
    """A single machine of a multi-machine environment.

    Renders ``config.vm.define(name, block, primary=..., autostart=...)``; the
    block sets the machine settings and then runs the actions of every nested
    provider, network, synced folder and provisioner model.
    """

    name: str | None = None
    box: str | None = None
    box_url: str | None = None
    hostname: str | None = None
    guest: str | None = None
    communicator: str | None = None
    primary: bool | None = None
    autostart: bool | None = None
    providers: list[Model] = field(default_factory=list)
    provisioners: list[Model] = field(default_factory=list)
    networks: list[Model] = field(default_factory=list)
    forwarded_ports: list[ForwardedPort] = field(default_factory=list)
    private_networks: list[PrivateNetwork] = field(default_factory=list)
    synced_folders: list[SyncedFolder] = field(default_factory=list)

    @attribute_setter("providers")
    def _set_providers(self, value):
        self.providers = build_models(value, type(self), "providers", providers)

    @attribute_setter("provisioners")
    def _set_provisioners(self, value):
        self.provisioners = build_models(value, type(self), "provisioners", provisioners)

    @attribute_setter("networks")
    def _set_networks(self, value):
        self.networks = build_models(value, type(self), "networks", networks)

    @attribute_setter("forwarded_ports")
    def _set_forwarded_ports(self, value):
        self.forwarded_ports = build_models(value, type(self), "forwarded_ports", ForwardedPort)

    @attribute_setter("private_networks")
    def _set_private_networks(self, value):
        self.private_networks = build_models(
            value, type(self), "private_networks", PrivateNetwork
        )

    @attribute_setter("synced_folders")
    def _set_synced_folders(self, value):
        self.synced_folders = build_models(value, type(self), "synced_folders", SyncedFolder)

    def nested_models(self) -> list[Model]:
        """All nested models in the order their actions run."""
        models: list[Model] = []
        for attr in NESTED:
            models.extend(getattr(self, attr))
        return models

    def to_action(self) -> ConfigAction:
        if self.name is None:
            raise IncompleteModelError(type(self), ["name"])

        name = self.name
        settings = {attr: getattr(self, attr) for attr in VM_SETTINGS}
        settings = {attr: value for attr, value in settings.items() if value is not None}

        def machine_settings(vm_config: Any) -> None:
            for attr, value in settings.items():
                setattr(vm_config.vm, attr, value)

        body = ActionSequence.of(
            f"vm:{name}",
            [ConfigAction("settings", machine_settings), *self.nested_models()],
        )
        define_opts = options(primary=self.primary, autostart=self.autostart)

        def define(config: Any) -> None:
            config.vm.define(name, body, **define_opts)

        return ConfigAction(f"define:{name}", define, [body])
