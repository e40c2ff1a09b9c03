"""Private network model."""

from dataclasses import dataclass

from config_builder.action import ConfigAction
from config_builder.exceptions import IncompleteModelError, InvalidAttributeValueError
from config_builder.model.base import Model
from config_builder.model.collection import networks
from config_builder.model.values import options


@networks.register("private_network")
@dataclass
class PrivateNetwork(Model):
    """A host-only network with either a static address or DHCP."""

    ip: str | None = None
    dhcp: bool | None = None
    netmask: str | None = None
    auto_config: bool | None = None

    def to_action(self) -> ConfigAction:
        if self.dhcp and self.ip is not None:
            raise InvalidAttributeValueError("ip", type(self), "cannot be combined with dhcp")
        if not self.dhcp and self.ip is None:
            raise IncompleteModelError(type(self), ["ip"])

        if self.dhcp:
            opts = options(type="dhcp", netmask=self.netmask, auto_config=self.auto_config)
            name = "private_network:dhcp"
        else:
            opts = options(ip=self.ip, netmask=self.netmask, auto_config=self.auto_config)
            name = f"private_network:{self.ip}"

        def private_network(config):
            config.vm.network("private_network", **opts)

        return ConfigAction(name, private_network)
