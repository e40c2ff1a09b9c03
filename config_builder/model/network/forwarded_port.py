"""Forwarded port network model."""

from dataclasses import dataclass

from config_builder.action import ConfigAction
from config_builder.exceptions import IncompleteModelError
from config_builder.model.base import Model, attribute_setter
from config_builder.model.collection import networks
from config_builder.model.values import integer, options


@networks.register("forwarded_port")
@dataclass
class ForwardedPort(Model):
    """Forward a host port to a guest port."""

    guest: int | None = None
    host: int | None = None
    protocol: str | None = None  # tcp | udp
    auto_correct: bool | None = None
    id: str | None = None
    host_ip: str | None = None
    guest_ip: str | None = None

    @attribute_setter("guest")
    def _set_guest(self, value):
        self.guest = integer(value, type(self), "guest")

    @attribute_setter("host")
    def _set_host(self, value):
        self.host = integer(value, type(self), "host")

    def to_action(self) -> ConfigAction:
        missing = [name for name in ("guest", "host") if getattr(self, name) is None]
        if missing:
            raise IncompleteModelError(type(self), missing)

        opts = options(
            guest=self.guest,
            host=self.host,
            protocol=self.protocol,
            auto_correct=self.auto_correct,
            id=self.id,
            host_ip=self.host_ip,
            guest_ip=self.guest_ip,
        )

        def forwarded_port(config):
            config.vm.network("forwarded_port", **opts)

        return ConfigAction(f"forwarded_port:{self.host}->{self.guest}", forwarded_port)
