"""Shell provisioner model."""

from dataclasses import dataclass, field

from config_builder.action import ConfigAction
from config_builder.exceptions import IncompleteModelError, InvalidAttributeValueError
from config_builder.model.base import Model, attribute_setter
from config_builder.model.collection import provisioners
from config_builder.model.values import as_list, options


@provisioners.register("shell")
@dataclass
class Shell(Model):
    """Run an inline script or a script file in the guest."""

    inline: str | None = None
    path: str | None = None
    args: list[str] = field(default_factory=list)
    privileged: bool | None = None

    @attribute_setter("args")
    def _set_args(self, value):
        # A single string is passed through as one argument string
        if isinstance(value, str):
            self.args = [value]
        else:
            self.args = [str(arg) for arg in as_list(value, type(self), "args")]

    def to_action(self) -> ConfigAction:
        if self.inline is None and self.path is None:
            raise IncompleteModelError(type(self), ["inline or path"])
        if self.inline is not None and self.path is not None:
            raise InvalidAttributeValueError("path", type(self), "cannot be combined with inline")

        opts = options(
            inline=self.inline,
            path=self.path,
            args=list(self.args) or None,
            privileged=self.privileged,
        )

        def shell(config):
            config.vm.provision("shell", **opts)

        return ConfigAction("provisioner:shell", shell)
