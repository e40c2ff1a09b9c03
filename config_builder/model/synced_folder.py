"""Synced folder model."""

from dataclasses import dataclass, field

from config_builder.action import ConfigAction
from config_builder.exceptions import IncompleteModelError
from config_builder.model.base import Model, attribute_setter
from config_builder.model.values import as_list, options


@dataclass
class SyncedFolder(Model):
    """A folder shared between the host and the guest.

    Renders ``config.vm.synced_folder(host_path, guest_path, **options)``.
    """

    host_path: str | None = None
    guest_path: str | None = None
    type: str | None = None  # nfs | rsync | smb | virtualbox
    disabled: bool | None = None
    create: bool | None = None
    owner: str | None = None
    group: str | None = None
    mount_options: list[str] = field(default_factory=list)
    nfs: bool | None = None

    @attribute_setter("mount_options")
    def _set_mount_options(self, value):
        self.mount_options = [str(opt) for opt in as_list(value, type(self), "mount_options")]

    def to_action(self) -> ConfigAction:
        missing = [name for name in ("host_path", "guest_path") if getattr(self, name) is None]
        if missing:
            raise IncompleteModelError(type(self), missing)

        host_path = self.host_path
        guest_path = self.guest_path
        opts = options(
            type=self.type,
            disabled=self.disabled,
            create=self.create,
            owner=self.owner,
            group=self.group,
            mount_options=list(self.mount_options) or None,
            nfs=self.nfs,
        )

        def synced_folder(config):
            config.vm.synced_folder(host_path, guest_path, **opts)

        return ConfigAction(f"synced_folder:{guest_path}", synced_folder)
