"""
Model classes.

Every model converts a hash of basic data types into a typed object and turns
that object into a ConfigAction applied to the host configuration object.

Modules:
- base: Model base class and the attribute_setter decorator
- collection: Registries of model types selected by a ``type`` key
- synced_folder, vm, root: Machine level models
- network, provider, provisioner: Models selected through collections
"""

from config_builder.model import network, provider, provisioner
from config_builder.model.base import Model, attribute_setter
from config_builder.model.collection import ModelCollection, networks, providers, provisioners
from config_builder.model.root import Root
from config_builder.model.synced_folder import SyncedFolder
from config_builder.model.vm import VM

__all__ = [
    "Model",
    "ModelCollection",
    "Root",
    "SyncedFolder",
    "VM",
    "attribute_setter",
    "network",
    "networks",
    "provider",
    "providers",
    "provisioner",
    "provisioners",
]
