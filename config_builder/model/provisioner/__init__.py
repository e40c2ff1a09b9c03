"""
Provisioner models.

Modules:
- shell: Shell script provisioner
- puppet: Masterless (apply) puppet provisioner
- puppet_server: Puppet agent provisioner
"""

from config_builder.model.provisioner.puppet import Puppet
from config_builder.model.provisioner.puppet_server import PuppetServer
from config_builder.model.provisioner.shell import Shell

__all__ = ["Puppet", "PuppetServer", "Shell"]
