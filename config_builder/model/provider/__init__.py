"""
Provider models.

Modules:
- virtualbox: VirtualBox provider settings
"""

from config_builder.model.provider.virtualbox import VirtualBox

__all__ = ["VirtualBox"]
