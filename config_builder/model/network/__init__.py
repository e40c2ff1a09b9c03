"""
Network models.

Modules:
- forwarded_port: Host to guest port forwarding
- private_network: Host-only private network
"""

from config_builder.model.network.forwarded_port import ForwardedPort
from config_builder.model.network.private_network import PrivateNetwork

__all__ = ["ForwardedPort", "PrivateNetwork"]
