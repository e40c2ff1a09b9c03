"""
config-builder: virtual machine configuration from YAML descriptors.

Turns plain nested data (as parsed from YAML) into typed models, and models
into deferred actions applied to the provisioning tool's configuration object.

Main features:
- Models populated attribute by attribute, rejecting unknown keys
- Deferred, composable configuration actions
- Provider, provisioner and network models selected by type name
- Layered descriptors with schema validation
- Recording config object for previewing the resulting calls
"""
