"""vmdeps — dependency provisioning for a VM-backed container CLI."""

__version__ = "0.1.0"
