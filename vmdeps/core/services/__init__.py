"""Core services — installation, provisioning and file reconciliation."""
