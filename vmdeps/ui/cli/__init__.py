"""Click sub-command groups, registered by ``vmdeps.main``."""
