"""Services — the provisioning engine."""
