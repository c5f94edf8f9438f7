"""Core — models, configuration, observability and provisioning services."""
