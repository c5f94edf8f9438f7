"""Configuration — optional devkit.yml settings."""
