"""Interface adapters for the CLI and HTTP API."""
