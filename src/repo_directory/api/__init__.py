"""HTTP API for the Repo Directory application."""
