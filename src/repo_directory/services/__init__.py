"""Business logic services for the Repo Directory application."""
