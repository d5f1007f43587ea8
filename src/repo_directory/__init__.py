"""Repo Directory: a crowdsourced directory of GitHub repos and Replit templates."""

__version__ = "0.1.0"
