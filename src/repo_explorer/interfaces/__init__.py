"""Interfaces: CLI and HTTP API."""
