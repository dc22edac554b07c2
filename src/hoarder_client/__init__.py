"""Hoarder client: API client and credential store for a Hoarder bookmark server."""
