"""Credential hashing, access tokens and route authorization."""
