"""
Relay Service Libraries Package.

Shared infrastructure for the app relay service: structured logging and
the structured error model rendered by the HTTP layer.
"""
