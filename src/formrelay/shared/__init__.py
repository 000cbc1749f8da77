"""
Shared utilities and infrastructure components.

Logging, correlation ids and the base exception types used across the relay.
"""
