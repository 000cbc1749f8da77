"""
Mail provider package.

Keep package import side-effects to a minimum. Do not import factory/adapters here.
"""

__all__ = [
    "interface",
    "config",
    "factory",
    "mailgun_adapter",
    "mock_adapter",
]
