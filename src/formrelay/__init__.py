"""
Contact form relay: forwards form submissions to Mailgun.
"""

__version__ = "0.1.0"
