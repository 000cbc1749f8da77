"""
Form relay: receive a contact form post, forward it, report the outcome.
"""
