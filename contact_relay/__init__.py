"""
contact_relay - contact form submission relay.
Stores each submission as a row and emails a notification.
"""

__version__ = "1.0.0"
