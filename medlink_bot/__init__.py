"""
Medlink: WhatsApp bot for booking hospital beds.
"""

__version__ = "1.0.0"
