"""Skill Swap — peer-to-peer skill exchange backend.

Users register, describe the skills they offer and seek, send swap
requests to each other, respond to them with a status, and talk it
over in a conversation attached to each request.
"""

__version__ = "0.1.0"
