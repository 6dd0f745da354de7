"""
7th Heaven Club referral network service.
"""

__version__ = "1.0.0"
