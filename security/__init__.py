"""
security/ - Authentication Helpers
==================================
Password hashing, signed session tokens and login throttling.
"""
