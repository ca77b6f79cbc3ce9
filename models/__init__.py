"""
models/ - Domain Models
=======================
Plain dataclasses for the records the service stores.
"""
