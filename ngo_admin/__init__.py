"""
NGO admin content service: CRUD API and headless admin page client
"""

__version__ = "1.0.0"
