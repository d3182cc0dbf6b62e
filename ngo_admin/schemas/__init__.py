"""
Request and response schemas for admin records
"""
