"""
License Manager Django project.
"""
