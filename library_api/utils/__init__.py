"""
Utilities Package

Helper functions used across the application.
"""
