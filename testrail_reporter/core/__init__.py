"""
Core layer - domain, interfaces, configuration and services.
"""
