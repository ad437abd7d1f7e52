"""Routing: path template compiler and named-route registry.

Templates are compiled once at registration into case-insensitive
matchers ranked by specificity.
"""
