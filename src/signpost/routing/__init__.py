"""Routing — path templates, routes, and the ordered route registry.

Routes are registered during setup and frozen when a dispatcher is
built from the registry.
"""
