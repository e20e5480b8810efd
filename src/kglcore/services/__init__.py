"""Service layer — validation gateway and its result contracts.

Services may import from domain, config and plugins.
"""
