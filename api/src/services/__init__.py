"""Business logic services.

This package contains the name registry and the weather mood rules used
by the API endpoints.
"""
