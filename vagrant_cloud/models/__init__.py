"""
Domain models for Vagrant Cloud API payloads.
"""

from vagrant_cloud.models.errors import APIErrorResponse

__all__ = ["APIErrorResponse"]
