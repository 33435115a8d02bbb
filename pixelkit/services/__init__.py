"""
Services Package

Business logic layer between the API routers and the core engines.
"""

from .processing_service import KernelFactory, ProcessingService

__all__ = ["KernelFactory", "ProcessingService"]
