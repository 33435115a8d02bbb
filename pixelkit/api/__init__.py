"""
API layer for PixelKit: routers, dependencies and error translation.
"""
