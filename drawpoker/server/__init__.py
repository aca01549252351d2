"""
DrawPoker Server - FastAPI Server Layer
"""

from drawpoker.server.app import app, create_app

__all__ = ["app", "create_app"]
