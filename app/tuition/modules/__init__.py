"""
Feature modules live under this package.

Each module owns its routes and models while reusing the platform pieces
(admin password gate, DB engine, logging) from app.tuition.
"""

