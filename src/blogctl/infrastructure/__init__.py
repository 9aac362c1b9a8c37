"""Infrastructure layer: storage backends for blog objects.

This layer depends on stdlib and third-party libs (SQLAlchemy).
It must never import from domain, services, commands, or output.
The service layer bridges between domain rules and storage.
"""
