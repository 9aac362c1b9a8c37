"""blogctl: users, articles and comments with schema validation and referential integrity."""

__version__ = "0.1.0"
