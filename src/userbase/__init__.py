"""UserBase - user accounts, roles and JWT authentication over a REST API."""

__version__ = "0.1.0"
