"""
Schemas module - Request/Response schemas for API endpoints.

Wire format is camelCase (what the browser client sends and reads);
Python attributes are snake_case via an alias generator.
"""
