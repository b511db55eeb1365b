"""
Service layer.

Business logic for employees (``employee_service``), the SQLite record
store (``employee_repository``), request validators, list filtering and
the response projection.  API handlers only talk to this layer.
"""
