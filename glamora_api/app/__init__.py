"""
Application package initializer.

The project is organised into small layers: ``core`` (configuration,
logging, storage, password hashing, errors), ``schemas`` (request and
response models), ``services`` (one class per domain) and ``api``
(routers and dependencies).  Products, accounts and orders each have
their own schema, service and endpoint module.
"""

from .main import app  # noqa: F401
