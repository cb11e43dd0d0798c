"""
Endpoint modules.

Each module defines an APIRouter for a specific domain.  The routers
are aggregated in ``api/router.py`` and then included in the main
application; ``health`` is mounted at the root.
"""
