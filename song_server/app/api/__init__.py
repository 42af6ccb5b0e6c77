"""
API package containing HTTP routes.

``router.py`` aggregates the domain routers; each domain defines its
own ``APIRouter`` in ``endpoints``.
"""
