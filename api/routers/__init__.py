"""
FastAPI routers grouped por domínio.

Each file inside this package exposes an APIRouter that is included in the
application built by api.app.create_app. Routers only translate HTTP to
repository calls; errors are mapped to status codes by the app's handlers.
"""
