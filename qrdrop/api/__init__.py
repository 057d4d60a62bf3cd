"""
qrdrop REST API

Share endpoints with OpenAPI/Swagger documentation. Routes are mounted at
the site root so the public paths stay /upload, /meta/<id> and
/download/<id>.
"""

from flask import Blueprint
from flask_restx import Api

share_bp = Blueprint("share", __name__)

api = Api(
    share_bp,
    version="1.0",
    title="qrdrop API",
    description="Ephemeral file sharing with QR-coded, time-limited download links",
    doc="/docs",  # Swagger UI
    license="MIT",
)

# Import namespaces after api is created to avoid circular imports
from .namespaces import share_ns  # noqa: E402

api.add_namespace(share_ns, path="/")
