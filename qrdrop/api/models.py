"""
API Models for request/response documentation
"""

from flask_restx import fields, reqparse
from werkzeug.datastructures import FileStorage

from qrdrop.api import api

# =============================================================================
# Request Parsers
# =============================================================================

upload_parser = reqparse.RequestParser()
upload_parser.add_argument(
    "file", location="files", type=FileStorage, required=True,
    help="File to share",
)
upload_parser.add_argument(
    "password", location="form", type=str, required=False,
    help="Optional password required to download the file",
)

download_parser = reqparse.RequestParser()
download_parser.add_argument(
    "password", location="form", type=str, required=False,
    help="Password of a protected share",
)

# =============================================================================
# Response Models
# =============================================================================

upload_response = api.model(
    "UploadResponse",
    {
        "message": fields.String(example="uploaded"),
        "id": fields.String(description="Share id", example="3f9a1c0b7e42"),
        "fileUrl": fields.String(
            description="Download page URL",
            example="http://localhost:3000/download.html?id=3f9a1c0b7e42",
        ),
        "qrData": fields.String(description="PNG data URI of a QR code for fileUrl"),
        "expiresAt": fields.Integer(description="Expiry in epoch milliseconds"),
    },
)

metadata_response = api.model(
    "MetadataResponse",
    {
        "id": fields.String(description="Share id"),
        "originalName": fields.String(description="Uploaded file name"),
        "expiresAt": fields.Integer(description="Expiry in epoch milliseconds"),
        "passwordProtected": fields.Boolean(description="Whether a password is required"),
    },
)

error_response = api.model(
    "ErrorResponse",
    {
        "error": fields.String(description="Error message"),
    },
)
