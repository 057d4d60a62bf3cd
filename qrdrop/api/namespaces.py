"""
API Namespaces - share endpoints
"""

from flask import Response, current_app, request, send_file
from flask_restx import Namespace, Resource
from werkzeug.exceptions import RequestEntityTooLarge

from qrdrop.application.share_service import ShareService
from qrdrop.domain.errors import (
    ERROR_MESSAGES,
    ErrorCategory,
    InvalidPasswordError,
    MissingUploadError,
    ShareExpiredError,
    ShareNotFoundError,
    create_error_response,
)

share_ns = Namespace("share", description="File sharing operations")

from qrdrop.api.models import (  # noqa: E402
    download_parser,
    error_response,
    metadata_response,
    upload_parser,
    upload_response,
)


def _share_service() -> ShareService:
    return current_app.container.resolve(ShareService)


def _text_error(category: ErrorCategory, status_code: int) -> Response:
    """Plain-text error body used by the download endpoint."""
    return Response(ERROR_MESSAGES[category], status=status_code, mimetype="text/html")


def _download_password():
    """Password from the form, else from a JSON body; non-strings count as missing."""
    password = request.form.get("password")
    if password is None:
        body = request.get_json(silent=True)
        if isinstance(body, dict):
            password = body.get("password")
    return password if isinstance(password, str) else None


@share_ns.route("/upload")
class Upload(Resource):
    """Upload a file and create its share"""

    @share_ns.doc("upload_file")
    @share_ns.expect(upload_parser)
    @share_ns.response(200, "Success", upload_response)
    @share_ns.response(400, "No file uploaded", error_response)
    @share_ns.response(413, "File too large", error_response)
    @share_ns.response(500, "Server error during upload", error_response)
    def post(self):
        """
        Upload a file

        Stores the file for 10 minutes and returns a download page link
        together with a QR code of that link.
        """
        try:
            uploaded = request.files.get("file")
            password = request.form.get("password") or None
        except RequestEntityTooLarge:
            return create_error_response(ErrorCategory.FILE_TOO_LARGE, status_code=413)

        if uploaded is None or not uploaded.filename:
            return create_error_response(ErrorCategory.NO_FILE, status_code=400)

        try:
            result = _share_service().upload(
                uploaded.stream, uploaded.filename, password, request.host_url
            )
        except MissingUploadError:
            return create_error_response(ErrorCategory.NO_FILE, status_code=400)
        except Exception as e:
            current_app.logger.exception(f"Upload error: {e}")
            return create_error_response(ErrorCategory.UPLOAD_FAILED, status_code=500)

        return result.to_dict(), 200


@share_ns.route("/meta/<string:file_id>")
@share_ns.param("file_id", "The share id")
class Metadata(Resource):
    """Display metadata of a share"""

    @share_ns.doc("get_metadata")
    @share_ns.response(200, "Success", metadata_response)
    @share_ns.response(404, "Not found or expired", error_response)
    def get(self, file_id):
        """
        Get share metadata

        Returns the original name, expiry and whether a password is needed.
        """
        try:
            return _share_service().get_metadata(file_id), 200
        except ShareNotFoundError:
            return create_error_response(ErrorCategory.NOT_FOUND, status_code=404)


@share_ns.route("/download/<string:file_id>")
@share_ns.param("file_id", "The share id")
class Download(Resource):
    """Download the file of a share"""

    @share_ns.doc("download_file")
    @share_ns.expect(download_parser)
    @share_ns.response(200, "File content")
    @share_ns.response(401, "Invalid password")
    @share_ns.response(404, "Invalid or expired link")
    @share_ns.response(410, "Link expired")
    @share_ns.response(500, "Download failed")
    def post(self, file_id):
        """
        Download a shared file

        Expired shares are deleted on access. Password-protected shares
        require the ``password`` form field.
        """
        service = _share_service()

        try:
            record = service.authorize_download(file_id, _download_password())
        except ShareNotFoundError:
            return _text_error(ErrorCategory.INVALID_LINK, 404)
        except ShareExpiredError:
            return _text_error(ErrorCategory.LINK_EXPIRED, 410)
        except InvalidPasswordError:
            current_app.logger.info(f"Rejected password for id={file_id}")
            return _text_error(ErrorCategory.INVALID_PASSWORD, 401)

        try:
            response = send_file(
                record.storage_path,
                as_attachment=True,
                download_name=record.download_name(),
            )
        except OSError as e:
            current_app.logger.error(f"Download error for id={file_id}: {e}")
            return _text_error(ErrorCategory.DOWNLOAD_FAILED, 500)

        service.record_download(record)
        return response
