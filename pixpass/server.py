"""HTTP surface: a small Flask app around the pixelizer and the compositor."""

from datetime import datetime, timezone

from flask import Flask, jsonify, request

from pixpass.codec import decode_data_url, to_data_url
from pixpass.compositor import FieldValues, generate_document
from pixpass.config import MAX_UPLOAD_MB, SERVICE_NAME, VERSION, Settings
from pixpass.exceptions import InputValidationError, PixpassError
from pixpass.logging import audit, get_logger
from pixpass.pixelizer import image_info, stylize, validate_preprocessed
from pixpass.profiles import PROFILES
from pixpass.templates import FileTemplateSource, TemplateCache

log = get_logger("server")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def create_app(settings: Settings | None = None, cache: TemplateCache | None = None) -> Flask:
    """Create the Flask app. Templates come from *cache*, else from ``settings.template_dir``."""
    settings = settings or Settings.from_env()
    source = FileTemplateSource(settings.template_dir) if settings.template_dir else None
    if cache is None and source is not None:
        cache = TemplateCache(source)

    app = Flask(__name__)
    # A little headroom over the image limit for the multipart envelope
    app.config["MAX_CONTENT_LENGTH"] = (MAX_UPLOAD_MB + 1) * 1024 * 1024

    def _uploaded_image():
        upload = request.files.get("image")
        if upload is None:
            return None, None
        return upload.read(), upload.filename

    def _processed(png: bytes, name: str | None, mode: str):
        return jsonify({
            "success": True,
            "processedImage": to_data_url(png),
            "originalName": name,
            "processedSize": len(png),
            "mode": mode,
        })

    @app.route("/api/process-image", methods=["POST"])
    def process_image():
        data, name = _uploaded_image()
        if data is None:
            return _error("No image received", 400)
        threshold = request.form.get("threshold") or None
        png = stylize(data, threshold)
        audit("api.process_image", logger=log, name=name, size=len(png))
        return _processed(png, name, "automatic")

    @app.route("/api/process-preprocessed-image", methods=["POST"])
    def process_preprocessed_image():
        data, name = _uploaded_image()
        if data is None:
            return _error("No image received", 400)
        png = validate_preprocessed(data)
        audit("api.process_preprocessed", logger=log, name=name, size=len(png))
        return _processed(png, name, "preprocessed")

    @app.route("/api/generate-passport", methods=["POST"])
    def generate_passport():
        body = request.get_json(silent=True) or {}
        country, photo, fields = body.get("country"), body.get("photoData"), body.get("fields")
        if not country or not isinstance(photo, str) or not photo or not isinstance(fields, dict):
            return _error("Missing required data (country, photoData, fields)", 400)

        png = generate_document(country, decode_data_url(photo), FieldValues.from_mapping(fields), cache)
        return jsonify({
            "success": True,
            "passportImage": to_data_url(png),
            "country": country,
            "generatedAt": _now(),
        })

    @app.route("/api/debug/image-info", methods=["GET", "POST"])
    def debug_image_info():
        data, _name = _uploaded_image()
        if data is None:
            return _error("No image received", 400)
        return jsonify({"success": True, "metadata": image_info(data)})

    @app.route("/api/countries")
    def countries():
        return jsonify({
            "success": True,
            "countries": {code: p.to_dict() for code, p in PROFILES.items()},
        })

    @app.route("/api/check-templates")
    def check_templates():
        available = source.available() if source is not None else []
        return jsonify({"success": True, "availableTemplates": available})

    @app.route("/api/health")
    def health():
        return jsonify({
            "success": True,
            "status": "OK",
            "service": SERVICE_NAME,
            "version": VERSION,
            "features": ["automatic-processing", "preprocessed-images"],
            "timestamp": _now(),
        })

    @app.errorhandler(InputValidationError)
    def handle_invalid(e):
        audit("api.rejected", logger=log, path=request.path, error=str(e))
        return _error(str(e), 400)

    @app.errorhandler(PixpassError)
    def handle_failure(e):
        log.error("Request %s failed: %s", request.path, e)
        return _error(str(e), 500)

    @app.errorhandler(413)
    def handle_too_large(_e):
        return _error(f"File is too large (maximum {MAX_UPLOAD_MB}MB)", 413)

    return app
