import json
import logging
import os

from flask import Flask, jsonify, request, abort
from werkzeug.exceptions import HTTPException

from extraction import DocumentDecodeError, UnsupportedFileTypeError
from question_parser import parse_document
from randomize import randomize_all_options

MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", "12582912"))
DEFAULT_RANDOM_ORDER = os.getenv("DEFAULT_RANDOM_ORDER", "false").lower() in {"1", "true", "yes", "on"}
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

app = Flask(__name__)
app.config.update(
    MAX_CONTENT_LENGTH=MAX_UPLOAD_BYTES,
)


def _truthy(value, default: bool) -> bool:
    if value is None:
        return default
    return str(value).lower() in {"1", "true", "yes", "on"}


@app.errorhandler(HTTPException)
def _json_http_error(exc: HTTPException):
    if request.path.startswith("/api/"):
        response = exc.get_response()
        payload = {"error": exc.name, "description": exc.description}
        response.data = json.dumps(payload)
        response.content_type = "application/json"
        response.status_code = exc.code or 500
        return response
    return exc


@app.errorhandler(Exception)
def _json_generic_error(exc: Exception):
    if isinstance(exc, HTTPException):
        return _json_http_error(exc)
    if request.path.startswith("/api/"):
        app.logger.exception("Unhandled error during API request")
        return jsonify({"error": "Internal Server Error", "description": str(exc)}), 500
    raise exc


@app.route("/api/health")
def health():
    return jsonify({"status": "ok"})


@app.route("/api/upload", methods=["POST"])
def upload_document():
    f = request.files.get("file")
    if not f or not f.filename:
        abort(400, "No file")

    raw = f.read()
    try:
        questions = parse_document(raw, f.filename, f.mimetype)
    except UnsupportedFileTypeError as e:
        abort(415, str(e))
    except DocumentDecodeError as e:
        app.logger.error(f"Decode error for '{f.filename}': {e}")
        abort(422, str(e))

    if not questions:
        abort(422, "No questions found in document")

    if _truthy(request.form.get("random_order"), DEFAULT_RANDOM_ORDER):
        questions = randomize_all_options(questions)

    return jsonify({
        "name": f.filename,
        "question_count": len(questions),
        "questions": [q.to_dict() for q in questions],
    })


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    port = int(os.environ.get("PORT", 8080))
    app.run(debug=True, host="0.0.0.0", port=port)
