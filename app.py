# app.py — Flask backend
import logging
from typing import Optional

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS

from data_store import LocalDataStore, load_data_store
from errors import InvalidInputError, StartupDataError, UpstreamError
from llm_wrapper import get_ai_guidance, get_llm_client
from pydantic_models import DiagnosisRequest, ErrorResponse
from settings import Settings

logger = logging.getLogger(__name__)

UPSTREAM_FAILURE_MESSAGE = (
    "Failed to generate AI guidance. This might be due to an issue with the AI service or your request. "
    "Please try again later or refine your symptom selection."
)


def create_app(
    store: Optional[LocalDataStore] = None, llm=None, settings: Optional[Settings] = None
) -> Flask:
    """
    Build the Flask app around an already-loaded store and completion client.
    Missing pieces are built from settings; a dataset that fails to load raises StartupDataError.
    """
    settings = settings or Settings.from_env()
    if store is None:
        store = load_data_store(settings.data_dir)
    if llm is None:
        llm = get_llm_client(settings)

    app = Flask(__name__)
    CORS(app)
    app.extensions["data_store"] = store
    app.extensions["llm_client"] = llm

    @app.route("/", methods=["GET"])
    def index():
        return "Symptom Triage API — GET /api/symptoms, GET /api/resources, POST /api/diagnose"

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/symptoms", methods=["GET"])
    def symptoms():
        store = current_app.extensions["data_store"]
        return jsonify([s.model_dump() for s in store.symptoms])

    @app.route("/api/resources", methods=["GET"])
    def resources():
        store = current_app.extensions["data_store"]
        return jsonify([r.model_dump() for r in store.resources])

    @app.route("/api/diagnose", methods=["POST"])
    def diagnose():
        data = request.get_json(force=True, silent=True)
        body = DiagnosisRequest.model_validate(data if isinstance(data, dict) else {})
        try:
            result = get_ai_guidance(
                body,
                current_app.extensions["data_store"],
                current_app.extensions["llm_client"],
            )
        except InvalidInputError as e:
            return jsonify(ErrorResponse(error=str(e)).model_dump(exclude_none=True)), 400
        except UpstreamError as e:
            logger.error("Error calling completion endpoint (status=%s): %s", e.status_code, e.details)
            err = ErrorResponse(error=UPSTREAM_FAILURE_MESSAGE, details=e.details)
            return jsonify(err.model_dump()), 500
        return jsonify(result.model_dump(by_alias=True))

    return app


def main():
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    try:
        app = create_app(settings=settings)
    except StartupDataError as e:
        logger.critical("Fatal: %s", e)
        raise SystemExit(1)
    logger.info("Server running on port %d", settings.port)
    app.run(host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
