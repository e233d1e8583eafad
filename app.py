# app.py — Flask backend
from flask import Flask, request, jsonify
from pydantic import ValidationError

from catalog import GENDERS, SYMPTOMS, as_options
from config import get_settings
from errors import DiagnosisError
from llm_wrapper import get_diagnosis
from logging_setup import configure_logging
from pydantic_models import DiagnosisRequest

logger = configure_logging(get_settings())

app = Flask(__name__)

ERROR_STATUS = {
    "configuration": 500,
    "transport": 502,
    "parse": 502,
    "schema": 502,
}


@app.route("/", methods=["GET"])
def index():
    return ("HealthGuard AI — POST /api/diagnosis with "
            "{'symptoms': ['fever', ...], 'age': 30, 'gender': 'male'|'female'}")


@app.route("/api/symptoms", methods=["GET"])
def symptoms():
    return jsonify({"symptoms": as_options(SYMPTOMS), "genders": as_options(GENDERS)})


@app.route("/api/diagnosis", methods=["POST"])
def diagnosis():
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        logger.warning("Rejected diagnosis request: body is not a JSON object")
        return jsonify({"error": "Kirim JSON dengan field 'symptoms', 'age', dan 'gender'."}), 400

    try:
        diagnosis_request = DiagnosisRequest(**data)
    except ValidationError as e:
        details = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        logger.warning("Rejected diagnosis form: %s", "; ".join(details))
        return jsonify({"error": "Data formulir tidak valid.", "details": details}), 400

    try:
        result = get_diagnosis(diagnosis_request)
    except DiagnosisError as e:
        return jsonify({"error": f"Terjadi kesalahan: {e.message}", "kind": e.kind}), ERROR_STATUS.get(e.kind, 500)

    return jsonify({"diagnosis": result})


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000)
