import os
import logging
from datetime import datetime
from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge

# Import configuration and processing functions
from config import UPLOAD_FOLDER, API_HOST, API_PORT, API_DEBUG, API_VERSION, MAX_FILE_SIZE, LOG_LEVEL
from ai_processor import analyze_document
from normalizer import parse_analysis_response
from utils import validate_upload, get_secure_filename, safe_file_cleanup, log_error_and_return

# Setup logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# --- FLASK APP SETUP ---
app = Flask(__name__)
CORS(app)  # Cross-Origin Resource Sharing configuration for frontend compatibility

# File upload directory configuration
if not os.path.exists(UPLOAD_FOLDER):
    os.makedirs(UPLOAD_FOLDER)
app.config['UPLOAD_FOLDER'] = UPLOAD_FOLDER
app.config['MAX_CONTENT_LENGTH'] = MAX_FILE_SIZE

logger.info("Flask application initialized")


@app.errorhandler(RequestEntityTooLarge)
def handle_file_too_large(e):
    return jsonify({"error": "File too large. Maximum size is 10MB."}), 413


# --- API ENDPOINTS ---

@app.route('/ping', methods=['GET'])
def ping():
    """
    Health check endpoint to verify the server is running.
    Returns server status and timestamp.
    """
    return jsonify({
        "status": "ok",
        "message": "Legal Document Analyzer API is running",
        "timestamp": datetime.now().isoformat(),
        "version": API_VERSION
    }), 200


@app.route('/analyze', methods=['POST'])
def analyze_uploaded_document():
    """
    Handles document upload, model analysis and result delivery.
    """
    filepath = None

    try:
        if 'file' not in request.files:
            return jsonify({"error": "No file part in the request"}), 400

        file = request.files['file']
        is_valid, error_message = validate_upload(file)
        if not is_valid:
            return jsonify({"error": error_message}), 400

        # Save file securely
        filename = get_secure_filename(file.filename)
        if not filename:
            return jsonify({"error": "Invalid file name"}), 400
        filepath = os.path.join(app.config['UPLOAD_FOLDER'], filename)
        file.save(filepath)

        logger.info(f"Processing document: {filename}")
        result = analyze_document(filepath, file_name=file.filename)

        logger.info(f"Document processed successfully: {filename}")
        return jsonify(result.model_dump(by_alias=True)), 200

    except RequestEntityTooLarge:
        raise

    except ValueError as e:
        body, status = log_error_and_return(str(e), 400)
        return jsonify(body), status

    except Exception as e:
        body, status = log_error_and_return(f"An error occurred during analysis: {str(e)}")
        return jsonify(body), status

    finally:
        # Temporary file cleanup
        safe_file_cleanup(filepath)


@app.route('/normalize', methods=['POST'])
def normalize_response():
    """
    Normalizes a raw nine-section model response without calling the model.
    """
    data = request.get_json(silent=True)
    raw_response = data.get('response') if isinstance(data, dict) else None

    if not isinstance(raw_response, str):
        return jsonify({"error": "Missing 'response' text in request body"}), 400

    fields, report = parse_analysis_response(raw_response)
    return jsonify({
        "analysis": fields.model_dump(by_alias=True),
        "report": report.model_dump(by_alias=True),
    }), 200


# --- RUN THE APP ---
if __name__ == '__main__':
    # Application server configuration
    logger.info(f"Starting Legal Document Analyzer API on {API_HOST}:{API_PORT}")
    app.run(host=API_HOST, port=API_PORT, debug=API_DEBUG)
