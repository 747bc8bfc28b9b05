"""
Resistor Scanner - Flask Application
Decodes resistor values from photographs of their color bands
"""

from flask import Flask, request, jsonify, g
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import cv2
import numpy as np
import logging
import time
import uuid
from dotenv import load_dotenv
import os
from typing import Dict, Optional, Tuple

# Load environment variables before the configuration modules read them
load_dotenv()

from config.scan_config import LOG_LEVEL, RESISTOR_PALETTE, get_scan_config
from services.color.palette import PALETTES, get_palette
from services.pipeline import PipelineService
from utils.image_loader import load_image

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create Flask app
app = Flask(__name__)
CORS(app)

# Determine if we're in production mode
is_production = os.getenv('FLASK_DEBUG', 'False').lower() != 'true'


# Request ID middleware for tracing
@app.before_request
def generate_request_id():
    """Generate or use existing request ID for tracing."""
    g.request_id = request.headers.get('X-Request-ID') or str(uuid.uuid4())
    logger.debug(f'[Request {g.request_id}] {request.method} {request.path}')


@app.after_request
def add_request_id_header(response):
    """Add request ID to response headers."""
    if hasattr(g, 'request_id'):
        response.headers['X-Request-ID'] = g.request_id
    return response


def sanitize_error_message(error: Exception) -> str:
    """
    Sanitize error messages for production.
    
    In production, returns generic messages to prevent information disclosure.
    In development, returns full error details for debugging.
    
    Args:
        error: Exception object
    
    Returns:
        Sanitized error message string
    """
    if is_production:
        return "An internal error occurred. Please try again later."
    return str(error)


# Rate limiting configuration
limiter = Limiter(
    app=app,
    key_func=get_remote_address,
    default_limits=["200 per hour", "20 per minute"],
    storage_uri="memory://",
    headers_enabled=True
)

app.config['MAX_CONTENT_LENGTH'] = 10 * 1024 * 1024  # 10MB max file size

# One pipeline per palette; palettes are immutable so these are safe to share
pipeline_services: Dict[str, PipelineService] = {
    name: PipelineService(palette=palette) for name, palette in PALETTES.items()
}


@app.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': 'resistor-scanner',
        'opencv_version': cv2.__version__,
        'numpy_version': np.__version__,
        'config': get_scan_config()
    })


def validate_decode_request(data: Dict) -> Tuple[bool, Optional[str], Optional[str]]:
    """
    Validate decode resistor request.
    
    Args:
        data: Request JSON data
    
    Returns:
        Tuple of (is_valid, error_message, error_code)
    """
    if not isinstance(data, dict):
        return False, 'Request must be JSON object', 'INVALID_PARAMETER'
    
    if 'image_path' not in data:
        return False, 'image_path is required', 'MISSING_PARAMETER'
    
    if not isinstance(data['image_path'], str) or not data['image_path'].strip():
        return False, 'image_path must be a non-empty string', 'INVALID_PARAMETER'
    
    if 'palette' in data:
        if not isinstance(data['palette'], str) or data['palette'].lower() not in PALETTES:
            return False, f'palette must be one of: {", ".join(PALETTES)}', 'INVALID_PARAMETER'
    
    return True, None, None


@app.route('/decode-resistor', methods=['POST'])
@limiter.limit("30 per minute")
def decode_resistor():
    """
    Decode a resistor value from an image.
    
    Pipeline: Image → Scanline Sampling → Sequence Fusion → Background Removal → Decoding
    
    Request (JSON):
    - image_path: Path to resistor image (URL or local path)
    - palette: Palette name, e.g. "reduced" (default: configured palette)
    
    Returns:
    - Resistance in ohms and tolerance in percent
    - Detected band colors, with and without background
    - Processing time
    """
    start_time = time.time()
    request_id = getattr(g, 'request_id', 'unknown')
    
    try:
        data = request.get_json(silent=True)
        
        if not data:
            return jsonify({
                'success': False,
                'error': 'No JSON data provided',
                'error_code': 'MISSING_PARAMETER'
            }), 400
        
        is_valid, error_msg, error_code = validate_decode_request(data)
        if not is_valid:
            return jsonify({
                'success': False,
                'error': error_msg,
                'error_code': error_code
            }), 400
        
        image_path = data['image_path']
        palette = get_palette(data.get('palette', RESISTOR_PALETTE))
        logger.info(f'[Request {request_id}] Decoding image: {image_path}, palette: {palette.name}')
        
        try:
            image = load_image(image_path)
        except ValueError as e:
            logger.error(f'[Request {request_id}] Failed to load image: {e}')
            return jsonify({
                'success': False,
                'error': f'Failed to load image: {str(e)}',
                'error_code': 'IMAGE_LOAD_ERROR'
            }), 400
        
        result = pipeline_services[palette.name].process_image(
            image=image,
            image_name=os.path.basename(image_path)
        )
        
        if not result.get('success'):
            status = 422 if result.get('error_code') == 'UNDECODABLE_BAND_PATTERN' else 400
            return jsonify({
                'success': False,
                'error': result.get('error', 'Processing failed'),
                'error_code': result.get('error_code', 'PROCESSING_ERROR'),
                'bands': result.get('bands', [])
            }), status
        
        response_data = dict(result['data'])
        response_data['processing_time_ms'] = int((time.time() - start_time) * 1000)
        
        return jsonify({
            'success': True,
            'data': response_data
        })
        
    except Exception as e:
        logger.error(f'[Request {request_id}] Error in decode_resistor: {str(e)}', exc_info=True)
        return jsonify({
            'success': False,
            'error': sanitize_error_message(e),
            'error_code': 'INTERNAL_ERROR'
        }), 500


if __name__ == '__main__':
    port = int(os.getenv('PORT', 5000))
    debug = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
    
    logger.info(f'Starting resistor scanner service on port {port}')
    app.run(host='0.0.0.0', port=port, debug=debug)
