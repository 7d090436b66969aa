#!/usr/bin/env python3
"""
Flask Web Application for TBT Impact Attribution
Provides a REST API endpoint attributing Total Blocking Time to main-thread tasks.
"""

from flask import Flask, request, jsonify
from werkzeug.utils import secure_filename
import os
import tempfile
from tbt_attribution import AttributionConfig
from tbt_attribution.core.providers import ArtifactFormatError
from tbt_attribution.session import attribute_artifact_file
from tbt_attribution.web import prepare_results

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 500 * 1024 * 1024
app.config['UPLOAD_FOLDER'] = tempfile.gettempdir()

ALLOWED_EXTENSIONS = {'json'}

def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


@app.route('/api/tbt-impact', methods=['POST'])
def tbt_impact_api():
    """
    API endpoint to attribute TBT for an artifact file.
    Accepts: multipart/form-data with fields:
      - 'file': artifact JSON file
      - 'top_n': number of top tasks to report (optional, default: 10)
      - 'workers': worker processes for impact evaluation (optional, default: 1)
      - 'parallel_threshold': minimum work items before workers are used (optional, default: 2000)
    Returns: JSON with attribution results
    """
    if 'file' not in request.files:
        return jsonify({'error': 'No file provided'}), 400
    
    file = request.files['file']
    
    if not file.filename:
        return jsonify({'error': 'No file selected'}), 400
    
    if not allowed_file(file.filename):
        return jsonify({'error': 'Invalid file type. Only JSON files are allowed.'}), 400
    
    try:
        top_n = int(request.form.get('top_n', '10'))
        workers = int(request.form.get('workers', '1'))
        parallel_threshold = int(request.form.get('parallel_threshold', '2000'))
        config = AttributionConfig(num_workers=workers, parallel_threshold=parallel_threshold)
    except ValueError as e:
        return jsonify({'error': f'Invalid parameter: {e}'}), 400
    
    filename = secure_filename(file.filename)
    filepath = os.path.join(app.config['UPLOAD_FOLDER'], filename)
    file.save(filepath)
    
    try:
        impact_tasks, window = attribute_artifact_file(filepath, config)
        results = prepare_results(impact_tasks, window, top_n=top_n)
        results['filename'] = filename
        return jsonify(results)
    
    except ArtifactFormatError as e:
        return jsonify({'error': str(e)}), 422
    except Exception as e:
        return jsonify({'error': str(e)}), 500
    finally:
        os.remove(filepath)


if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5001)
