#!/usr/bin/env python3
"""
Flask Web Application for the Build Time-Trace Analyzer
Provides REST API endpoints that analyze a build directory on the server's filesystem.
"""

from flask import Flask, request, jsonify

from time_trace_analyzer import BuildVariant, LayoutError, analyze
from time_trace_analyzer.web import DEFAULT_LIMIT, prepare_results

app = Flask(__name__)


@app.route('/api/build-variants', methods=['GET'])
def build_variants_api():
    """List the accepted build variant names."""
    return jsonify({'build_variants': list(BuildVariant.names())})


@app.route('/api/analyze', methods=['POST'])
def analyze_api():
    """
    API endpoint to analyze a build directory.
    Accepts: JSON body or form data with fields:
      - 'path': source or build directory (required)
      - 'build_variant': one of Debug|DevRelease|Release|SingleConfig (optional, default: 'Debug')
      - 'limit': rows per table (optional, default: 100)
      - 'sort': table name -> criterion (optional, JSON body only)
    Returns: JSON with analysis results
    """
    params = request.get_json(silent=True)
    if params is None:
        params = request.form
    elif not isinstance(params, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    path = params.get('path')
    if not path:
        return jsonify({'error': 'No path provided'}), 400

    try:
        build_variant = BuildVariant(params.get('build_variant', BuildVariant.DEBUG.value))
    except ValueError:
        return jsonify({'error': f"Invalid build variant. Must be one of: {list(BuildVariant.names())}"}), 400

    try:
        limit = int(params.get('limit', DEFAULT_LIMIT))
    except (TypeError, ValueError):
        return jsonify({'error': 'Invalid limit'}), 400
    if limit < 0:
        return jsonify({'error': 'Invalid limit'}), 400

    sort = params.get('sort') if isinstance(params.get('sort'), dict) else None

    try:
        result = analyze(path, build_variant)
    except LayoutError as e:
        return jsonify({'error': str(e), 'kind': e.kind}), 404

    try:
        results = prepare_results(result, limit=limit, sort=sort)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    return jsonify(results)


if __name__ == '__main__':
    app.run(debug=True, host='127.0.0.1', port=5001)
