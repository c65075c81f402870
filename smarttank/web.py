"""
Web dashboard for the smart tank
Serves the status page plus a small JSON API the page's script calls
"""
from flask import Flask, render_template, request, jsonify

from smarttank import __version__


def _json_body():
    return request.get_json(silent=True) or {}


def _parse_bool(value):
    """Accept JSON booleans and the usual form spellings"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ('true', '1', 'on', 'yes'):
        return True
    if isinstance(value, str) and value.lower() in ('false', '0', 'off', 'no'):
        return False
    if isinstance(value, int):
        return bool(value)
    raise ValueError(f"Expected a boolean, got {value!r}")


def create_app(controller):
    """Build the Flask app around a DashboardController"""
    app = Flask(__name__)

    @app.errorhandler(ValueError)
    def bad_request(e):
        return jsonify({'error': str(e)}), 400

    @app.route('/')
    def index():
        """Main status page"""
        return render_template('dashboard.html',
                               version=__version__,
                               view=controller.snapshot())

    @app.route('/api/state')
    def state():
        return jsonify(controller.snapshot())

    @app.route('/api/mode', methods=['POST'])
    def mode():
        body = _json_body()
        if 'auto' not in body:
            raise ValueError("Missing 'auto'")
        controller.set_mode(_parse_bool(body['auto']))
        return jsonify(controller.snapshot())

    @app.route('/api/motor/toggle', methods=['POST'])
    def motor_toggle():
        toggled = controller.toggle_motor_manual()
        response = controller.snapshot()
        response['toggled'] = toggled
        return jsonify(response)

    @app.route('/api/threshold/<which>', methods=['POST'])
    def threshold(which):
        body = _json_body()
        if 'value' not in body:
            raise ValueError("Missing 'value'")
        controller.set_threshold(which, body['value'])
        return jsonify(controller.snapshot())

    @app.route('/api/theme', methods=['POST'])
    def theme():
        body = _json_body()
        if 'theme' in body:
            controller.set_theme(body['theme'])
        else:
            controller.toggle_theme()
        return jsonify(controller.snapshot())

    @app.route('/api/reset', methods=['POST'])
    def reset():
        controller.reset_settings()
        return jsonify(controller.snapshot())

    @app.route('/api/log/clear', methods=['POST'])
    def clear_log():
        controller.clear_log()
        return jsonify(controller.snapshot())

    @app.route('/api/visibility', methods=['POST'])
    def visibility():
        body = _json_body()
        if 'visible' not in body:
            raise ValueError("Missing 'visible'")
        controller.set_visible(_parse_bool(body['visible']))
        response = controller.snapshot()
        response['ticking'] = controller.ticking
        return jsonify(response)

    return app
