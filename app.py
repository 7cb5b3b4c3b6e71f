# app.py

import logging

from flask import Flask, request, render_template, jsonify

import config
from errors import TrackerError
from ip_locator import get_location_from_ip
from map_view import build_map_view, marker_label
from resolver import resolve_query
from view_state import ViewState, PLACEHOLDER_RECORD

app = Flask(__name__)


def client_address():
    # First hop of X-Forwarded-For when proxied, else the socket peer
    route = request.access_route
    return route[0] if route else request.remote_addr


def run_lookup(query):
    """Resolve the search text and geolocate it. Returns (state, error)."""
    state = ViewState().start(query)
    try:
        resolved = resolve_query(query, client_ip=client_address())
        record = get_location_from_ip(resolved.address)
    except TrackerError as e:
        app.logger.warning("Lookup for %r failed: %s", query, e.message)
        return state.fail(e.message), e

    app.logger.info("Lookup %r -> %s (%s)", query or "<self>", record.ip, record.location)
    return state.succeed(record), None


def map_for(state):
    record = state.location or PLACEHOLDER_RECORD
    label = marker_label(record) if state.location else record.location
    return build_map_view(record, label=label)


# --- Search page: info panel + map ---
@app.route('/')
def index():
    query = request.args.get('q', '').strip()
    state, _ = run_lookup(query)
    return render_template(
        'index.html',
        state=state,
        record=state.location or PLACEHOLDER_RECORD,
        map_view=map_for(state).to_dict(),
    )


# --- JSON lookup used by the page script ---
@app.route('/api/lookup')
def api_lookup():
    query = request.args.get('q', '').strip()
    state, error = run_lookup(query)
    body = state.to_dict()
    body['map'] = map_for(state).to_dict()
    return jsonify(body), (error.status_code if error else 200)


@app.route('/healthz')
def healthz():
    return jsonify({"status": "ok"})


if __name__ == '__main__':
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.run(host="0.0.0.0", port=config.PORT, debug=config.DEBUG)
