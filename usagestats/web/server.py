"""
Flask server exposing the usage method channel.
"""
from flask import Flask, jsonify, request
from typing import Any
import socket
import traceback
from ..channel import UsageChannel
from ..config import CHANNEL
from ..debug import debug_log
from ..errors import InvalidArgumentError, MethodNotImplementedError, ProviderUnavailableError


def find_free_port(preferred: int = 5050) -> int:
    """Try preferred port, fall back if unavailable."""
    for port in (preferred, 8080, 5000):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            try:
                s.bind(("127.0.0.1", port))
                return port
            except OSError:
                continue
    raise RuntimeError(f"No free port found ({preferred}/8080/5000 busy)")


def create_app(channel: UsageChannel) -> Flask:
    """
    Create Flask app serving method calls.

    Args:
        channel: Dispatcher that runs each method call
    """
    app = Flask(__name__)

    @app.route(f"/{CHANNEL}", methods=["GET"])
    def list_methods() -> Any:  # pyright: ignore[reportUnusedFunction]
        return jsonify({"methods": channel.methods})

    @app.route(f"/{CHANNEL}/<method>", methods=["POST"])
    def call_method(method: str) -> Any:  # pyright: ignore[reportUnusedFunction]
        """Run one method call; the JSON body holds the arguments."""
        arguments = request.get_json(silent=True) if request.data else {}
        if not isinstance(arguments, dict):
            return jsonify({
                "error": "invalidArgument",
                "field": "arguments",
                "message": "Request body must be a JSON object"
            }), 400

        debug_log(f"call {method} {arguments}")
        try:
            return jsonify({"result": channel.handle(method, arguments)})
        except MethodNotImplementedError as e:
            return jsonify({"error": "notImplemented", "method": e.method}), 501
        except InvalidArgumentError as e:
            return jsonify({
                "error": "invalidArgument",
                "field": e.field,
                "message": e.message
            }), 400
        except ProviderUnavailableError as e:
            return jsonify({"error": "providerUnavailable", "message": str(e)}), 503
        except Exception as e:
            traceback.print_exc()
            return jsonify({"error": "internal", "message": str(e)}), 500

    return app
