"""Flask application factory for the web UI.

The ``create_app`` function creates a shell session and a line editor
bound to it, and returns a Flask app.  The page's terminal widget sends
logical key events; the editor applies them and the endpoint returns
whatever was drawn (prompt redraws, cursor moves, command output).
"""

from __future__ import annotations

from typing import Any

from flask import Flask, Response, jsonify, render_template, request

from webshell.config import ShellConfig
from webshell.editor import Key, KeyEvent, LineEditor
from webshell.output import BufferSink
from webshell.shell import Shell

_HTTP_BAD_REQUEST = 400

# Key names accepted from the page, e.g. "history-up".
_KEYS: dict[str, Key] = {key.name.lower().replace("_", "-"): key for key in Key}


def create_app(config: ShellConfig | None = None) -> Flask:
    """Create and configure the Flask application.

    Create a session, attach a line editor, draw the first prompt, and
    wire up routes.

    Args:
        config: Session settings; defaults to ``ShellConfig()``.

    Returns:
        A configured Flask application ready to serve.

    """
    sink = BufferSink()
    shell = Shell(config=config, output=sink)
    editor = LineEditor(shell)
    editor.prompt()
    sink.drain()

    app = Flask(__name__)

    def _screen() -> dict[str, Any]:
        cleared = sink.cleared
        return {"screen": sink.drain(), "cleared": cleared, "closed": editor.closed}

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the terminal HTML page."""
        screen = "" if editor.closed else editor.render()
        return render_template("index.html", title=shell.config.prompt, screen=screen)

    @app.route("/api/key", methods=["POST"])
    def key() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Apply one key event to the line editor.

        Expects JSON body: ``{"key": "submit", "text": ""}``

        Returns:
            JSON with ``screen``, ``cleared`` and ``closed`` fields.

        """
        data = request.get_json(silent=True)
        name = data.get("key") if isinstance(data, dict) else None
        if not isinstance(name, str) or name not in _KEYS:
            return jsonify({"error": "Missing or unknown 'key' field"}), _HTTP_BAD_REQUEST
        editor.handle_key(KeyEvent(_KEYS[name], str(data.get("text", ""))))
        return jsonify(_screen())

    @app.route("/api/data", methods=["POST"])
    def paste() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Insert pasted text at the cursor.

        Expects JSON body: ``{"data": "..."}``
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or "data" not in data:
            return jsonify({"error": "Missing 'data' field"}), _HTTP_BAD_REQUEST
        editor.handle_data(str(data["data"]))
        return jsonify(_screen())

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Execute a command line and return JSON output.

        Expects JSON body: ``{"command": "..."}``

        Returns:
            JSON with ``output``, ``status``, ``closed`` and
            ``incomplete`` fields.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("command"), str):
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        command: str = data["command"]
        output = shell.execute(command)
        return jsonify(
            {
                "output": output,
                "status": shell.state.last_exit_status,
                "closed": shell.closed,
                "incomplete": bool(shell.pending),
            }
        )

    @app.route("/api/status")
    def status() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return session status for polling.

        Returns:
            JSON with ``closed``, ``cwd`` and ``status`` fields.

        """
        return jsonify(
            {
                "closed": shell.closed,
                "cwd": shell.state.working_directory,
                "status": shell.state.last_exit_status,
            }
        )

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``webshell-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
