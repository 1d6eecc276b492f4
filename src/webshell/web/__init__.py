"""Browser-based web UI for the shell.

This package provides a Flask application that embeds the shell in a
terminal widget on a web page.  It is an **optional** extra — install
with::

    pip install webshell[web]

The ``create_app`` factory in ``app.py`` creates one session with a line
editor and serves these endpoints:

- ``GET /`` — HTML terminal page.
- ``POST /api/key`` — feed one key event to the line editor.
- ``POST /api/data`` — feed pasted text to the line editor.
- ``POST /api/execute`` — run a whole command line and return JSON.
- ``GET /api/status`` — session state for polling.
"""
