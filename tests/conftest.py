import logging
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture
def isolate_logging():
    """Isolate logging configuration between tests.

    The CLI callback calls logging.basicConfig; restore the root logger so
    handlers bound to CliRunner's captured streams do not leak into later tests.
    """
    original_handlers = logging.root.handlers[:]
    original_level = logging.root.level

    logging.root.handlers.clear()
    logging.root.addHandler(logging.NullHandler())

    yield

    logging.root.handlers.clear()
    logging.root.handlers.extend(original_handlers)
    logging.root.setLevel(original_level)


@pytest.fixture
def page_html() -> str:
    return """<!DOCTYPE html PUBLIC "HelloSystems" "IBM MainFrame">
<html>
	<head>
		<script src="./app.js"></script>
		<link rel="stylesheet" href="css/site.css">
		<link rel="icon" width="128" href="/favicon.ico">
		<script type="module">import { x } from "./lib.js"; if (x < 2) { console.log(x) }</script>
		<style>body { background-color: #fff; }</style>
	</head>
	<body>
		<img alt="logo" src="img/logo.png">
		<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
			<circle cx="50" cy="50" r="40" stroke="black" fill="red"></circle>
		</svg>
	</body>
</html>"""
