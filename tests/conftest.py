from textwrap import dedent

import pytest


def _write_files(root, files):
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(dedent(content).lstrip(), encoding="utf-8")
    return root


@pytest.fixture
def make_plugin(tmp_path):
    """Create a plugin directory named ``slug`` under tmp_path holding ``files``."""

    def _make(files, slug="myplugin"):
        root = tmp_path / slug
        root.mkdir(exist_ok=True)
        return _write_files(root, files)

    return _make


@pytest.fixture
def php_source():
    def _src(body):
        return ("<?php\n" + dedent(body).lstrip()).encode("utf-8")

    return _src
