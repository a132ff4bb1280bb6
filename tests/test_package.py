"""Tests for the library package boundary."""
import importlib.util
import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent


@pytest.mark.parametrize("module", ["interaction_router.config", "interaction_router.correlation"])
def test_app_modules_live_outside_the_library(module):
    assert importlib.util.find_spec(module) is None


def test_importing_library_leaves_app_unloaded():
    script = (
        "import sys, interaction_router, interaction_router.response_utils, interaction_router.help\n"
        "assert not any(name.startswith('example_app') for name in sys.modules), sorted(sys.modules)\n"
    )
    result = subprocess.run([sys.executable, "-c", script], capture_output=True, text=True, cwd=ROOT)

    assert result.returncode == 0, result.stderr
