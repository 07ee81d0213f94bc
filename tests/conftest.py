"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides shared report-writing fixtures.
"""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of reportbridge modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("reportbridge"):
        del sys.modules[module_name]


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project base dir with a few Swift and Objective-C sources."""
    base = tmp_path / "project"
    (base / "Sources" / "App").mkdir(parents=True)
    (base / "Sources" / "App" / "Foo.swift").write_text("struct Foo {}\n")
    (base / "Sources" / "App" / "Bar.swift").write_text("struct Bar {}\n")
    (base / "Legacy").mkdir()
    (base / "Legacy" / "Widget.m").write_text("@implementation Widget\n@end\n")
    (base / "sonar-reports").mkdir()
    return base


@pytest.fixture
def write_report(project_dir: Path) -> Callable[[str, str], Path]:
    """Write report content under sonar-reports/ and return its path."""

    def _write(name: str, content: str) -> Path:
        path = project_dir / "sonar-reports" / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
