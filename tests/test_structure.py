"""
Structure lint tests.
Verify that the component skeleton exists and follows conventions.
"""

from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
PACKAGE = PROJECT_ROOT / "tokenkit"

COMPONENTS = ["token_store", "resolver"]
COMPONENT_FILES = ["__init__.py", "models.py", "ports.py", "_impl.py", "component.py"]


class TestProjectStructure:
    """Verify project layout."""

    def test_package_directories_exist(self) -> None:
        for name in ["adapters", "components", "domain", "rules", "validation"]:
            assert (PACKAGE / name).is_dir()

    def test_tests_structure_exists(self) -> None:
        assert (PROJECT_ROOT / "tests" / "unit").is_dir()
        assert (PROJECT_ROOT / "tests" / "regression").is_dir()

    def test_rules_file_exists(self) -> None:
        assert (PROJECT_ROOT / "rules.yaml").is_file()

    def test_init_files_present(self) -> None:
        """Python packages must have __init__.py files."""
        packages = [
            "tokenkit",
            "tokenkit/adapters",
            "tokenkit/components",
            "tokenkit/domain",
            "tokenkit/rules",
            "tokenkit/validation",
            "tests",
            "tests/unit",
            "tests/regression",
        ]
        for pkg in packages:
            init_file = PROJECT_ROOT / pkg / "__init__.py"
            assert init_file.is_file(), f"Missing __init__.py in {pkg}"


class TestComponentLayout:
    """Every component ships the same five modules plus tests."""

    @pytest.mark.parametrize("component", COMPONENTS)
    def test_component_files(self, component: str) -> None:
        root = PACKAGE / "components" / component
        for name in COMPONENT_FILES:
            assert (root / name).is_file(), f"{component} missing {name}"
        assert (root / "tests" / "test_unit.py").is_file()

    @pytest.mark.parametrize("component", COMPONENTS)
    def test_core_has_no_shell_imports(self, component: str) -> None:
        """The functional core never imports its own shell."""
        source = (PACKAGE / "components" / component / "_impl.py").read_text()
        assert "from .component" not in source
