"""Dependency checks for IconMaker."""

import importlib
import shutil
from typing import List, Tuple

# Required dependencies with their import names and pip names
REQUIRED_DEPENDENCIES = [
    ("PIL", "pillow"),
    ("platformdirs", "platformdirs"),
    ("rich", "rich"),
]

# Optional command line tools (nice to have but not critical)
OPTIONAL_TOOLS = [
    ("iconutil", ".icns files will be built with Pillow instead"),
]


class DependencyManager:
    """Checks that the modules and tools IconMaker uses are present."""

    def __init__(self):
        self.missing_deps: List[str] = []
        self.optional_missing: List[str] = []

    def check_all_dependencies(self) -> Tuple[bool, List[str]]:
        """Check all required modules and optional tools.

        Returns:
            Tuple of (all_required_available, list_of_missing_required)
        """
        self.missing_deps = []
        self.optional_missing = []

        for import_name, pip_name in REQUIRED_DEPENDENCIES:
            if not self._check_dependency(import_name):
                self.missing_deps.append(pip_name)

        for tool, _ in OPTIONAL_TOOLS:
            if shutil.which(tool) is None:
                self.optional_missing.append(tool)

        return len(self.missing_deps) == 0, self.missing_deps

    def _check_dependency(self, import_name: str) -> bool:
        """Check if a dependency can be imported."""
        try:
            importlib.import_module(import_name)
            return True
        except ImportError:
            return False

    def get_installation_status(self) -> str:
        """Get a human-readable status of what is missing."""
        if not self.missing_deps and not self.optional_missing:
            return "All dependencies are available"

        status_parts = []

        if self.missing_deps:
            status_parts.append(f"Missing required: {', '.join(self.missing_deps)}")

        notes = dict(OPTIONAL_TOOLS)
        for tool in self.optional_missing:
            status_parts.append(f"{tool} not found ({notes[tool]})")

        return "; ".join(status_parts)

    def install_hint(self) -> str:
        return "pip install " + " ".join(self.missing_deps)
