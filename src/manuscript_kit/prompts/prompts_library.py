import logging
from pathlib import Path

import yaml

from .prompt import Prompt

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


class PromptsLibrary:
    """Versioned system prompts loaded from a directory of YAML files.

    Files are read in name order. Two files declaring the same
    (name, version) are rejected.
    """

    def __init__(self, directory: str) -> None:
        self._prompts: dict[tuple[str, str], Prompt] = {}
        self._sources: dict[tuple[str, str], Path] = {}
        self._load_all(Path(directory))
        logger.info("Loaded %d prompts from %s", len(self._prompts), directory)

    @classmethod
    def bundled(cls) -> "PromptsLibrary":
        """Library of the analysis prompts shipped with the package."""
        return cls(str(TEMPLATES_DIR))

    def get(self, name: str, version: str) -> Prompt:
        try:
            return self._prompts[(name, version)]
        except KeyError:
            logger.error("Prompt not found: name=%s, version=%s", name, version)
            raise KeyError(f"Prompt '{name}' version '{version}' not found")

    def render(self, name: str, version: str, **values: str) -> str:
        """Render a prompt into a system message text."""
        return self.get(name, version).render(**values)

    def list(self) -> list[tuple[str, str]]:
        return list(self._prompts.keys())

    def _load_all(self, directory: Path) -> None:
        for file_path in sorted(directory.glob("*.yaml")):
            with open(file_path, encoding="utf-8") as f:
                prompt = Prompt(**yaml.safe_load(f))

            key = (prompt.name, prompt.version)
            if key in self._sources:
                raise ValueError(
                    f"Prompt '{prompt.name}' version '{prompt.version}' defined "
                    f"in both {self._sources[key].name} and {file_path.name}"
                )
            self._prompts[key] = prompt
            self._sources[key] = file_path
            logger.debug("Loaded prompt %s v%s from %s", *key, file_path)
