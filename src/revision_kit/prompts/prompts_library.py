from __future__ import annotations

import logging
from pathlib import Path

import yaml

from revision_kit.llms.base import Message, Role

from .prompt import Prompt

logger = logging.getLogger(__name__)

BUILTIN_PROMPTS_DIR = Path(__file__).parent / "templates"


class PromptsLibrary:
    """Versioned prompt templates keyed by ``(name, version)``.

    Defaults to the templates shipped with the package; pass a directory to
    override them wholesale.
    """

    def __init__(self, directory: str | Path = BUILTIN_PROMPTS_DIR) -> None:
        self._prompts: dict[tuple[str, str], Prompt] = {}
        logger.info("Loading prompts from %s", directory)
        for file_path in sorted(Path(directory).glob("*.yaml")):
            prompt = self._load_prompt(file_path)
            self._prompts[(prompt.name, prompt.version)] = prompt
            logger.debug("Loaded prompt %s v%s", prompt.name, prompt.version)
        logger.info("Loaded %d prompts", len(self._prompts))

    def get(self, name: str, version: str) -> Prompt:
        try:
            return self._prompts[(name, version)]
        except KeyError:
            logger.error("Prompt not found: name=%s, version=%s", name, version)
            raise KeyError(f"Prompt '{name}' version '{version}' not found")

    def messages(self, name: str, version: str, **values: object) -> list[Message]:
        """Render a prompt into the system/user pair sent to the generative service.

        The system message is omitted when the template declares none.
        """
        prompt = self.get(name, version)
        rendered = [Message(role=Role.USER, content=prompt.render(**values))]
        if prompt.system:
            rendered.insert(0, Message(role=Role.SYSTEM, content=prompt.system))
        return rendered

    def list(self) -> list[tuple[str, str]]:
        return list(self._prompts.keys())

    @staticmethod
    def _load_prompt(file_path: Path) -> Prompt:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return Prompt(**data)
