"""
Prompt template manager for QuizGen.

Loads prompt templates shipped in the quizgen/prompts/ directory and fills
{{VARIABLE}} placeholders.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from quizgen.core.exceptions import GenerationFailed

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


class PromptManager:
    """
    Manages prompt templates with variable substitution.

    Templates are read once and cached.

    Example:
        manager = PromptManager()
        prompt = manager.load_prompt("quiz_user", TOPIC="Solar System")
    """

    def __init__(self, prompts_dir: Path = PROMPTS_DIR):
        self.prompts_dir = Path(prompts_dir)
        self._cache: Dict[str, str] = {}

    def load_prompt(self, name: str, **kwargs) -> str:
        """
        Load and format a prompt template.

        Args:
            name: Prompt template name (without .txt extension)
            **kwargs: Variables to substitute in the template

        Returns:
            Formatted prompt string
        """
        template = self._load_template(name)
        return self._substitute_variables(template, kwargs)

    def _load_template(self, name: str) -> str:
        if name in self._cache:
            return self._cache[name]

        template_file = self.prompts_dir / f"{name}.txt"

        if not template_file.exists():
            raise GenerationFailed(
                f"Prompt template not found: {template_file} "
                f"(available: {self.list_templates()})"
            )

        template = template_file.read_text(encoding="utf-8")
        self._cache[name] = template
        logger.debug(f"Loaded prompt template: {name}")
        return template

    def _substitute_variables(self, template: str, variables: Dict[str, Any]) -> str:
        """Substitute {{VARIABLE_NAME}} placeholders in a single pass.

        Substituted values are never scanned again, so a value that itself
        looks like a placeholder is inserted verbatim.
        """
        unsubstituted: List[str] = []

        def replace(match: "re.Match[str]") -> str:
            name = match.group(1)
            if name not in variables:
                unsubstituted.append(name)
                return match.group(0)
            return str(variables[name])

        result = _PLACEHOLDER.sub(replace, template)

        if unsubstituted:
            logger.warning(f"Unsubstituted variables in template: {unsubstituted}")

        return result

    def list_templates(self) -> List[str]:
        """List available prompt templates."""
        if not self.prompts_dir.exists():
            return []
        return sorted(f.stem for f in self.prompts_dir.glob("*.txt"))


_prompt_manager: Optional[PromptManager] = None


def get_prompt_manager() -> PromptManager:
    """Get global PromptManager instance (singleton)."""
    global _prompt_manager
    if _prompt_manager is None:
        _prompt_manager = PromptManager()
    return _prompt_manager
