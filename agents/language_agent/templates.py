# agents/language_agent/templates.py

import logging
from pathlib import Path
from typing import Any, List, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .config import settings

logger = logging.getLogger(__name__)

_jinja_env: Optional[Environment] = None


def templates_path() -> Path:
    return Path(__file__).resolve().parent / settings.TEMPLATES_DIR


def get_jinja_env() -> Environment:
    global _jinja_env
    if _jinja_env is None:
        templates_dir_path = templates_path()
        if not templates_dir_path.is_dir():
            logger.error(f"Templates directory '{templates_dir_path}' not found or not a directory.")
        # Prompts are plain text, so no HTML escaping
        _jinja_env = Environment(
            loader=FileSystemLoader(str(templates_dir_path)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        logger.info(f"Jinja2 environment initialized. Templates path: {templates_dir_path}")
    return _jinja_env


def render_prompt(template_name: str, **context: Any) -> str:
    """Render a prompt template; raises jinja2.TemplateNotFound for unknown names."""
    template = get_jinja_env().get_template(template_name)
    return template.render(**context).strip()


def list_templates() -> List[str]:
    templates_dir_path = templates_path()
    if not templates_dir_path.is_dir():
        return []
    return sorted(p.stem for p in templates_dir_path.glob("*.tpl"))
