"""Prompt assembly.

build_prompt() embeds a PageDigest verbatim into the marketing-team template
and appends the JSON skeleton derived from the analysis schema.
"""

import json
import yaml
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from ..schemas.digest import PageDigest
from .schema import example_payload

TEMPLATE_DIR = Path(__file__).parent / "templates"
PROMPT_NAME = "marketing_team"

def load_prompt(name: str) -> Dict[str, Any]:
    yaml_path = TEMPLATE_DIR / f"{name}.yaml"
    if not yaml_path.exists():
        raise FileNotFoundError(f"Prompt {name} not found in {TEMPLATE_DIR}")
    with open(yaml_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)

@lru_cache()
def schema_block() -> str:
    return json.dumps(example_payload(), indent=2, ensure_ascii=False)

@lru_cache()
def _template() -> Dict[str, Any]:
    return load_prompt(PROMPT_NAME)

def build_prompt(digest: PageDigest) -> str:
    """
    Pure and deterministic: the same digest always yields the same prompt.
    The digest is embedded as rendered, never re-truncated.
    """
    template = _template()
    return "\n\n".join([
        template["preamble"],
        digest.render(),
        template["format_instructions"],
        schema_block(),
        template["closing"],
    ])
