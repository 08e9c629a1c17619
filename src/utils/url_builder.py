# utils/url_builder.py

import json
import re
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

from schemas.core.project import Environment, Project

DEFAULT_ENVIRONMENT_NAME = "default"

_PATH_VARS = re.compile(r"\{(\w+)\}")
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


def normalize_base_url(base_url: Optional[str]) -> str:
    """
    Trim the base URL, prefix ``http://`` when no scheme is given and drop
    trailing slashes. An empty value stays empty.
    """
    url = (base_url or "").strip()
    if not url:
        return ""
    if not _SCHEME.match(url):
        url = f"http://{url}"
    return url.rstrip("/")


def required_path_vars(path: str) -> List[str]:
    """Names of the ``{name}`` placeholders in a path template."""
    return _PATH_VARS.findall(path or "")


def _path_segment(value: Any) -> str:
    if isinstance(value, str):
        text = value
    elif isinstance(value, (bool, dict, list)) or value is None:
        text = json.dumps(value, ensure_ascii=False)
    else:
        text = str(value)
    return quote(text, safe="")


def substitute_path_vars(
    path: str, path_vars: Dict[str, Any]
) -> Tuple[str, List[str]]:
    """
    Replace ``{name}`` placeholders with URL-quoted values.

    Returns the substituted path and the placeholders left unresolved.
    """
    unresolved: List[str] = []

    def _replace(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name not in path_vars:
            unresolved.append(name)
            return match.group(0)
        return _path_segment(path_vars[name])

    return _PATH_VARS.sub(_replace, path or ""), unresolved


def build_url(base_url: str, path: str) -> str:
    base = normalize_base_url(base_url)
    if not path:
        return base
    if _SCHEME.match(path):
        return path
    if base and not path.startswith("/"):
        path = f"/{path}"
    return f"{base}{path}"


def select_environment(
    project: Project, name: Optional[str] = None
) -> Optional[Environment]:
    """
    Pick the environment for a run.

    Precedence: exact name match, then an environment named "default",
    then one flagged ``is_default``, then the project's first environment.
    """
    environments = project.environments
    if not environments:
        return None
    if name:
        for env in environments:
            if env.name == name:
                return env
    for env in environments:
        if env.name == DEFAULT_ENVIRONMENT_NAME:
            return env
    for env in environments:
        if env.is_default:
            return env
    return environments[0]
