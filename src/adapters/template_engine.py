"""Template rendering (Jinja2).

Why Jinja2 with a Go-style bridge:
- Users carry `--format` strings written for the engine CLI, such as
  `{{.ID}} {{.Config.Image}}` or `{{json .Config}}`.
- Those actions are translated to Jinja2 expressions on the record; anything
  else is handed to Jinja2 untouched, so `{{ ID }}` and `{% for %}` work too.
"""

from __future__ import annotations

import json
import re
from typing import Any

from jinja2 import Environment, StrictUndefined, Template, TemplateError

from core.domain.errors import RenderFailedError

ROOT_NAME = "_root"

_ACTION_RE = re.compile(r"\{\{(-?)(.*?)(-?)\}\}", re.DOTALL)
_TOKEN_RE = re.compile(r'"(?:\\.|[^"\\])*"|\S+')


def _to_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _split(value: str, sep: str) -> list[str]:
    return value.split(sep)


def _join(values: list[Any], sep: str) -> str:
    return sep.join(str(v) for v in values)


def _title(value: str) -> str:
    return value.title()


def _lower(value: str) -> str:
    return value.lower()


def _upper(value: str) -> str:
    return value.upper()


HELPERS = {
    "json": _to_json,
    "split": _split,
    "join": _join,
    "title": _title,
    "lower": _lower,
    "upper": _upper,
}


def _field_ref(token: str) -> str | None:
    if token == ".":
        return ROOT_NAME
    if token.startswith(".") and len(token) > 1:
        return ROOT_NAME + token
    return None


def _translate_action(body: str) -> str | None:
    """Jinja2 expression for a Go-style action body, or None to leave it."""

    tokens = _TOKEN_RE.findall(body.strip())
    if not tokens or not any(_field_ref(t) for t in tokens):
        return None

    args = [_field_ref(t) or t for t in tokens]
    if len(args) == 1:
        return args[0]
    if tokens[0] in HELPERS:
        return f"{tokens[0]}({', '.join(args[1:])})"
    return None


def translate_go_actions(template: str) -> str:
    """Rewrite `{{.Field}}` / `{{helper .Field}}` actions into Jinja2 syntax."""

    def _sub(match: re.Match[str]) -> str:
        left, body, right = match.groups()
        expr = _translate_action(body)
        if expr is None:
            return match.group(0)
        return "{{" + left + " " + expr + " " + right + "}}"

    return _ACTION_RE.sub(_sub, template)


class JinjaTemplateEngine:
    """`TemplateEngine` backed by a strict Jinja2 environment."""

    def __init__(self) -> None:
        self._env = Environment(
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )
        self._env.globals.update(HELPERS)
        self._compiled: dict[str, Template] = {}

    def _compile(self, template: str) -> Template:
        compiled = self._compiled.get(template)
        if compiled is None:
            compiled = self._env.from_string(translate_go_actions(template))
            self._compiled[template] = compiled
        return compiled

    def render(self, template: str, value: Any) -> str:
        context: dict[str, Any] = dict(value) if isinstance(value, dict) else {}
        context[ROOT_NAME] = value
        try:
            return self._compile(template).render(context)
        except TemplateError as exc:
            raise RenderFailedError(f"template error in {template!r}", exc) from exc
        except (TypeError, ValueError, AttributeError) as exc:
            raise RenderFailedError(f"error executing template {template!r}", exc) from exc
