"""Tests for the Jinja2 template adapter and its Go-style bridge."""

import pytest

from adapters.template_engine import JinjaTemplateEngine, translate_go_actions
from core.domain.errors import RenderFailedError

RECORD = {
    "ID": "c0ffee01",
    "ImageID": "sha256:a1p1ne",
    "Config": {"Env": ["A=1"], "Labels": {"tier": "web"}},
    "Names": ["web", "frontend"],
    "Driver": "overlay",
}


@pytest.mark.parametrize(
    "template, expected",
    [
        ("{{.ID}} {{.ImageID}}", "c0ffee01 sha256:a1p1ne"),
        ("{{ .Config.Labels.tier }}", "web"),
        ("{{json .Config.Env}}", '["A=1"]'),
        ('{{join .Names ","}}', "web,frontend"),
        ("{{upper .Driver}}", "OVERLAY"),
        ("{{ ID }}", "c0ffee01"),
        ("{% for n in Names %}[{{ n }}]{% endfor %}", "[web][frontend]"),
        ("plain text", "plain text"),
    ],
)
def test_render(templates, template, expected):
    assert templates.render(template, RECORD) == expected


def test_dot_renders_whole_record(templates):
    assert templates.render("{{json .}}", {"a": 1}) == '{"a":1}'


def test_translation_leaves_native_syntax_alone():
    assert translate_go_actions("{{ name | upper }}") == "{{ name | upper }}"
    assert translate_go_actions("{{.ID}}") == "{{ _root.ID }}"
    assert translate_go_actions("{{- .ID -}}") == "{{- _root.ID -}}"


def test_unknown_field_is_a_render_error(templates):
    with pytest.raises(RenderFailedError):
        templates.render("{{.Missing}}", RECORD)


def test_syntax_error_is_a_render_error(templates):
    with pytest.raises(RenderFailedError, match="template error"):
        templates.render("{{ if }}", RECORD)


def test_compiled_templates_are_reused():
    engine = JinjaTemplateEngine()
    engine.render("{{.ID}}", RECORD)
    engine.render("{{.ID}}", {"ID": "other"})
    assert len(engine._compiled) == 1
