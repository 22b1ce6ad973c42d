"""Tests for the legacy field-name rewrite."""

import pytest

from core.services.field_aliases import normalize_format


@pytest.mark.parametrize(
    "raw, expected",
    [
        (".Id}}", ".ID}}"),
        (".Image}}", ".ImageID}}"),
        ("{{.Id}} {{.Image}}", "{{.ID}} {{.ImageID}}"),
        ("{{.ID}} {{.Image}}", "{{.ID}} {{.ImageID}}"),
        ("imageId: {{.Id}} size: {{.Size}}", "imageId: {{.ID}} size: {{.Size}}"),
        ("{{.Id}}", "{{.ID}}"),
        (".Id", ".ID"),
        ("{{.Config.Image}}", "{{.Config.ImageID}}"),
        ("{{$c.Id}}", "{{$c.ID}}"),
        ("{{range .}}{{.Id}}\n{{end}}", "{{range .}}{{.ID}}\n{{end}}"),
    ],
)
def test_aliases_are_rewritten(raw, expected):
    assert normalize_format(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "{{.Identity}}",
        "{{.Images}}",
        "{{.ImageName}}",
        "{{.ImageID}}",
        "{{.Ident}} and {{.Idle}}",
    ],
)
def test_longer_or_nested_names_are_untouched(raw):
    assert normalize_format(raw) == raw


def test_empty_and_json_marker_pass_through():
    assert normalize_format("") == ""
    assert normalize_format("json") == "json"


def test_malformed_input_passes_through():
    assert normalize_format("{{.Id") == "{{.ID"
    assert normalize_format("...") == "..."
    assert normalize_format("{{ . }}") == "{{ . }}"


def test_custom_alias_table():
    assert normalize_format("{{.Repo}}", aliases={"Repo": "RepoTags"}) == "{{.RepoTags}}"
