"""Unit tests for YAML customization files."""

import pytest

from folio.contexts.portfolio.customization_files import load_customizations


@pytest.mark.unit
def test_load_flat_mapping(tmp_path):
    path = tmp_path / "jane.yaml"
    path.write_text(
        'heading: Jane Doe\naccent_color: "#0ea5e9"\nyears: 7\nshow_projects: true\nfooter:\n',
        encoding="utf-8",
    )

    assert load_customizations(path) == {
        "heading": "Jane Doe",
        "accent_color": "#0ea5e9",
        "years": "7",
        "show_projects": "true",
        "footer": "",
    }


@pytest.mark.unit
def test_nested_values_are_rejected(tmp_path):
    path = tmp_path / "nested.yaml"
    path.write_text("links:\n  github: https://github.com/jane\n", encoding="utf-8")

    with pytest.raises(ValueError, match="links"):
        load_customizations(path)


@pytest.mark.unit
def test_list_file_is_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- heading\n- footer\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_customizations(path)
