from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from sitenav.config_loader import load_raw_config
from sitenav.errors import ConfigLoadError, DuplicateSocialKeyError, ErrorCode

if TYPE_CHECKING:
    from pathlib import Path


def test_yaml_configuration(tmp_path: Path) -> None:
    path = tmp_path / "navigation.yml"
    path.write_text(
        "title: Docs\n"
        "sidebar:\n"
        "  - label: Intro\n"
        "    items:\n"
        "      - intro/start\n",
        encoding="utf-8",
    )

    assert load_raw_config(path) == {
        "title": "Docs",
        "sidebar": [{"label": "Intro", "items": ["intro/start"]}],
    }


def test_json_configuration(tmp_path: Path) -> None:
    path = tmp_path / "navigation.JSON"
    path.write_text('{"title": "Docs", "sidebar": []}', encoding="utf-8")

    assert load_raw_config(str(path)) == {"title": "Docs", "sidebar": []}


@pytest.mark.parametrize(
    ("name", "text"),
    [
        ("navigation.toml", "title = 'Docs'"),
        ("navigation.yaml", "title: [unclosed"),
        ("navigation.json", "{not json"),
        ("navigation.yaml", "- a\n- b\n"),
        ("navigation.yaml", ""),
    ],
)
def test_unloadable_configuration(tmp_path: Path, name: str, text: str) -> None:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")

    with pytest.raises(ConfigLoadError) as excinfo:
        load_raw_config(path)

    assert excinfo.value.code == ErrorCode.CONFIG_LOAD_FAILED
    assert excinfo.value.http_status == 400
    assert excinfo.value.context == {"source": str(path)}


def test_missing_file_keeps_os_error_as_cause(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError) as excinfo:
        load_raw_config(tmp_path / "absent.yaml")

    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


@pytest.mark.parametrize(
    ("name", "text"),
    [
        ("navigation.yaml", "title: Docs\nsocial:\n  github: https://a\n  github: https://b\n"),
        ("navigation.json", '{"title": "Docs", "social": {"github": "https://a", "github": "https://b"}}'),
    ],
)
def test_repeated_social_platform_is_reported(tmp_path: Path, name: str, text: str) -> None:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")

    with pytest.raises(DuplicateSocialKeyError) as excinfo:
        load_raw_config(path)

    assert excinfo.value.platform == "github"
    assert excinfo.value.code == ErrorCode.DUPLICATE_SOCIAL_KEY


@pytest.mark.parametrize(
    ("name", "text"),
    [
        ("navigation.yaml", "title: Docs\ntitle: Again\n"),
        ("navigation.yaml", "title: Docs\nsidebar:\n  - label: A\n    label: B\n    items: [a]\n"),
        ("navigation.json", '{"title": "Docs", "title": "Again"}'),
        ("navigation.json", '{"title": "Docs", "sidebar": [{"slug": "a", "slug": "b"}]}'),
    ],
)
def test_repeated_key_is_rejected(tmp_path: Path, name: str, text: str) -> None:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="repeats the key"):
        load_raw_config(path)


def test_yaml_merge_keys_may_be_overridden(tmp_path: Path) -> None:
    path = tmp_path / "navigation.yaml"
    path.write_text(
        "defaults: &defaults\n"
        "  collapsed: false\n"
        "title: Docs\n"
        "sidebar:\n"
        "  - <<: *defaults\n"
        "    label: Ref\n"
        "    collapsed: true\n"
        "    autogenerate: {directory: reference}\n",
        encoding="utf-8",
    )

    assert load_raw_config(path)["sidebar"] == [
        {"collapsed": True, "label": "Ref", "autogenerate": {"directory": "reference"}}
    ]
