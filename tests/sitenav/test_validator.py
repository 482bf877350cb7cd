from __future__ import annotations

import pytest

from sitenav.errors import (
    DuplicateSocialKeyError,
    EmptyGroupError,
    ErrorCode,
    InvalidDeclarationError,
    InvalidLogoShapeError,
    MissingRequiredFieldError,
)
from sitenav.models import (
    AutogenerateDeclaration,
    GroupDeclaration,
    LinkDeclaration,
    Logo,
    SocialLink,
)
from sitenav.validator import normalise_directory, validate_config, validate_logo, validate_social


def _config(**overrides: object) -> dict[str, object]:
    config: dict[str, object] = {"title": "Docs", "sidebar": []}
    config.update(overrides)
    return config


def test_full_configuration_is_validated() -> None:
    declaration = validate_config(
        {
            "title": " My Docs ",
            "site": "https://docs.example.com",
            "logo": {"src": "./src/assets/logo.svg", "alt": "Logo"},
            "social": {"github": "https://github.com/example/docs"},
            "sidebar": [
                {
                    "label": "Intro",
                    "items": [
                        {"label": "Start", "slug": "intro/start"},
                        "intro/install",
                    ],
                },
                {"label": "Reference", "autogenerate": {"directory": "reference"}, "collapsed": True},
            ],
        }
    )

    assert declaration.title == "My Docs"
    assert declaration.base_url == "https://docs.example.com"
    assert declaration.logo == Logo(src="./src/assets/logo.svg", alt="Logo")
    assert declaration.social == (SocialLink(platform="github", url="https://github.com/example/docs"),)
    assert declaration.sidebar == (
        GroupDeclaration(
            label="Intro",
            children=(
                LinkDeclaration(slug="intro/start", label="Start"),
                LinkDeclaration(slug="intro/install"),
            ),
        ),
        AutogenerateDeclaration(label="Reference", directory="reference", collapsed=True),
    )


def test_declared_order_is_preserved() -> None:
    slugs = ["zeta", "alpha", "mid/page", "beta"]

    declaration = validate_config(_config(sidebar=slugs))

    assert [node.slug for node in declaration.sidebar] == slugs


def test_missing_sidebar_is_empty() -> None:
    assert validate_config({"title": "Docs"}).sidebar == ()


@pytest.mark.parametrize("title", [None, "", "   "])
def test_missing_title_is_rejected(title: str | None) -> None:
    raw = _config(title=title)

    with pytest.raises(MissingRequiredFieldError) as excinfo:
        validate_config(raw)

    assert excinfo.value.field == "title"
    assert excinfo.value.code == ErrorCode.MISSING_REQUIRED_FIELD


def test_missing_label_reports_its_path() -> None:
    raw = _config(sidebar=[{"label": "Intro", "items": [{"slug": "intro/start"}, {"items": ["a"]}]}])

    with pytest.raises(MissingRequiredFieldError) as excinfo:
        validate_config(raw)

    assert excinfo.value.field == "label"
    assert excinfo.value.path == "sidebar[0].items[1]"
    assert "sidebar[0].items[1]" in excinfo.value.message


def test_missing_autogenerate_directory() -> None:
    raw = _config(sidebar=[{"label": "Ref", "autogenerate": {"collapsed": True}}])

    with pytest.raises(MissingRequiredFieldError) as excinfo:
        validate_config(raw)

    assert excinfo.value.field == "directory"
    assert excinfo.value.path == "sidebar[0].autogenerate"


def test_empty_group_is_rejected() -> None:
    with pytest.raises(EmptyGroupError) as excinfo:
        validate_config(_config(sidebar=[{"label": "Empty", "items": []}]))

    assert excinfo.value.label == "Empty"
    assert excinfo.value.context["path"] == "sidebar[0]"


@pytest.mark.parametrize(
    "item",
    [
        {"label": "Both", "slug": "a", "items": ["b"]},
        {"label": "Both", "slug": "a", "autogenerate": {"directory": "x"}},
        {"label": "Nothing"},
        42,
        {"label": "Bad items", "items": "a"},
        {"label": "Bad directive", "autogenerate": "reference"},
        {"label": "Bad flag", "items": ["a"], "collapsed": "yes"},
    ],
)
def test_unrecognised_items_are_rejected(item: object) -> None:
    with pytest.raises(InvalidDeclarationError) as excinfo:
        validate_config(_config(sidebar=[item]))

    assert excinfo.value.context["path"] == "sidebar[0]"


def test_sidebar_must_be_a_list() -> None:
    with pytest.raises(InvalidDeclarationError):
        validate_config(_config(sidebar={"label": "Intro"}))


def test_configuration_must_be_a_mapping() -> None:
    with pytest.raises(InvalidDeclarationError):
        validate_config(["title", "Docs"])  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("directory", "expected"),
    [("reference", "reference"), ("./reference/", "reference"), ("/guides//api/", "guides/api"), ("", "")],
)
def test_normalise_directory(directory: str, expected: str) -> None:
    assert normalise_directory(directory) == expected


def test_autogenerate_collapsed_may_sit_on_the_directive() -> None:
    declaration = validate_config(
        _config(sidebar=[{"label": "Ref", "autogenerate": {"directory": "reference", "collapsed": True}}])
    )

    assert declaration.sidebar[0] == AutogenerateDeclaration(
        label="Ref", directory="reference", collapsed=True
    )


class TestLogo:
    def test_bare_path(self) -> None:
        assert validate_logo("logo.svg") == Logo(src="logo.svg")

    def test_themed_pair(self) -> None:
        logo = validate_logo({"light": "light.svg", "dark": "dark.svg", "replacesTitle": True})

        assert logo.is_themed
        assert logo.light == "light.svg"
        assert logo.dark == "dark.svg"
        assert logo.replaces_title is True

    @pytest.mark.parametrize(
        "raw",
        [
            {"light": "light.svg"},
            {"dark": "dark.svg"},
            {"src": "logo.svg", "dark": "dark.svg"},
            {"alt": "No image"},
            {"src": ""},
            "   ",
            ["logo.svg"],
            {"src": "logo.svg", "replaces_title": "yes"},
        ],
    )
    def test_invalid_shapes(self, raw: object) -> None:
        with pytest.raises(InvalidLogoShapeError) as excinfo:
            validate_logo(raw)

        assert excinfo.value.code == ErrorCode.INVALID_LOGO_SHAPE
        assert excinfo.value.context["path"] == "logo"

    def test_invalid_logo_fails_config_validation(self) -> None:
        with pytest.raises(InvalidLogoShapeError):
            validate_config(_config(logo={"light": "light.svg"}))


class TestSocial:
    def test_list_form(self) -> None:
        links = validate_social(
            [
                {"icon": "github", "href": "https://github.com/example", "label": "GitHub"},
                {"platform": "discord", "url": "https://discord.gg/example"},
            ]
        )

        assert links == (
            SocialLink(platform="github", url="https://github.com/example", label="GitHub"),
            SocialLink(platform="discord", url="https://discord.gg/example"),
        )

    def test_duplicate_platform_in_list(self) -> None:
        raw = [
            {"icon": "github", "href": "https://github.com/a"},
            {"icon": "github", "href": "https://github.com/b"},
        ]

        with pytest.raises(DuplicateSocialKeyError) as excinfo:
            validate_social(raw)

        assert excinfo.value.platform == "github"
        assert excinfo.value.code == ErrorCode.DUPLICATE_SOCIAL_KEY

    def test_platform_keys_compare_case_insensitively(self) -> None:
        with pytest.raises(DuplicateSocialKeyError):
            validate_social({"GitHub": "https://github.com/a", "github": "https://github.com/b"})

    def test_missing_url(self) -> None:
        with pytest.raises(MissingRequiredFieldError) as excinfo:
            validate_social([{"icon": "github"}])

        assert excinfo.value.field == "url"
        assert excinfo.value.path == "social[0]"

    def test_wrong_container(self) -> None:
        with pytest.raises(InvalidDeclarationError):
            validate_social("https://github.com/example")
