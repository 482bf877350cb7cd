"""Validate raw navigation configuration into a :class:`NavigationDeclaration`.

Validation is structural only: it checks shapes, required fields and
uniqueness of social platforms, never whether a slug exists. Every error
names the offending location (``sidebar[1].items[0]``) so a build message
points straight at the configuration entry.

Examples
--------
>>> declaration = validate_config(
...     {
...         "title": "Docs",
...         "sidebar": [{"label": "Intro", "items": [{"label": "Start", "slug": "intro/start"}]}],
...     }
... )
>>> declaration.sidebar[0].label
'Intro'
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from sitenav.content_index import normalise_slug
from sitenav.errors import (
    DuplicateSocialKeyError,
    EmptyGroupError,
    InvalidDeclarationError,
    InvalidLogoShapeError,
    MissingRequiredFieldError,
)
from sitenav.logging import get_logger
from sitenav.models import (
    AutogenerateDeclaration,
    DeclarationNode,
    GroupDeclaration,
    LinkDeclaration,
    Logo,
    NavigationDeclaration,
    SocialLink,
)

__all__ = [
    "normalise_directory",
    "validate_config",
    "validate_logo",
    "validate_sidebar",
    "validate_social",
]

LOGGER = get_logger(__name__)

_GROUP_KEY: Final[str] = "items"
_AUTOGENERATE_KEY: Final[str] = "autogenerate"
_LINK_KEY: Final[str] = "slug"


def _required_str(raw: Mapping[str, object], key: str, *, path: str | None) -> str:
    value = raw.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingRequiredFieldError(key, path=path)
    if not isinstance(value, str):
        msg = f"'{key}' must be a string"
        raise InvalidDeclarationError(msg, path=path)
    return value.strip()


def _optional_str(raw: Mapping[str, object], key: str, *, path: str | None) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"'{key}' must be a string"
        raise InvalidDeclarationError(msg, path=path)
    return value.strip() or None


def _flag(raw: Mapping[str, object], key: str, *, path: str) -> bool:
    value = raw.get(key, False)
    if not isinstance(value, bool):
        msg = f"'{key}' must be a boolean"
        raise InvalidDeclarationError(msg, path=path)
    return value


def normalise_directory(directory: str) -> str:
    """Normalise an autogenerate directory; ``""`` means the content root.

    Examples
    --------
    >>> normalise_directory("./reference/")
    'reference'
    """
    return normalise_slug(directory)


def validate_logo(raw: object) -> Logo:
    """Validate the ``logo`` entry.

    Accepts a bare path, ``{src}``, or a complete ``{light, dark}`` pair, each
    optionally with ``alt`` and ``replaces_title``.

    Raises
    ------
    InvalidLogoShapeError
        If neither shape is complete, or both are mixed.
    """
    if isinstance(raw, str):
        if not raw.strip():
            msg = "logo path is empty"
            raise InvalidLogoShapeError(msg)
        return Logo(src=raw.strip())
    if not isinstance(raw, Mapping):
        msg = "expected a path or a mapping"
        raise InvalidLogoShapeError(msg)

    paths: dict[str, str | None] = {}
    for key in ("src", "light", "dark"):
        value = raw.get(key)
        if value is not None and (not isinstance(value, str) or not value.strip()):
            msg = f"'{key}' must be a non-empty path"
            raise InvalidLogoShapeError(msg)
        paths[key] = value.strip() if isinstance(value, str) else None

    src, light, dark = paths["src"], paths["light"], paths["dark"]
    if src is not None and (light is not None or dark is not None):
        msg = "'src' cannot be combined with 'light'/'dark'"
        raise InvalidLogoShapeError(msg)
    if src is None and (light is None or dark is None):
        missing = "dark" if light is not None else "light" if dark is not None else "src"
        msg = f"expected 'src' or both 'light' and 'dark' (missing '{missing}')"
        raise InvalidLogoShapeError(msg)

    alt = raw.get("alt") or ""
    replaces_title = raw.get("replaces_title", raw.get("replacesTitle", False))
    if not isinstance(alt, str) or not isinstance(replaces_title, bool):
        msg = "'alt' must be a string and 'replaces_title' a boolean"
        raise InvalidLogoShapeError(msg)
    return Logo(src=src, light=light, dark=dark, alt=alt, replaces_title=replaces_title)


def _social_entry(platform: object, url: object, label: object, *, path: str) -> SocialLink:
    if not isinstance(platform, str) or not platform.strip():
        raise MissingRequiredFieldError("platform", path=path)
    if not isinstance(url, str) or not url.strip():
        raise MissingRequiredFieldError("url", path=path)
    if label is not None and not isinstance(label, str):
        msg = "'label' must be a string"
        raise InvalidDeclarationError(msg, path=path)
    return SocialLink(platform=platform.strip(), url=url.strip(), label=label)


def validate_social(raw: object) -> tuple[SocialLink, ...]:
    """Validate social links given as a mapping or a list of entries.

    Mapping form: ``{github: "https://..."}``. List form:
    ``[{icon: github, href: "https://...", label: "GitHub"}]`` (``platform``
    and ``url`` are accepted as synonyms). Platform keys compare
    case-insensitively.

    Raises
    ------
    DuplicateSocialKeyError
        If a platform appears twice.
    """
    if isinstance(raw, Mapping):
        links = [
            _social_entry(platform, url, None, path=f"social.{platform}")
            for platform, url in raw.items()
        ]
    elif isinstance(raw, list):
        links = []
        for position, item in enumerate(raw):
            path = f"social[{position}]"
            if not isinstance(item, Mapping):
                msg = "social entry must be a mapping"
                raise InvalidDeclarationError(msg, path=path)
            platform = item.get("icon", item.get("platform"))
            url = item.get("href", item.get("url"))
            links.append(_social_entry(platform, url, item.get("label"), path=path))
    else:
        msg = "'social' must be a mapping or a list"
        raise InvalidDeclarationError(msg, path="social")

    seen: set[str] = set()
    for link in links:
        key = link.platform.casefold()
        if key in seen:
            raise DuplicateSocialKeyError(link.platform)
        seen.add(key)
    return tuple(links)


def _validate_node(raw: object, *, path: str) -> DeclarationNode:
    if isinstance(raw, str):
        slug = normalise_slug(raw)
        if not slug:
            raise MissingRequiredFieldError(_LINK_KEY, path=path)
        return LinkDeclaration(slug=slug)
    if not isinstance(raw, Mapping):
        msg = "sidebar item must be a slug or a mapping"
        raise InvalidDeclarationError(msg, path=path)

    shapes = [key for key in (_GROUP_KEY, _AUTOGENERATE_KEY, _LINK_KEY) if key in raw]
    if len(shapes) > 1:
        msg = f"sidebar item mixes {', '.join(repr(key) for key in shapes)}"
        raise InvalidDeclarationError(msg, path=path)
    if not shapes:
        msg = "sidebar item needs one of 'slug', 'items' or 'autogenerate'"
        raise InvalidDeclarationError(msg, path=path)

    match shapes[0]:
        case "items":
            label = _required_str(raw, "label", path=path)
            items = raw[_GROUP_KEY]
            if not isinstance(items, list):
                msg = "'items' must be a list"
                raise InvalidDeclarationError(msg, path=path)
            if not items:
                raise EmptyGroupError(label, path=path)
            children = tuple(
                _validate_node(child, path=f"{path}.items[{position}]")
                for position, child in enumerate(items)
            )
            return GroupDeclaration(
                label=label, children=children, collapsed=_flag(raw, "collapsed", path=path)
            )
        case "autogenerate":
            label = _required_str(raw, "label", path=path)
            directive = raw[_AUTOGENERATE_KEY]
            if not isinstance(directive, Mapping):
                msg = "'autogenerate' must be a mapping"
                raise InvalidDeclarationError(msg, path=path)
            directive_path = f"{path}.autogenerate"
            directory = directive.get("directory")
            if directory is None:
                raise MissingRequiredFieldError("directory", path=directive_path)
            if not isinstance(directory, str):
                msg = "'directory' must be a string"
                raise InvalidDeclarationError(msg, path=directive_path)
            collapsed = _flag(raw, "collapsed", path=path) or _flag(
                directive, "collapsed", path=directive_path
            )
            return AutogenerateDeclaration(
                label=label, directory=normalise_directory(directory), collapsed=collapsed
            )
        case _:
            slug = normalise_slug(_required_str(raw, _LINK_KEY, path=path))
            if not slug:
                raise MissingRequiredFieldError(_LINK_KEY, path=path)
            return LinkDeclaration(slug=slug, label=_optional_str(raw, "label", path=path))


def validate_sidebar(raw: object) -> tuple[DeclarationNode, ...]:
    """Validate the ordered list of top-level sidebar items.

    Raises
    ------
    InvalidDeclarationError
        If ``raw`` is not a list or an item has an unknown shape.
    MissingRequiredFieldError
        If an item lacks its ``label``, ``slug`` or ``directory``.
    EmptyGroupError
        If a group declares no items.
    """
    if raw is None:
        return ()
    if not isinstance(raw, list):
        msg = "'sidebar' must be a list"
        raise InvalidDeclarationError(msg, path="sidebar")
    return tuple(_validate_node(item, path=f"sidebar[{position}]") for position, item in enumerate(raw))


def validate_config(raw: Mapping[str, object]) -> NavigationDeclaration:
    """Validate raw configuration into a :class:`NavigationDeclaration`.

    Parameters
    ----------
    raw : Mapping[str, object]
        Untyped configuration, e.g. loaded from YAML.

    Returns
    -------
    NavigationDeclaration
        Typed declaration tree.

    Raises
    ------
    MissingRequiredFieldError
        If ``title`` is absent or blank, or a sidebar item lacks a required field.
    DuplicateSocialKeyError
        If a social platform is declared twice.
    EmptyGroupError
        If a sidebar group has no items.
    InvalidLogoShapeError
        If the logo is neither a single path nor a complete light/dark pair.
    InvalidDeclarationError
        If the input has an unrecognisable structure.
    """
    if not isinstance(raw, Mapping):
        msg = "configuration must be a mapping"
        raise InvalidDeclarationError(msg)
    title = _required_str(raw, "title", path=None)
    base_url = _optional_str(raw, "base_url", path="base_url") or _optional_str(
        raw, "site", path="site"
    )
    logo = validate_logo(raw["logo"]) if raw.get("logo") is not None else None
    social = validate_social(raw["social"]) if raw.get("social") is not None else ()
    sidebar = validate_sidebar(raw.get("sidebar"))

    LOGGER.debug(
        "Configuration validated",
        extra={"operation": "validate_config", "sidebar_items": len(sidebar)},
    )
    return NavigationDeclaration(
        title=title, sidebar=sidebar, base_url=base_url, logo=logo, social=social
    )
