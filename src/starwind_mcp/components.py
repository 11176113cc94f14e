"""Component validation and Starwind CLI command rendering.

Pure business logic. Receives the known component list and a package manager
descriptor, returns validation results and command strings. No I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rapidfuzz import fuzz, process

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from starwind_mcp.package_manager import PackageManagerInfo

CLI_PACKAGE = "starwind@latest"
INSTALL_ALL_ALIASES = frozenset({"--all", "all"})

# Used only when llms.txt cannot be fetched or yields no component links.
FALLBACK_COMPONENTS: tuple[str, ...] = (
    "accordion",
    "alert",
    "alert-dialog",
    "aspect-ratio",
    "avatar",
    "badge",
    "breadcrumb",
    "button",
    "button-group",
    "card",
    "carousel",
    "checkbox",
    "collapsible",
    "combobox",
    "dialog",
    "dropdown",
    "dropzone",
    "image",
    "input",
    "input-otp",
    "item",
    "label",
    "pagination",
    "progress",
    "prose",
    "radio-group",
    "select",
    "separator",
    "sheet",
    "sidebar",
    "skeleton",
    "slider",
    "spinner",
    "switch",
    "table",
    "tabs",
    "textarea",
    "theme-toggle",
    "toast",
    "toggle",
    "tooltip",
    "video",
)


@dataclass
class ValidationResult:
    valid: list[str] = field(default_factory=list)  # Normalised names
    invalid: list[str] = field(default_factory=list)  # As supplied by the caller
    suggestions: dict[str, list[str]] = field(default_factory=dict)  # Keyed by supplied name


def normalise_component(name: str) -> str:
    return name.lower().strip()


def is_install_all(items: Iterable[str]) -> bool:
    """True if any item asks for every component (``--all`` or ``all``)."""
    return any(normalise_component(item) in INSTALL_ALL_ALIASES for item in items)


def suggest_components(
    name: str,
    known: Sequence[str],
    *,
    fuzzy_score_cutoff: int = 80,
    fuzzy_max_results: int = 3,
) -> list[str]:
    """Suggest known components for an unrecognised ``name``.

    Substring containment in either direction comes first. Only when that
    finds nothing are near-miss spellings (e.g. ``buton``) offered.
    """
    normalised = normalise_component(name)
    if not normalised:
        return []

    contained = [k for k in known if normalised in k or k in normalised]
    if contained:
        return contained

    results = process.extract(
        normalised,
        list(known),
        scorer=fuzz.ratio,
        limit=fuzzy_max_results,
        score_cutoff=fuzzy_score_cutoff,
    )
    return [term for term, _score, _idx in results]


def validate_components(
    items: Sequence[str],
    known: Sequence[str],
    *,
    fuzzy_score_cutoff: int = 80,
    fuzzy_max_results: int = 3,
) -> ValidationResult:
    """Partition requested names into known and unknown, with suggestions."""
    known_set = set(known)
    result = ValidationResult()

    for item in items:
        normalised = normalise_component(item)
        if normalised in known_set:
            if normalised not in result.valid:
                result.valid.append(normalised)
            continue

        result.invalid.append(item)
        similar = suggest_components(
            item,
            known,
            fuzzy_score_cutoff=fuzzy_score_cutoff,
            fuzzy_max_results=fuzzy_max_results,
        )
        if similar:
            result.suggestions[item] = similar

    return result


def build_add_command(pm: PackageManagerInfo, components: Sequence[str] | None) -> str:
    """Render ``<dlx> starwind@latest add ... --yes``; ``None`` installs everything."""
    targets = "--all" if components is None else " ".join(components)
    return f"{pm.dlx_prefix} {CLI_PACKAGE} add {targets} --yes"


def build_init_command(pm: PackageManagerInfo, *, pro: bool = False) -> str:
    command = f"{pm.dlx_prefix} {CLI_PACKAGE} init --defaults"
    if pro:
        command += " --pro"
    return command
