"""Selection Graph types: the shapes held by the Store and written to storage."""

from typing import Literal, Optional, TypedDict

ProjectType = Literal["Website", "Web App", "Mobile App", "Dashboard", "E-commerce", "Portfolio"]
PromptType = Literal["basic", "detailed"]

PROJECT_TYPES: tuple = ("Website", "Web App", "Mobile App", "Dashboard", "E-commerce", "Portfolio")

STEPS: tuple = (
    "project-setup",
    "layout",
    "design-style",
    "color-theme",
    "typography",
    "visuals",
    "background",
    "components",
    "functionality",
    "animations",
    "preview",
)
FIRST_STEP = STEPS[0]


class ProjectInfo(TypedDict, total=False):
    name: str
    description: str
    type: str  # One of PROJECT_TYPES; not enforced by the Store.
    purpose: str
    target_audience: str
    goals: str


class Typography(TypedDict):
    font_family: str
    heading_weight: str
    body_weight: str
    text_alignment: str
    heading_size: str
    body_size: str
    line_height: str


# --- Catalog items (supplied by the catalog data layer, stored by reference) ---


class LayoutOption(TypedDict, total=False):
    id: str
    title: str
    description: str
    category: str  # "column" or "special"


class DesignStyle(TypedDict, total=False):
    id: str
    title: str
    description: str


class ColorTheme(TypedDict, total=False):
    id: str
    title: str
    description: str
    colors: list[str]
    distribution: list[int]  # primary / secondary / accent percentages
    is_custom: bool


class FunctionalityOption(TypedDict, total=False):
    id: str
    title: str
    description: str
    category: str  # "functionality" or "technical"
    tier: Optional[str]  # Set only on package items.
    features: list[str]


class VisualElement(TypedDict, total=False):
    id: str
    type: str
    style: str


class InstallableOption(TypedDict, total=False):
    """Background, UI component or animation from the component library."""

    id: str
    title: str
    description: str
    dependencies: list[str]
    cli_command: str
    code_snippet: str


class SelectionGraph(TypedDict):
    project_info: ProjectInfo
    selected_layout: Optional[LayoutOption]
    selected_special_layouts: list[LayoutOption]
    selected_design_style: Optional[DesignStyle]
    selected_color_theme: Optional[ColorTheme]
    selected_typography: Typography
    selected_functionality: list[FunctionalityOption]
    selected_visuals: list[VisualElement]
    selected_background: Optional[InstallableOption]
    background_selection: Optional[dict]
    selected_components: list[InstallableOption]
    selected_animations: list[InstallableOption]


# Fields written back by undo/redo. Project metadata and the step pointer are not tracked.
TRACKABLE_FIELDS: tuple = (
    "selected_layout",
    "selected_special_layouts",
    "selected_design_style",
    "selected_color_theme",
    "selected_typography",
    "selected_functionality",
    "selected_visuals",
    "selected_background",
    "background_selection",
    "selected_components",
    "selected_animations",
)

GRAPH_FIELDS: tuple = ("project_info",) + TRACKABLE_FIELDS

LIST_FIELDS: frozenset = frozenset({
    "selected_special_layouts",
    "selected_functionality",
    "selected_visuals",
    "selected_components",
    "selected_animations",
})


def default_project_info() -> ProjectInfo:
    return {
        "name": "",
        "description": "",
        "type": "Website",
        "purpose": "Portfolio",
        "target_audience": "",
        "goals": "",
    }


def default_typography() -> Typography:
    return {
        "font_family": "'Inter', sans-serif",
        "heading_weight": "Semibold",
        "body_weight": "Regular",
        "text_alignment": "Left",
        "heading_size": "Large",
        "body_size": "Medium",
        "line_height": "Normal",
    }


def default_graph() -> SelectionGraph:
    """Return a fresh, fully defaulted Selection Graph."""
    return {
        "project_info": default_project_info(),
        "selected_layout": None,
        "selected_special_layouts": [],
        "selected_design_style": None,
        "selected_color_theme": None,
        "selected_typography": default_typography(),
        "selected_functionality": [],
        "selected_visuals": [],
        "selected_background": None,
        "background_selection": None,
        "selected_components": [],
        "selected_animations": [],
    }
