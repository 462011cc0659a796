"""Prompt synthesis: renders a Selection Graph as a detailed or a basic build prompt.

Both renderers are pure: they read the graph passed in, build a fresh list of
lines, and return a string. Missing or unknown catalog data degrades to
placeholders rather than errors.
"""

from lovabolt.state import SelectionGraph

INCOMPLETE_MESSAGE = "Please complete all required sections before generating a prompt."

VARIANTS = ("detailed", "basic")

_DISTRIBUTION_LABELS = ("Primary", "Secondary", "Accent")

_TECHNICAL_IMPLEMENTATION = (
    "- **Framework:** React with TypeScript",
    "- **Styling:** Tailwind CSS with modern design patterns",
    "- **Responsive Design:** Mobile-first approach with breakpoints for tablet and desktop",
    "- **Accessibility:** WCAG 2.1 AA compliance",
    "- **Performance:** Optimized loading and smooth interactions",
    "- **SEO:** Semantic HTML structure and meta tags",
)

_DESIGN_REQUIREMENTS = (
    "- **Modern Aesthetics:** Clean, professional design with attention to detail",
    "- **User Experience:** Intuitive navigation and clear information hierarchy",
    "- **Interactive Elements:** Smooth hover states, loading states, and feedback",
    "- **Cross-browser Compatibility:** Support for modern browsers",
    "- **Mobile Optimization:** Touch-friendly interface and responsive layouts",
)

_CLOSING = (
    "Please implement this design with pixel-perfect attention to detail, ensuring all "
    "elements work harmoniously together to create an exceptional user experience."
)


# --- Helpers ---


def _text(item, key: str, default: str = "") -> str:
    if not isinstance(item, dict):
        return default
    value = item.get(key)
    return default if value is None else str(value)


def _items(graph: dict, field: str) -> list[dict]:
    return [item for item in graph.get(field) or [] if isinstance(item, dict)]


def _strings(values) -> list[str]:
    if not isinstance(values, list):
        return []
    return [str(v) for v in values]


def _article(word: str) -> str:
    return "an" if word and word[0].lower() in "aeiou" else "a"


def _percent(value) -> str:
    try:
        return f"{int(round(float(value)))}%"
    except (TypeError, ValueError):
        return f"{value}%"


def _distribution(theme: dict) -> str:
    values = _strings(theme.get("distribution"))[: len(_DISTRIBUTION_LABELS)]
    if not values:
        return "Not specified"
    return ", ".join(f"{label} ({_percent(v)})" for label, v in zip(_DISTRIBUTION_LABELS, values))


def _project_type(info: dict) -> str:
    return _text(info, "type") or "Website"


def is_complete(graph: dict) -> bool:
    """Whether the graph has every section both prompts require."""
    info = graph.get("project_info") or {}
    references = ("selected_layout", "selected_design_style", "selected_color_theme")
    return bool(info.get("name")) and all(
        isinstance(graph.get(field), dict) and graph[field] for field in references
    )


def _tier(graph: dict) -> dict | None:
    return next((item for item in _items(graph, "selected_functionality") if item.get("tier")), None)


def _installables(graph: dict) -> list[dict]:
    """Background first, then components, then animations."""
    background = graph.get("selected_background")
    items = [background] if isinstance(background, dict) else []
    return items + _items(graph, "selected_components") + _items(graph, "selected_animations")


def collect_dependencies(graph: dict) -> list[str]:
    """Unique dependency names across background, components and animations, first-seen order."""
    seen = []
    for item in _installables(graph):
        for dep in _strings(item.get("dependencies")):
            if dep not in seen:
                seen.append(dep)
    return seen


def collect_cli_commands(graph: dict) -> list[str]:
    return [_text(item, "cli_command") for item in _installables(graph) if item.get("cli_command")]


def _install_lines(item: dict) -> list[str]:
    lines = [
        f"- **Description:** {_text(item, 'description')}",
        f"- **Dependencies:** {', '.join(_strings(item.get('dependencies'))) or 'None'}",
    ]
    if item.get("cli_command"):
        lines.append(f"- **Installation:** `{_text(item, 'cli_command')}`")
    return lines


# --- Detailed prompt ---


def render_detailed(graph: SelectionGraph) -> str:
    """Render the full, sectioned build prompt."""
    if not is_complete(graph):
        return INCOMPLETE_MESSAGE

    info = graph.get("project_info") or {}
    layout = graph["selected_layout"]
    style = graph["selected_design_style"]
    theme = graph["selected_color_theme"]
    typography = graph.get("selected_typography") or {}
    project_type = _project_type(info)

    lines = []
    lines.append(f"Create {_article(project_type)} {project_type.lower()} with the following specifications:")
    lines.append("")
    lines.append(f'**Project Name:** "{_text(info, "name")}"')
    lines.append("")

    # 1. Overview
    lines.append("## 1. Project Overview")
    lines.append(f"- **Type:** {project_type}")
    lines.append(f"- **Purpose:** {_text(info, 'purpose')}")
    lines.append(f"- **Description:** {_text(info, 'description')}")
    if info.get("target_audience"):
        lines.append(f"- **Target Audience:** {info['target_audience']}")
    if info.get("goals"):
        lines.append(f"- **Goals:** {info['goals']}")
    lines.append("")

    # 2. Layout
    lines.append("## 2. Layout Structure")
    lines.append(f"- **Primary Layout:** {_text(layout, 'title')}")
    lines.append(f"- **Layout Description:** {_text(layout, 'description')}")
    special_layouts = _items(graph, "selected_special_layouts")
    if special_layouts:
        lines.append("- **Additional Layout Features:**")
        for special in special_layouts:
            lines.append(f"  • {_text(special, 'title')}")
    lines.append("")

    # 3. Design style
    style_title = _text(style, "title")
    lines.append("## 3. Design Style")
    lines.append(f"- **Primary Style:** {style_title}")
    lines.append(f"- **Style Description:** {_text(style, 'description')}")
    lines.append(f"- **Design Approach:** Modern {style_title.lower()} with attention to user experience")
    lines.append("")

    # 4. Colors
    lines.append("## 4. Color Scheme")
    lines.append(f"- **Theme:** {_text(theme, 'title')}")
    lines.append(f"- **Primary Colors:** {', '.join(_strings(theme.get('colors')))}")
    lines.append(f"- **Color Distribution:** {_distribution(theme)}")
    lines.append(
        "- **Color Usage:** Use primary color for main elements, secondary for backgrounds, "
        "accent for highlights and CTAs"
    )
    lines.append("")

    # 5. Typography
    lines.append("## 5. Typography")
    lines.append(f"- **Font Family:** {_text(typography, 'font_family')}")
    lines.append(f"- **Heading Weight:** {_text(typography, 'heading_weight')}")
    lines.append(f"- **Body Text Weight:** {_text(typography, 'body_weight')}")
    lines.append(f"- **Text Alignment:** {_text(typography, 'text_alignment')}")
    lines.append(f"- **Heading Size:** {_text(typography, 'heading_size')}")
    lines.append(f"- **Body Size:** {_text(typography, 'body_size')}")
    lines.append(f"- **Line Height:** {_text(typography, 'line_height')}")
    lines.append("")

    # 6. Visuals
    lines.append("## 6. Visual Elements")
    visuals = _items(graph, "selected_visuals")
    if visuals:
        for visual in visuals:
            lines.append(f"- {_text(visual, 'type')}: {_text(visual, 'style')}")
    else:
        lines.append("- Standard visual elements")
    lines.append("")

    # 7. Background
    background = graph.get("selected_background")
    lines.append("## 7. Background Effect")
    if isinstance(background, dict):
        lines.append(f"- **Selected Background:** {_text(background, 'title')}")
        lines.extend(_install_lines(background))
    else:
        lines.append("- **Selected Background:** None")
    lines.append("")

    # 8. Components
    components = _items(graph, "selected_components")
    lines.append("## 8. UI Components")
    if components:
        lines.append(f"**Selected Components ({len(components)}):**")
        lines.append("")
        for comp in components:
            lines.append(f"### {_text(comp, 'title')}")
            lines.extend(_install_lines(comp))
            if comp.get("code_snippet"):
                lines.append("- **Usage:**")
                lines.append("```tsx")
                lines.append(_text(comp, "code_snippet"))
                lines.append("```")
            lines.append("")
    else:
        lines.append("- No additional UI components selected")
        lines.append("")

    # 9. Animations
    animations = _items(graph, "selected_animations")
    lines.append("## 9. UI/UX Animations")
    if animations:
        lines.append(f"**Selected Animations ({len(animations)}):**")
        lines.append("")
        for anim in animations:
            lines.append(f"### {_text(anim, 'title')}")
            lines.extend(_install_lines(anim))
            lines.append("")
    else:
        lines.append("- Standard animations and transitions")
        lines.append("")

    # 10. Functionality: package tier first, then standalone technical features
    tier = _tier(graph)
    technical = [item for item in _items(graph, "selected_functionality") if not item.get("tier")]
    lines.append("## 10. Functionality & Features")
    if tier:
        lines.append(f"**Tier:** {_text(tier, 'title')}")
        lines.append("**Core Features:**")
        for feature in _strings(tier.get("features")):
            lines.append(f"   - {feature}")
        lines.append("")
    if technical:
        lines.append("**Technical Requirements:**")
        for feature in technical:
            lines.append(f"   - {_text(feature, 'title')}: {_text(feature, 'description')}")
        lines.append("")
    if not tier and not technical:
        lines.append("- Standard functionality and features")
        lines.append("")

    # 11. Technical implementation
    lines.append("## 11. Technical Implementation")
    lines.extend(_TECHNICAL_IMPLEMENTATION)
    lines.append("")

    # 12. Installation, only when something selected can be installed
    commands = collect_cli_commands(graph)
    if commands:
        dependencies = collect_dependencies(graph)
        lines.append("## 12. React-Bits Installation")
        lines.append("")
        lines.append("**Step 1: Install Dependencies**")
        lines.append("```bash")
        lines.append(f"npm install {' '.join(dependencies)}" if dependencies else "# No additional dependencies")
        lines.append("```")
        lines.append("")
        lines.append("**Step 2: Install React-Bits Components**")
        lines.append("```bash")
        lines.extend(commands)
        lines.append("```")
        lines.append("")
        lines.append("**Step 3: Import and Use**")
        lines.append("Refer to the component-specific usage examples above for implementation details.")
        lines.append("")

    # 13. Design requirements
    lines.append("## 13. Design Requirements")
    lines.extend(_DESIGN_REQUIREMENTS)
    lines.append("")
    lines.append(_CLOSING)

    return "\n".join(lines).strip()


# --- Basic prompt ---


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"


def _extras_summary(graph: dict) -> str:
    parts = []
    background = graph.get("selected_background")
    if isinstance(background, dict):
        parts.append(f"{_text(background, 'title')} background")
    components = _items(graph, "selected_components")
    if components:
        titles = ", ".join(_text(c, "title") for c in components)
        parts.append(f"{_plural(len(components), 'UI component')} ({titles})")
    animations = _items(graph, "selected_animations")
    if animations:
        titles = ", ".join(_text(a, "title") for a in animations)
        parts.append(f"{_plural(len(animations), 'animation')} ({titles})")
    return ", ".join(parts)


def render_basic(graph: SelectionGraph) -> str:
    """Render the short paragraph prompt."""
    if not is_complete(graph):
        return INCOMPLETE_MESSAGE

    info = graph.get("project_info") or {}
    layout_title = _text(graph["selected_layout"], "title").lower()
    style_title = _text(graph["selected_design_style"], "title").lower()
    theme = graph["selected_color_theme"]
    typography = graph.get("selected_typography") or {}
    project_type = _project_type(info).lower()

    paragraphs = []
    paragraphs.append(
        f'Create {_article(project_type)} {project_type} called "{_text(info, "name")}" '
        f"for {_text(info, 'purpose').lower()} purposes. {_text(info, 'description')}".strip()
    )
    paragraphs.append(
        f"Use {_article(layout_title)} {layout_title} layout with {_article(style_title)} {style_title} "
        f"design style. The color scheme should follow the {_text(theme, 'title').lower()} theme, "
        f"using {', '.join(_strings(theme.get('colors')))} as the main colors, "
        f"distributed as {_distribution(theme)}."
    )

    visuals = _items(graph, "selected_visuals")
    visual_text = (
        ", ".join(f"{_text(v, 'type')} in {_text(v, 'style')} style" for v in visuals)
        or "standard visual elements"
    )
    paragraphs.append(
        f"For typography, use {_text(typography, 'font_family')} with "
        f"{_text(typography, 'heading_weight').lower()} headings and "
        f"{_text(typography, 'body_weight').lower()} body text. "
        f"Visual elements should include {visual_text}."
    )

    extras = _extras_summary(graph)
    if extras:
        paragraphs.append(f"Include react-bits components: {extras}.")

    tier = _tier(graph)
    tier_title = _text(tier, "title").lower() if tier else "basic"
    paragraphs.append(
        f"Include {tier_title} functionality features. Build using React, TypeScript, "
        "and Tailwind CSS with modern responsive design."
    )

    return "\n\n".join(paragraphs)


def synthesize(graph: SelectionGraph, variant: str = "detailed") -> str:
    """Render ``graph`` as the requested prompt variant."""
    if variant == "detailed":
        return render_detailed(graph)
    if variant == "basic":
        return render_basic(graph)
    raise ValueError(f"Unknown prompt variant '{variant}'. Must be one of: {VARIANTS}")
