"""Shared fixtures for the LovaBolt test suite."""

import pytest
from unittest.mock import patch

from lovabolt.session import WizardSession
from lovabolt.state import default_graph
from lovabolt.store import SelectionStore
from lovabolt.utils.scheduling import ManualScheduler
from lovabolt.utils.storage import MemoryStorage


@pytest.fixture
def mock_config(tmp_path):
    """Patch the config singleton with test-friendly values."""
    test_config = {
        "history_debounce_ms": 500,
        "autosave_debounce_ms": 1000,
        "storage_key": "lovabolt-project",
        "storage_dir": str(tmp_path / "storage"),
        "storage_quota_bytes": 5 * 1024 * 1024,
        "storage_max_retries": 2,
        "default_prompt_type": "detailed",
    }
    with patch("lovabolt.config._config", test_config):
        yield test_config


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store():
    return SelectionStore()


@pytest.fixture
def session(mock_config, storage, scheduler):
    s = WizardSession(storage=storage, scheduler=scheduler)
    yield s
    s.close()


@pytest.fixture
def layout():
    return {
        "id": "single-column",
        "title": "Single Column",
        "description": "Content in one vertical line, ideal for mobile or minimalist designs.",
        "category": "column",
    }


@pytest.fixture
def special_layouts():
    return [
        {"id": "hero-section", "title": "Hero Section", "description": "Full-width area.", "category": "special"},
        {"id": "sticky-header", "title": "Sticky Header", "description": "Fixed navigation.", "category": "special"},
    ]


@pytest.fixture
def design_style():
    return {
        "id": "minimalist",
        "title": "Minimalist",
        "description": "Clean design with essential elements only.",
    }


@pytest.fixture
def color_theme():
    return {
        "id": "custom-theme",
        "title": "Custom Theme",
        "description": "Create your own unique color palette",
        "colors": ["#111", "#222", "#333"],
        "distribution": [40, 40, 20],
    }


@pytest.fixture
def tier_package():
    return {
        "id": "standard-package",
        "title": "Standard Package",
        "description": "Advanced features for growing businesses",
        "category": "functionality",
        "tier": "standard",
        "features": ["All Basic Features", "Blog System with CMS", "Newsletter Integration"],
    }


@pytest.fixture
def technical_feature():
    return {
        "id": "dark-mode",
        "title": "Dark Mode Support",
        "description": "Alternative color scheme for low-light conditions",
        "category": "technical",
        "features": ["System Preference Detection"],
    }


@pytest.fixture
def background():
    return {
        "id": "aurora",
        "title": "Aurora",
        "description": "Flowing aurora gradient behind the page.",
        "dependencies": ["ogl"],
        "cli_command": "npx jsrepo add https://reactbits.dev/ts/tailwind/Backgrounds/Aurora",
    }


@pytest.fixture
def components():
    return [
        {
            "id": "animated-list",
            "title": "Animated List",
            "description": "List whose items animate in on scroll.",
            "dependencies": ["framer-motion"],
            "cli_command": "npx jsrepo add https://reactbits.dev/ts/tailwind/Components/AnimatedList",
            "code_snippet": "<AnimatedList items={items} />",
        },
        {
            "id": "dock",
            "title": "Dock",
            "description": "macOS style magnifying dock.",
            "dependencies": ["framer-motion", "clsx"],
            "cli_command": "npx jsrepo add https://reactbits.dev/ts/tailwind/Components/Dock",
        },
    ]


@pytest.fixture
def animations():
    return [
        {
            "id": "blur-text",
            "title": "Blur Text",
            "description": "Text that fades in from a blur.",
            "dependencies": ["framer-motion"],
            "cli_command": "npx jsrepo add https://reactbits.dev/ts/tailwind/TextAnimations/BlurText",
        }
    ]


@pytest.fixture
def project_info():
    return {
        "name": "Acme",
        "description": "A portfolio for the Acme studio.",
        "type": "Website",
        "purpose": "Portfolio",
        "target_audience": "",
        "goals": "",
    }


@pytest.fixture
def minimal_graph(project_info, layout, design_style, color_theme):
    """Graph with only the sections both prompts require."""
    graph = default_graph()
    graph["project_info"] = project_info
    graph["selected_layout"] = layout
    graph["selected_design_style"] = design_style
    graph["selected_color_theme"] = color_theme
    return graph


@pytest.fixture
def full_graph(minimal_graph, special_layouts, tier_package, technical_feature, background, components, animations):
    """Graph with every section filled."""
    graph = dict(minimal_graph)
    graph["selected_special_layouts"] = special_layouts
    graph["selected_functionality"] = [tier_package, technical_feature]
    graph["selected_visuals"] = [
        {"id": "icons-line", "type": "Icons", "style": "Line Icons"},
        {"id": "images-abstract", "type": "Images", "style": "Abstract"},
    ]
    graph["selected_background"] = background
    graph["selected_components"] = components
    graph["selected_animations"] = animations
    return graph
