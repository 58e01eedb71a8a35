import pytest

from splitlayout.core.config import config_manager
from splitlayout.layout import LayoutParent, LayoutTree


@pytest.fixture(autouse=True)
def reset_config():
    """Each test starts from default layout settings."""
    config_manager.reset()
    yield
    config_manager.reset()


@pytest.fixture
def simple_tree():
    # row
    #   panel1 | panel2
    return LayoutTree({"direction": "row", "leading": "panel1", "trailing": "panel2"})


@pytest.fixture
def nested_tree():
    # row
    #   panel1
    #   column (75)
    #     panel2
    #     row
    #       panel3 | panel4
    return LayoutTree(LayoutParent(
        direction="row",
        leading="panel1",
        trailing=LayoutParent(
            direction="column",
            leading="panel2",
            trailing=LayoutParent(direction="row", leading="panel3", trailing="panel4"),
            split_percentage=75,
        ),
    ))


@pytest.fixture
def constrained_tree():
    return LayoutTree({
        "direction": "row",
        "leading": "sidebar",
        "trailing": {"direction": "column", "leading": "editor", "trailing": "terminal"},
        "splitPercentage": 25,
        "constraints": {
            "leading": {"minSize": 200, "locked": True},
            "trailing": {"collapsible": False},
        },
    })
