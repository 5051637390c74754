"""HTML dashboard rendering."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from xcreport.correlation import correlate_screenshots
from xcreport.embedding import EmbeddingStrategy
from xcreport.models.report import Group, RenderTree

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def create_environment() -> Environment:
    """Create the Jinja environment holding the report templates."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=select_autoescape(),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["duration"] = format_duration
    env.tests["group"] = lambda node: isinstance(node, Group)
    return env


def format_duration(seconds: float) -> str:
    """Format a duration the way the dashboard displays it."""
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}m {rest:.0f}s"


def render_html(tree: RenderTree, embedding: EmbeddingStrategy) -> str:
    """Render the dashboard.

    Every attachment source goes through ``embedding``, so an inline strategy
    yields a self-contained document and a linking strategy records the files
    the document points at.
    """
    template = create_environment().get_template("index.html")
    return template.render(
        result_class=tree.status,
        runs=tree.runs,
        source=embedding.source,
        screenshot_triples=correlate_screenshots,
    )
