"""
Template rendering helpers for diagrams of a state machine.
"""

import os
from typing import TYPE_CHECKING, Any, Optional

from jinja2 import Environment, FileSystemLoader, PackageLoader, select_autoescape
from jinja2.loaders import BaseLoader

if TYPE_CHECKING:
    from .state_machine import StateMachine

DOT_TEMPLATE = "machine.dot.j2"
TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")


def dot_id(value: Any) -> str:
    """Quote ``value`` as a Graphviz DOT identifier."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _environment(loader: Optional[BaseLoader], unsafe: bool) -> Environment:
    # Note: autoescape can be disabled via unsafe=True for trusted content
    env = Environment(  # nosec B701
        loader=loader,
        autoescape=select_autoescape() if not unsafe else False,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["dot_id"] = dot_id
    return env


def render(
    template: Optional[str] = None,
    package: Optional[str] = None,
    unsafe: bool = False,
    inline: Optional[str] = None,
    **kwargs: Any
) -> str:
    """
    Render a template using Jinja2.

    Args:
        template: Name of the template file. Ignored if `inline` is provided.
        package: Template directory path, or the name of a package holding a
                 `templates` directory. Defaults to the templates shipped
                 with this package.
        unsafe: If False (default), autoescape is enabled for HTML/XML templates.
        inline: Optional inline template string rendered instead of a file.
        **kwargs: Variables passed to the template context.

    Returns:
        The rendered template as a string.

    Examples:
        render(template="machine.dot.j2", name="player", states=[], transitions=[])
        render(inline="{{ name | dot_id }}", name="player")
        render(template="graph.txt", package="./templates", machine=machine)
    """
    if inline:
        return _environment(None, unsafe).from_string(inline).render(**kwargs)

    if not template:
        raise ValueError("Either 'template' or 'inline' parameter must be provided")

    package = package or TEMPLATE_DIR
    loader: BaseLoader
    if os.path.isdir(package):
        loader = FileSystemLoader(package)
    else:
        try:
            loader = PackageLoader(package, "templates")
        except (ImportError, ValueError) as e:
            raise ValueError(
                f"Could not find template directory or package '{package}'"
            ) from e

    try:
        template_obj = _environment(loader, unsafe).get_template(template)
    except Exception as e:
        raise ValueError(
            f"Failed to load template '{template}' from package/directory '{package}'. "
            f"Original error: {str(e)}"
        ) from e
    return template_obj.render(**kwargs)


def render_dot(machine: "StateMachine", name: Optional[str] = None) -> str:
    """Render the transition graph of ``machine`` as Graphviz DOT.

    Nodes are the states reported by ``machine.states()`` plus the current
    state, which is drawn bold even when it has no transitions. The machine is
    read in one locked snapshot. The output is a diagram only and cannot be
    loaded back.
    """
    states, transitions, current = machine._snapshot()
    if current is not None and current not in states:
        states = sorted(states + [current])
    return render(
        template=DOT_TEMPLATE,
        package=TEMPLATE_DIR,
        name=name or machine.name,
        states=states,
        transitions=transitions,
        current=current,
    )
