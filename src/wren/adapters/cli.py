"""Command-line adapter — the first positional argument is the path.

::

    # myprogram.py
    router = Router({"/profile/:id": show_profile, "*": usage})

    if __name__ == "__main__":
        run(router)

    $ python myprogram.py /profile/1 --format=json -v
    # show_profile({"format": "json", "v": True, "id": "1"})
"""

import sys
from collections.abc import Sequence

from wren.config import RouterConfig
from wren.context import HostRequest
from wren.dispatch import DispatchOutcome
from wren.routing.params import parse_cli_args
from wren.router import Router


def request_from_argv(argv: Sequence[str], config: RouterConfig | None = None) -> HostRequest:
    """Build a HostRequest from argument tokens (without the program name).

    The first token that is not an option is the path; a ``?query``
    suffix on it is split off. Without one, ``config.default_path`` is
    used. Every token is fed to ``parse_cli_args``.
    """
    config = config or RouterConfig()
    target = next((token for token in argv if not token.startswith("-")), None)
    path, _, query = (target or config.default_path).partition("?")
    return HostRequest(path=path or config.default_path, query=query, cli_args=parse_cli_args(argv))


def run(router: Router, argv: Sequence[str] | None = None) -> DispatchOutcome:
    """Dispatch the current process's arguments (or *argv*) through *router*."""
    tokens = list(sys.argv[1:] if argv is None else argv)
    return router.dispatch(request_from_argv(tokens, router.config))
