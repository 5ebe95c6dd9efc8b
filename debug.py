# debug.py
from __future__ import annotations
import logging
from typing import Dict

COMPONENTS = ("alphabet", "plugboard", "rotor", "reflector", "stepping", "encipher")


class Debug:
    """Component-switchable tracing on top of the ``ENIGMA`` logger.

    Every module keeps its own ``debug = Debug()`` handle, but the switch
    board is shared: enabling ``"stepping"`` from the command line turns it
    on for every module at once.
    """

    _root_configured: bool = False          # class-level guard
    _components: Dict[str, bool] = {c: False for c in COMPONENTS}
    _enabled: bool = True                   # global switch

    def __init__(self, *, configure: bool = False, log_to: str | None = None) -> None:
        """
        With `configure=True` the root logger is set up once (stream handler,
        plus a file handler when `log_to` is given). Library modules never
        configure; only the command-line entry point does.
        """
        if configure and not Debug._root_configured:
            handlers: list[logging.Handler] = [logging.StreamHandler()]
            if log_to:
                handlers.append(logging.FileHandler(log_to, encoding="utf-8"))

            logging.basicConfig(
                level=logging.DEBUG,
                format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
                handlers=handlers,
            )
            Debug._root_configured = True

        self.logger = logging.getLogger("ENIGMA")

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str) -> None:
        if Debug._enabled and Debug._components.get(component, False):
            self.logger.debug("[%s] %s", component.upper(), message)

    def active(self, component: str) -> bool:
        """True when `component` would actually emit (skip building costly messages)."""
        return Debug._enabled and Debug._components.get(component, False)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._components[c] = False

    def toggle(self, component: str) -> None:
        self._require(component)
        Debug._components[component] = not Debug._components[component]

    def toggle_global(self, state: bool) -> None:
        """Switch every component on/off at once."""
        Debug._enabled = state

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return Debug._components.copy()

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in Debug._components:
            raise ValueError(f"No such component: {component!r}")

    # nicety for `print(dbg)`
    def __repr__(self) -> str:
        active = [k for k, v in Debug._components.items() if v]
        return f"<Debug enabled={Debug._enabled} active={active}>"
