"""
Interactive session controller.

The session owns one Document and its Selection. It is driven one action at
a time by a screen object, which must provide:

    render(session)    draw the current state
    read_action()      block for the next key press, returning an Action or None
    suspended()        context manager that leaves interactive mode
    celebrate()        run the celebration animation (inside suspended())

State machine:

    RUNNING --quit--> TERMINATED
    RUNNING --toggle completes the list--> SHOWING_CELEBRATION --> RUNNING
"""

import logging
from enum import Enum
from typing import Callable, Optional

from .models import Document
from .navigation import Selection
from .parser import write_file

log = logging.getLogger(__name__)


class Action(Enum):
    """Key press events understood by the session."""

    QUIT = "quit"
    DOWN = "down"
    UP = "up"
    TOP = "top"
    BOTTOM = "bottom"
    TOGGLE = "toggle"


class SessionState(Enum):
    RUNNING = "running"
    SHOWING_CELEBRATION = "showing-celebration"
    TERMINATED = "terminated"


class Session:
    """State machine for one interactive invocation on one list."""

    def __init__(self, document: Document, save: Optional[Callable[[Document], None]] = None):
        self.document = document
        self.selection = Selection(document)
        self.state = SessionState.RUNNING
        self._save = save or write_file

    @property
    def name(self) -> str:
        return self.document.name

    def save(self) -> None:
        self._save(self.document)

    def handle(self, action: Optional[Action]) -> bool:
        """
        Apply one key press to the session.

        Args:
            action: The pressed key, or None for keys without a binding

        Returns:
            True if the toggle just completed the list and the celebration
            should be shown. The document has already been saved in that case.
        """
        if self.state is not SessionState.RUNNING:
            return False

        if action is Action.QUIT:
            try:
                self.save()
            finally:
                self.state = SessionState.TERMINATED
        elif action is Action.DOWN:
            self.selection.next()
        elif action is Action.UP:
            self.selection.previous()
        elif action is Action.TOP:
            self.selection.goto_first()
        elif action is Action.BOTTOM:
            self.selection.goto_last()
        elif action is Action.TOGGLE:
            return self._toggle()

        return False

    def _toggle(self) -> bool:
        had_incomplete = self.document.has_incomplete
        self.selection.toggle_current()
        all_complete = self.document.all_complete

        if had_incomplete and all_complete and self.document.has_todos:
            log.debug("All todos in %s complete", self.name)
            self.save()
            return True
        return False

    def run(self, screen) -> None:
        """
        Drive the session until the user quits.

        Errors (including failed saves) end the session and propagate.

        Args:
            screen: Screen implementing render/read_action/suspended/celebrate
        """
        try:
            while self.state is SessionState.RUNNING:
                screen.render(self)
                if self.handle(screen.read_action()):
                    self.state = SessionState.SHOWING_CELEBRATION
                    with screen.suspended():
                        screen.celebrate()
                    self.state = SessionState.RUNNING
        finally:
            self.state = SessionState.TERMINATED
