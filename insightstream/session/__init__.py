"""Client session state and the controller that drives it."""

from insightstream.session.controller import Session, SessionController, SessionStatus

__all__ = ["Session", "SessionController", "SessionStatus"]
