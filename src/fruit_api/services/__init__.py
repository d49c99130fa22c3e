from .outcomes import Outcome, OutcomeKind
from .fruit_handler import FruitHandler
from .greeting import GreetingService

__all__ = ["Outcome", "OutcomeKind", "FruitHandler", "GreetingService"]
