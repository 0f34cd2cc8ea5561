from flux_actions.action import Action, Functor
from flux_actions.core.events import EventBus
from flux_actions.core.payload import Replacement, is_sequence
from flux_actions.core.scheduler import Scheduler, get_scheduler
from flux_actions.errors import ChildNameConflict, FluxError, InvalidArgument
from flux_actions.hooks import AwaitResults, Hooks
from flux_actions.publisher import Publisher, Subscription

__all__ = [
    "Action",
    "AwaitResults",
    "ChildNameConflict",
    "EventBus",
    "FluxError",
    "Functor",
    "Hooks",
    "InvalidArgument",
    "Publisher",
    "Replacement",
    "Scheduler",
    "Subscription",
    "get_scheduler",
    "is_sequence",
]

__version__ = "0.1.0"
