from playgrounds.services.catalog import PlaygroundCatalog
from playgrounds.services.reputation import ReportOutcome, ReputationService
from playgrounds.services.scheduler import ReservationScheduler

__all__ = [
    "PlaygroundCatalog",
    "ReportOutcome",
    "ReputationService",
    "ReservationScheduler",
]
