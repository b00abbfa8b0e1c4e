from abc import ABC, abstractmethod
from datetime import datetime

ENTRY_TIME_FORMAT = "%Y-%m-%dT%H:%M"


class AbstractClock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        pass


class SystemClock(AbstractClock):
    """Wall clock as an aware local time, so durations across DST changes stay exact."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


def format_entry_time(moment: datetime) -> str:
    return moment.strftime(ENTRY_TIME_FORMAT)
