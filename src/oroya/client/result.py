"""Tagged result of a store mutation.

`Ok.source` tells whether the value was persisted by the server ("remote")
or only applied to the local mirror because the server was unreachable
("local").
"""

from dataclasses import dataclass
from typing import Literal

Source = Literal["remote", "local"]


@dataclass(frozen=True)
class Ok[T]:
    value: T
    source: Source = "remote"

    @property
    def ok(self) -> bool:
        return True

    @property
    def is_local(self) -> bool:
        return self.source == "local"


@dataclass(frozen=True)
class Err:
    reason: str

    @property
    def ok(self) -> bool:
        return False


type Result[T] = Ok[T] | Err
