"""Interfaces of the collaborators the editor controller talks to."""

from typing import Any, Dict, List, Protocol, Set, Tuple, Union, runtime_checkable

from posteditor.models.post import Tag
from posteditor.models.session import Line

# (row, column), both 0-based
Location = Tuple[int, int]


@runtime_checkable
class TextBuffer(Protocol):
    """Editable text surface holding the post body."""

    def get_plain_content(self) -> str:
        """Current text with upload markers stripped."""
        ...

    def get_line(self, line_number: int) -> Line: ...

    def get_line_count(self) -> int: ...

    def line_number_of(self, line_or_ref: Union[Line, int]) -> int: ...

    def set_selection(self, start: Location, end: Location) -> None: ...

    def replace_range(self, text: str, start: Location, end: Location) -> None: ...

    def replace_selection(self, text: str) -> None: ...

    def disable(self) -> None: ...

    def enable(self) -> None: ...


class PersistedEntity(Protocol):
    """A post as tracked by the persistence layer."""

    tags: List[Tag]

    @property
    def is_new(self) -> bool: ...

    @property
    def is_dirty(self) -> bool: ...

    def changed_field_names(self) -> Set[str]: ...

    def field_values(self) -> Dict[str, Any]: ...

    def get(self, name: str) -> Any: ...

    def set(self, name: str, value: Any) -> None: ...

    def add_tag(self, name: str) -> Tag: ...

    def remove_tag(self, name: str) -> None: ...

    async def save(self) -> Dict[str, Any]:
        """Persist the entity, returning the fields the store updated."""
        ...


class Notifier(Protocol):
    """User-facing notifications."""

    def show_success(self, message: str) -> None: ...

    def show_error(self, error: Exception) -> None: ...
