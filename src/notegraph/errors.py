from __future__ import annotations


class NotegraphError(Exception):
    pass


class DuplicateTitleError(NotegraphError):
    """Two files in one scan resolve to the same note title."""

    def __init__(self, title: str, first_path: str, second_path: str) -> None:
        self.title = title
        self.first_path = first_path
        self.second_path = second_path
        super().__init__(f"Duplicate note title {title!r}: {first_path} and {second_path}")


class UnknownNoteError(NotegraphError):
    def __init__(self, title: str) -> None:
        self.title = title
        super().__init__(f"No note titled {title!r} in this vault")
