"""Message descriptors: the id/default-message pairs code asks to format.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from dataclasses import dataclass

__all__ = ["MessageDescriptor", "define_messages"]


@dataclass(frozen=True, slots=True)
class MessageDescriptor:
    """Identifies a translatable message.

    Attributes:
        id: Key into the active locale's messages; also the last-resort output
        default_message: Source-language ICU template, used when no
            translation exists or the translation fails
        description: Context for translators (never rendered)

    Example:
        >>> greeting = MessageDescriptor("app.greeting", "Hello, {name}!")
        >>> greeting.id
        'app.greeting'
    """

    id: str
    default_message: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate fields at construction time.

        Raises:
            ValueError: If id is empty or not a string
            TypeError: If default_message is given and is not a string
        """
        if not isinstance(self.id, str) or not self.id:
            msg = f"Message descriptor id must be a non-empty string, got {self.id!r}"
            raise ValueError(msg)
        if self.default_message is not None and not isinstance(self.default_message, str):
            msg = f"default_message must be a string, got {type(self.default_message).__name__}"
            raise TypeError(msg)


def define_messages(
    messages: Mapping[str, MessageDescriptor | Mapping[str, str]],
) -> dict[str, MessageDescriptor]:
    """Declare a group of messages under local names.

    Plain mappings with ``id``/``default_message``/``description`` keys are
    converted; descriptors pass through unchanged. Extraction tools look for
    calls to this function.

    Example:
        >>> msgs = define_messages({
        ...     "greeting": {"id": "app.greeting", "default_message": "Hello, {name}!"},
        ... })
        >>> msgs["greeting"].default_message
        'Hello, {name}!'
    """
    result: dict[str, MessageDescriptor] = {}
    for key, value in messages.items():
        match value:
            case MessageDescriptor():
                result[key] = value
            case Mapping():
                unknown = set(value) - {"id", "default_message", "description"}
                if unknown:
                    msg = f"Unknown message descriptor fields for {key!r}: {sorted(unknown)}"
                    raise TypeError(msg)
                result[key] = MessageDescriptor(**value)
            case _:
                msg = f"Expected MessageDescriptor or mapping for {key!r}, got {type(value).__name__}"
                raise TypeError(msg)
    return result
