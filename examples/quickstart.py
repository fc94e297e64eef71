"""Quickstart example for intlformat.

This example demonstrates message formatting with fallback, single-value
formatters, and a self-updating relative time.

Note: Examples print to the terminal. In an application, pass a render
strategy to the bindings to produce your UI's node type instead of text.
"""

import time
from datetime import UTC, datetime, timedelta

from intlformat import IntlConfig, IntlFormatter, MessageDescriptor, format_message, intl_provider
from intlformat.bindings import FormattedPlural, FormattedRelative

GREETING = MessageDescriptor("app.greeting", "Hello, {name}!")
INBOX = MessageDescriptor(
    "app.inbox",
    "{count, plural, =0 {No new messages} one {# new message} other {# new messages}}",
)

# Example 1: Default message
print("=" * 50)
print("Example 1: Default Message")
print("=" * 50)

intl = IntlFormatter(IntlConfig(locale="en"))
print(intl.format_message_text(GREETING, {"name": "Eric"}))
# Output: Hello, Eric!

# Example 2: Translations and fallback
print("\n" + "=" * 50)
print("Example 2: Translations and Fallback")
print("=" * 50)

with intl_provider(locale="fr", messages={"app.greeting": "Bonjour, {name}!"}):
    print(format_message(GREETING, {"name": "Eric"}))
    # Output: ('Bonjour, Eric!',)
    print(format_message(INBOX, {"count": 3}))
    # Output: ('3 new messages',)  (no French translation: default message)
    print(format_message(GREETING, {}))
    # Output: ('app.greeting',)  (every step failed: message id)

# Example 3: Plurals
print("\n" + "=" * 50)
print("Example 3: Plurals")
print("=" * 50)

for count in (0, 1, 1000):
    print(intl.format_message_text(INBOX, {"count": count}))
# Output:
# No new messages
# 1 new message
# 1,000 new messages

print(FormattedPlural(2, one="file", other="files", intl=intl).render())
# Output: files

# Example 4: Numbers, dates and times
print("\n" + "=" * 50)
print("Example 4: Numbers, Dates and Times")
print("=" * 50)

de = IntlFormatter(IntlConfig(locale="de-DE"))
when = datetime(2025, 10, 27, 14, 30, tzinfo=UTC)
print(de.format_number(1234.5))
# Output: 1.234,5
print(de.format_number(9.99, style="currency", currency="EUR"))
# Output: 9,99 €
print(de.format_date(when, "long"))
# Output: 27. Oktober 2025
print(de.format_time(when, "short", time_zone="Europe/Berlin"))
# Output: 15:30

# Example 5: Rich content
print("\n" + "=" * 50)
print("Example 5: Rich Content")
print("=" * 50)


class Link:
    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Link({self.text!r})"


print(intl.format_message(GREETING, {"name": Link("Eric")}))
# Output: ('Hello, ', Link('Eric'), '!')

# Example 6: Relative time that keeps itself current
print("\n" + "=" * 50)
print("Example 6: Self-updating Relative Time")
print("=" * 50)

posted = datetime.now(UTC) - timedelta(seconds=58)
relative = FormattedRelative(posted, intl=intl, update_interval_ms=1000)
relative.mount(print)
# Output: 58 seconds ago
time.sleep(2.5)
# Output: 59 seconds ago, then 1 minute ago
relative.unmount()

print("\n" + "=" * 50)
print("All examples completed successfully!")
print("=" * 50)
