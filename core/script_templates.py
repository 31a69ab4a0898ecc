"""AppleScript instruction blocks generated by the handlers.

Every user-controlled value is escaped with ``applescript_quote`` before it is
substituted into a string literal. Raw ``applescript:`` payloads never pass
through here.
"""

from __future__ import annotations

from decimal import Decimal
from string import Template
from typing import Sequence

from core.text_utils import applescript_quote

PHONE_LABEL_PREFERENCE: Sequence[str] = ("mobile", "iPhone", "home", "work")

_OPEN_URL = Template('open location "$url"')

_CONTACT_LOOKUP = Template(
    """tell application "Contacts"
    set matchedPeople to (every person whose name starts with "$name")
    if (count of matchedPeople) is 0 then error "No contact matches $name"
    return name of item 1 of matchedPeople
end tell"""
)

_SEND_MESSAGE = Template(
    """set frontApp to (path to frontmost application as text)

-- grab the recipient's phone number
tell application "Contacts"
    set matchedPerson to first person whose name starts with "$recipient"
    set buddyPhone to missing value
    repeat with preferredLabel in $labels
        set labelledPhones to (phones of matchedPerson whose label is (preferredLabel as text))
        if (count of labelledPhones) > 0 then
            set buddyPhone to value of item 1 of labelledPhones
            exit repeat
        end if
    end repeat
    if buddyPhone is missing value then error "No phone number for " & (name of matchedPerson)
end tell

-- send the message over iMessage
tell application "Messages"
    set targetService to 1st service whose service type = iMessage
    set targetBuddy to buddy buddyPhone of targetService
    send "$message" to targetBuddy
end tell

tell application frontApp to activate"""
)

_ADD_EVENT = Template(
    """set frontApp to (path to frontmost application as text)
set startDate to date "$start_date"
set endDate to startDate + ($duration * hours)

tell application "Calendar"
    tell calendar "$calendar"
        make new event at end with properties {summary:"$summary", start date:startDate, end date:endDate, location:"$location"}
    end tell
end tell

tell application frontApp to activate"""
)

_AVAILABILITIES = Template(
    """set dayStart to current date
set time of dayStart to 0
set dayEnd to dayStart + (1 * days)
set report to ""

tell application "Calendar"
    tell calendar "$calendar"
        set todaysEvents to (every event whose start date >= dayStart and start date < dayEnd)
        repeat with anEvent in todaysEvents
            set eventStart to start date of anEvent
            if excluded dates of anEvent does not contain eventStart then
                if allday event of anEvent then
                    set report to report & "all day" & linefeed
                else
                    set report to report & my clockText(eventStart) & " - " & my clockText(end date of anEvent) & linefeed
                end if
            end if
        end repeat
    end tell
end tell

return report

on clockText(aDate)
    set hourText to (hours of aDate) as text
    if (count of hourText) < 2 then set hourText to " " & hourText
    set minuteText to text -2 thru -1 of ("0" & ((minutes of aDate) as text))
    return hourText & ":" & minuteText
end clockText"""
)


def _applescript_list(values: Sequence[str]) -> str:
    return "{" + ", ".join(f'"{applescript_quote(value)}"' for value in values) + "}"


def _format_hours(value: float) -> str:
    # Shortest round-trip digits, never in exponent form.
    return format(Decimal(repr(float(value))).normalize(), "f")


def build_open_url_script(url: str) -> str:
    return _OPEN_URL.substitute(url=applescript_quote(url))


def build_contact_lookup_script(name: str) -> str:
    """Script returning the full name of the first contact whose name starts with ``name``."""
    return _CONTACT_LOOKUP.substitute(name=applescript_quote(name))


def build_send_message_script(recipient: str, message: str) -> str:
    return _SEND_MESSAGE.substitute(
        recipient=applescript_quote(recipient),
        message=applescript_quote(message),
        labels=_applescript_list(PHONE_LABEL_PREFERENCE),
    )


def build_add_event_script(
    *,
    summary: str,
    start_date: str,
    duration_hours: float,
    location: str,
    calendar: str,
) -> str:
    return _ADD_EVENT.substitute(
        summary=applescript_quote(summary),
        start_date=applescript_quote(start_date),
        duration=_format_hours(duration_hours),
        location=applescript_quote(location),
        calendar=applescript_quote(calendar),
    )


def build_availabilities_script(calendar: str) -> str:
    """Script listing today's events as ``HH:MM - HH:MM`` or ``all day`` lines."""
    return _AVAILABILITIES.substitute(calendar=applescript_quote(calendar))


__all__ = [
    "PHONE_LABEL_PREFERENCE",
    "build_add_event_script",
    "build_availabilities_script",
    "build_contact_lookup_script",
    "build_open_url_script",
    "build_send_message_script",
]
